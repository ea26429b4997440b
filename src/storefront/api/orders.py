"""FastAPI endpoints for the caller's own orders."""

from fastapi import APIRouter, Depends

from storefront.api.auth import current_user
from storefront.api.schemas import OrderListResponse, OrderResponse, PlaceOrderRequest
from storefront.order import cancellation
from storefront.order.placement import place_order
from storefront.order.queries import get_order_for_user, list_orders_for_user

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: PlaceOrderRequest | None = None, user=Depends(current_user)) -> OrderResponse:
    body = body or PlaceOrderRequest()
    order_id = place_order(
        user_id=str(user.id),
        shipping_address=body.shipping_address.model_dump() if body.shipping_address else None,
        billing_address=body.billing_address.model_dump() if body.billing_address else None,
    )
    return OrderResponse.from_order(get_order_for_user(user.id, order_id))


@order_router.get("", response_model=OrderListResponse)
async def my_orders(user=Depends(current_user)) -> OrderListResponse:
    orders = list_orders_for_user(user.id)
    return OrderListResponse(count=len(orders), orders=[OrderResponse.from_order(order) for order in orders])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def one_order(order_id: str, user=Depends(current_user)) -> OrderResponse:
    return OrderResponse.from_order(get_order_for_user(user.id, order_id))


@order_router.patch("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, user=Depends(current_user)) -> OrderResponse:
    cancellation.cancel_order(user.id, order_id)
    return OrderResponse.from_order(get_order_for_user(user.id, order_id))
