"""Admin-only endpoints: user listing and order management."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import require_admin
from storefront.api.schemas import OrderPageResponse, OrderResponse, UpdateOrderStatusRequest, UserResponse
from storefront.order.order import Order, parse_status
from storefront.order.queries import list_all_orders
from storefront.order.status import update_order_status
from storefront.user.authentication import list_users

admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@admin_router.get("/users", response_model=list[UserResponse])
async def all_users() -> list[UserResponse]:
    return [UserResponse.from_user(user) for user in list_users()]


@admin_router.get("/orders", response_model=OrderPageResponse)
async def all_orders(status: str | None = None, page: int = 1, limit: int = 20) -> OrderPageResponse:
    result = list_all_orders(status=status, page=page, limit=limit)
    return OrderPageResponse(
        orders=[OrderResponse.from_order(order) for order in result["orders"]],
        page=result["page"],
        limit=result["limit"],
        total=result["total"],
        total_pages=result["total_pages"],
    )


@admin_router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def update_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    # Unknown values are rejected before the order is loaded
    status = parse_status(body.status).value
    update_order_status(order_id, status)
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))
