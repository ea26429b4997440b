"""FastAPI endpoints for a user's shopping cart."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import require_self_or_admin
from storefront.api.schemas import AddCartItemRequest, CartResponse, StatusResponse, UpdateCartItemRequest
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from storefront.cart.view import cart_for_user

cart_router = APIRouter(prefix="/cart", tags=["cart"], dependencies=[Depends(require_self_or_admin)])


@cart_router.get("/{user_id}", response_model=CartResponse)
async def get_cart(user_id: str) -> CartResponse:
    return CartResponse(**cart_for_user(user_id))


@cart_router.post("/{user_id}/items", response_model=CartResponse)
async def add_item(user_id: str, body: AddCartItemRequest) -> CartResponse:
    current_domain.process(
        AddToCart(user_id=user_id, product_id=body.product_id, quantity=body.quantity),
        asynchronous=False,
    )
    return CartResponse(**cart_for_user(user_id))


@cart_router.put("/{user_id}/items/{item_id}", response_model=CartResponse)
async def update_item(user_id: str, item_id: str, body: UpdateCartItemRequest) -> CartResponse:
    current_domain.process(
        UpdateCartItem(user_id=user_id, item_id=item_id, quantity=body.quantity),
        asynchronous=False,
    )
    return CartResponse(**cart_for_user(user_id))


@cart_router.delete("/{user_id}/items/{item_id}", response_model=CartResponse)
async def remove_item(user_id: str, item_id: str) -> CartResponse:
    current_domain.process(RemoveFromCart(user_id=user_id, item_id=item_id), asynchronous=False)
    return CartResponse(**cart_for_user(user_id))


@cart_router.delete("/{user_id}", response_model=StatusResponse)
async def clear_cart(user_id: str) -> StatusResponse:
    current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return StatusResponse(message="Cart cleared")
