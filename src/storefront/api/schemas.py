"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Jane Doe", "email": "jane.doe@example.com", "password": "s3cret-pass"}]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    token: str


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str = Field(..., min_length=1)


class CategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Espresso Cup",
                    "price": 12.5,
                    "quantity": 40,
                    "description": "Porcelain, 90ml",
                    "category_id": "cat-001",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    quantity: int = Field(0, ge=0)
    description: str | None = None
    category_id: str | None = None
    image_url: str | None = Field(None, max_length=1024)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, ge=0)
    quantity: int | None = Field(None, ge=0)
    description: str | None = None
    category_id: str | None = None
    image_url: str | None = Field(None, max_length=1024)


class AddCartItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class AddressSchema(BaseModel):
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)


class PlaceOrderRequest(BaseModel):
    shipping_address: AddressSchema | None = None
    billing_address: AddressSchema | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str


# --- Response Schemas ---


class StatusResponse(BaseModel):
    status: str = "ok"
    message: str | None = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )


class RegisterResponse(BaseModel):
    user_id: str
    token: str


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class TokenResponse(BaseModel):
    token: str


class ResetTokenResponse(BaseModel):
    reset_token: str
    message: str = "Reset token generated"


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str | None = None

    @classmethod
    def from_category(cls, category) -> CategoryResponse:
        return cls(id=str(category.id), name=category.name, description=category.description)


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    quantity: int
    in_stock: bool
    category_id: str | None = None
    image_url: str | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            quantity=product.quantity,
            in_stock=product.in_stock,
            category_id=str(product.category_id) if product.category_id else None,
            image_url=product.image_url,
        )


class CartProductResponse(BaseModel):
    id: str
    name: str
    price: float
    in_stock: bool
    quantity: int


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    quantity: int
    product: CartProductResponse | None = None


class CartResponse(BaseModel):
    id: str | None = None
    user_id: str
    items: list[CartItemResponse] = []


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    unit_price: float
    quantity: int


class OrderResponse(BaseModel):
    id: str
    user_id: str
    status: str
    total_amount: float
    items: list[OrderItemResponse]
    shipping_address: AddressSchema | None = None
    billing_address: AddressSchema | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        def _address(value):
            if value is None:
                return None
            return AddressSchema(
                street=value.street,
                city=value.city,
                state=value.state,
                postal_code=value.postal_code,
                country=value.country,
            )

        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            status=order.status,
            total_amount=order.total_amount,
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                )
                for item in order.items
            ],
            shipping_address=_address(order.shipping_address),
            billing_address=_address(order.billing_address),
            created_at=order.created_at,
            updated_at=order.updated_at,
            cancelled_at=order.cancelled_at,
        )


class OrderListResponse(BaseModel):
    count: int
    orders: list[OrderResponse]


class OrderPageResponse(BaseModel):
    orders: list[OrderResponse]
    page: int
    limit: int
    total: int
    total_pages: int
