"""FastAPI endpoints for categories and products.

Reads are public; writes need an admin token.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import require_admin
from storefront.api.schemas import (
    CategoryRequest,
    CategoryResponse,
    CreateProductRequest,
    ProductResponse,
    StatusResponse,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from storefront.category.management import (
    CreateCategory,
    DeleteCategory,
    UpdateCategory,
    get_category,
    list_categories,
)
from storefront.product.management import (
    CreateProduct,
    DeleteProduct,
    UpdateProduct,
    get_product,
    list_products,
)

category_router = APIRouter(prefix="/categories", tags=["categories"])
product_router = APIRouter(prefix="/products", tags=["products"])


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def all_categories() -> list[CategoryResponse]:
    return [CategoryResponse.from_category(category) for category in list_categories()]


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def one_category(category_id: str) -> CategoryResponse:
    return CategoryResponse.from_category(get_category(category_id))


@category_router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(body: CategoryRequest, admin=Depends(require_admin)) -> CategoryResponse:
    category_id = current_domain.process(
        CreateCategory(name=body.name, description=body.description),
        asynchronous=False,
    )
    return CategoryResponse.from_category(get_category(category_id))


@category_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, admin=Depends(require_admin)
) -> CategoryResponse:
    current_domain.process(
        UpdateCategory(category_id=category_id, name=body.name, description=body.description),
        asynchronous=False,
    )
    return CategoryResponse.from_category(get_category(category_id))


@category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str, admin=Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse(message="Category deleted")


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def all_products(category_id: str | None = None) -> list[ProductResponse]:
    return [ProductResponse.from_product(product) for product in list_products(category_id)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def one_product(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(get_product(product_id))


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, admin=Depends(require_admin)) -> ProductResponse:
    product_id = current_domain.process(
        CreateProduct(
            name=body.name,
            price=body.price,
            quantity=body.quantity,
            description=body.description,
            category_id=body.category_id,
            image_url=body.image_url,
        ),
        asynchronous=False,
    )
    return ProductResponse.from_product(get_product(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest, admin=Depends(require_admin)) -> ProductResponse:
    current_domain.process(
        UpdateProduct(product_id=product_id, **body.model_dump(exclude_none=True)),
        asynchronous=False,
    )
    return ProductResponse.from_product(get_product(product_id))


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, admin=Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(message="Product deleted")
