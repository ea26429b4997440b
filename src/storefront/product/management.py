"""Product management — commands, handler and read helpers."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.product.product import Product

# Fields an administrator may patch on an existing product
PATCHABLE_FIELDS = ("name", "price", "description", "category_id", "quantity", "image_url")


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=0)
    description = Text()
    category_id = Identifier()
    image_url = String(max_length=1024)


@storefront.command(part_of="Product")
class UpdateProduct:
    """Partial update; unset fields are left untouched."""

    product_id = Identifier(required=True)
    name = String(max_length=255)
    price = Float(min_value=0.0)
    quantity = Integer(min_value=0)
    description = Text()
    category_id = Identifier()
    image_url = String(max_length=1024)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        if command.category_id:
            # Raises ObjectNotFoundError for an unknown category
            current_domain.repository_for(Category).get(command.category_id)

        product = Product.create(
            name=command.name,
            price=command.price,
            quantity=command.quantity,
            description=command.description,
            category_id=command.category_id,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        changes = {
            field_name: getattr(command, field_name)
            for field_name in PATCHABLE_FIELDS
            if getattr(command, field_name) is not None
        }
        if "category_id" in changes:
            current_domain.repository_for(Category).get(changes["category_id"])

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(**changes)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)


def list_products(category_id=None):
    query = current_domain.repository_for(Product)._dao.query
    if category_id:
        query = query.filter(category_id=category_id)
    return query.order_by("name").all().items


def get_product(product_id):
    return current_domain.repository_for(Product).get(product_id)
