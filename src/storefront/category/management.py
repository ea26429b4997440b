"""Category management — commands, handler and read helpers."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront


@storefront.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=100)
    description = Text()


@storefront.command(part_of="Category")
class UpdateCategory:
    """Partial update; only the fields listed here can be patched."""

    category_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id = Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(name=command.name, description=command.description)
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.update_details(name=command.name, description=command.description)
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)


def list_categories():
    return current_domain.repository_for(Category)._dao.query.order_by("name").all().items


def get_category(category_id):
    return current_domain.repository_for(Category).get(category_id)
