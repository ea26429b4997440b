"""Domain events for the Category aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)


@storefront.event(part_of="Category")
class CategoryUpdated:
    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)
