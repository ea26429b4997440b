"""Category aggregate — groups products in the catalog."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Category:
    name = String(required=True, max_length=100)
    description = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, description=None):
        from storefront.category.events import CategoryCreated

        now = datetime.now(UTC)
        category = cls(
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=str(category.id),
                name=name,
            )
        )
        return category

    def update_details(self, name=None, description=None):
        from storefront.category.events import CategoryUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryUpdated(
                category_id=str(self.id),
                name=self.name,
            )
        )
