"""Product aggregate — a sellable catalog item with its quantity on hand.

Stock Model:
    quantity: units on hand, never negative
    in_stock: derived flag, always equal to quantity > 0

Stock moves through ``withdraw_stock`` (order placement) and
``restock`` (order cancellation). Every aggregate write carries a version, so
two writers that read the same product cannot both persist a decrement.
Writers also serialise through ``storefront.product.locking`` and read
through ``ProductRepository.get_for_update``, so the second writer sees the
first one's decrement rather than failing on it.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from sqlalchemy.orm import Session

from storefront.domain import storefront
from storefront.exceptions import StockUnavailableError
from storefront.product.events import (
    ProductCreated,
    ProductDetailsUpdated,
    StockRestored,
    StockWithdrawn,
)


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    quantity = Integer(default=0, min_value=0)
    in_stock = Boolean(default=False)
    category_id = Identifier()
    image_url = String(max_length=1024)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, price, quantity=0, description=None, category_id=None, image_url=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            quantity=quantity,
            in_stock=quantity > 0,
            description=description,
            category_id=category_id,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=name,
                price=price,
                quantity=quantity,
                category_id=str(category_id) if category_id else None,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Catalog administration
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        """Apply a partial update.

        Only keys present in ``changes`` are touched. Setting ``quantity``
        recomputes ``in_stock``.
        """
        for field_name in ("name", "description", "price", "category_id", "image_url"):
            if field_name in changes:
                setattr(self, field_name, changes[field_name])

        if "quantity" in changes:
            self._set_quantity(changes["quantity"])

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                quantity=self.quantity,
            )
        )

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def can_supply(self, quantity):
        return self.quantity >= quantity

    def withdraw_stock(self, quantity, order_id=None):
        """Take ``quantity`` units off the shelf for an order."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if not self.can_supply(quantity):
            raise StockUnavailableError(self.id, self.name, self.quantity, quantity)

        previous = self.quantity
        self._set_quantity(previous - quantity)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockWithdrawn(
                product_id=str(self.id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                previous_quantity=previous,
                new_quantity=self.quantity,
            )
        )

    def restock(self, quantity, order_id=None):
        """Put ``quantity`` units back, e.g. from a cancelled order."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        previous = self.quantity
        self._set_quantity(previous + quantity)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockRestored(
                product_id=str(self.id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                previous_quantity=previous,
                new_quantity=self.quantity,
            )
        )

    def _set_quantity(self, quantity):
        if quantity is None or quantity < 0:
            raise ValidationError({"quantity": ["Quantity on hand cannot be negative"]})
        self.quantity = quantity
        self.in_stock = quantity > 0


@storefront.repository(part_of=Product)
class ProductRepository:
    def get_for_update(self, product_id) -> Product | None:
        """Fetch a product, row-locking it until the current transaction ends.

        Locks are only taken on SQL databases. Callers locking more than one
        product must ask for them in a fixed order (by id) to avoid deadlocks.
        """
        session = self._dao._get_session()
        if isinstance(session, Session):
            model = self._dao.database_model_cls
            session.query(model).filter(model.id == str(product_id)).with_for_update().first()
        return self._dao.query.filter(id=str(product_id)).all().first
