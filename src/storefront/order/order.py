"""Order aggregate — an immutable record of what was bought, at what price.

Line items are snapshots taken at placement time; later catalog changes
never alter an order. After placement only the status (and the bookkeeping
fields that go with it) changes.

State Machine:
    pending → confirmed → shipped → delivered
    pending/confirmed → cancelled

Entering ``cancelled`` hands the line quantities back to the catalog exactly
once, tracked by ``stock_restored``.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.exceptions import InvalidStatusTransitionError
from storefront.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def allowed_transitions(status):
    return _VALID_TRANSITIONS[OrderStatus(status)]


def parse_status(value):
    """Return the ``OrderStatus`` for ``value`` or raise ValidationError."""
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError({"status": [f"Invalid status \"{value}\". Allowed values: {allowed}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class Address:
    """A shipping or billing address captured when the order is placed."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """Snapshot of one cart line: product, name and price as they were at placement."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    stock_restored = Boolean(default=False)
    shipping_address = ValueObject(Address)
    billing_address = ValueObject(Address)
    created_at = DateTime()
    updated_at = DateTime()
    cancelled_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines, shipping_address=None, billing_address=None):
        """Create a pending order.

        Args:
            user_id: The buyer.
            lines: List of dicts with product_id, product_name, unit_price, quantity.
            shipping_address: Optional ``Address``.
            billing_address: Optional ``Address``.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        items = [OrderItem(**line) for line in lines]
        total = sum(item.line_total for item in items)

        order = cls(
            user_id=user_id,
            items=items,
            total_amount=round(total, 2),
            status=OrderStatus.PENDING.value,
            shipping_address=shipping_address,
            billing_address=billing_address,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                total_amount=order.total_amount,
                item_count=sum(item.quantity for item in items),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def can_transition_to(self, target_status):
        return parse_status(target_status) in allowed_transitions(self.status)

    def change_status(self, new_status):
        """Move to ``new_status`` if the state machine allows it."""
        target = parse_status(new_status)
        current = OrderStatus(self.status)
        if target not in _VALID_TRANSITIONS[current]:
            raise InvalidStatusTransitionError(current.value, target.value)

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        if target == OrderStatus.CANCELLED:
            self.cancelled_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    def cancel(self):
        self.change_status(OrderStatus.CANCELLED.value)

    def release_stock(self):
        """Return ``(product_id, quantity)`` pairs to put back on the shelf.

        Yields the lines only the first time it is called on a cancelled order;
        afterwards it returns an empty list.
        """
        if OrderStatus(self.status) != OrderStatus.CANCELLED or self.stock_restored:
            return []
        self.stock_restored = True
        return [(str(item.product_id), item.quantity) for item in self.items]


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        """The user's orders, newest first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items

    def page(self, status=None, offset=0, limit=20):
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return query.order_by("-created_at").offset(offset).limit(limit).all()
