"""Order cancellation by its owner.

An order that has left the warehouse (shipped or delivered) can no longer be
cancelled by the shopper; that request is rejected as invalid. Cancelling an
order that is already cancelled is a conflict, like any illegal transition.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.order.stock import restore_stock
from storefront.product.locking import stock_lock

_DISPATCHED = (OrderStatus.SHIPPED.value, OrderStatus.DELIVERED.value)


@storefront.command(part_of="Order")
class CancelOrder:
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        # Someone else's order is reported exactly like a missing one
        if str(order.user_id) != str(command.user_id):
            raise ObjectNotFoundError({"_entity": [f"Order {command.order_id} not found"]})

        if order.status in _DISPATCHED:
            raise ValidationError({"status": [f"Order is already {order.status} and can no longer be cancelled"]})

        order.cancel()
        restore_stock(order)
        repo.add(order)


def cancel_order(user_id, order_id):
    """Cancel one of ``user_id``'s orders and put its stock back."""
    with stock_lock():
        current_domain.process(CancelOrder(user_id=str(user_id), order_id=order_id), asynchronous=False)
