"""Administrative status changes."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.order.stock import restore_stock
from storefront.product.locking import stock_lock


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.change_status(command.status)
        if order.status == OrderStatus.CANCELLED.value:
            restore_stock(order)
        repo.add(order)


def update_order_status(order_id, status):
    with stock_lock():
        current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)
