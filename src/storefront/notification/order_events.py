"""Notifications reacting to Order events.

Sends an order confirmation on OrderPlaced and a status update on
OrderStatusChanged. Failures are logged and never reach the order flow.
"""

from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import logger, storefront
from storefront.notification.dispatch import notify_user
from storefront.notification.notification import Notification, NotificationKind
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order


@storefront.event_handler(part_of=Notification, stream_category="storefront::order")
class OrderEventsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        try:
            order = current_domain.repository_for(Order).get(event.order_id)
            notify_user(
                event.user_id,
                NotificationKind.ORDER_CONFIRMATION.value,
                {
                    "order_id": str(order.id),
                    "total": order.total_amount,
                    "items": [
                        {"name": item.product_name, "quantity": item.quantity, "price": item.unit_price}
                        for item in order.items
                    ],
                },
                order_id=str(order.id),
            )
        except Exception as exc:
            logger.error("order_confirmation_failed", order_id=str(event.order_id), error=str(exc))

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        try:
            notify_user(
                event.user_id,
                NotificationKind.ORDER_STATUS_UPDATE.value,
                {"order_id": str(event.order_id), "status": event.new_status},
                order_id=str(event.order_id),
            )
        except Exception as exc:
            logger.error(
                "order_status_notification_failed",
                order_id=str(event.order_id),
                status=event.new_status,
                error=str(exc),
            )
