"""Order status update — sent on every status change."""

from storefront.notification.notification import NotificationKind


class OrderStatusUpdateTemplate:
    kind = NotificationKind.ORDER_STATUS_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        status = context.get("status", "")
        name = context.get("name") or "there"
        return {
            "subject": f"Order Update: {status.upper()} - #{order_id}",
            "body": (
                f"Hi {name},\n\n"
                f"Your order #{order_id} is now {status}.\n\n"
                "Thank you for shopping with us!"
            ),
        }
