"""Order confirmation — sent when an order is placed."""

from storefront.notification.notification import NotificationKind


class OrderConfirmationTemplate:
    kind = NotificationKind.ORDER_CONFIRMATION.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        name = context.get("name") or "there"
        lines = "\n".join(
            f"  - {item['name']} x {item['quantity']} @ {item['price']:.2f}" for item in context.get("items", [])
        )
        total = float(context.get("total", 0.0))
        return {
            "subject": f"Order Confirmation - {order_id}",
            "body": (
                f"Hi {name},\n\n"
                f"Thank you for your order #{order_id}.\n\n"
                f"{lines}\n\n"
                f"Order Total: {total:.2f}\n\n"
                "We'll let you know when its status changes."
            ),
        }
