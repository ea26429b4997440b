"""Welcome template — sent when a user registers."""

from storefront.notification.notification import NotificationKind


class WelcomeTemplate:
    kind = NotificationKind.WELCOME.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name") or "there"
        return {
            "subject": "Welcome to Our Platform!",
            "body": (
                f"Hi {name},\n\n"
                f"Your account ({context.get('email', '')}) is ready. Happy shopping!"
            ),
        }
