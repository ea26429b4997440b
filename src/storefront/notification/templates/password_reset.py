"""Password reset notice — sent when a reset token is issued."""

from storefront.notification.notification import NotificationKind


class PasswordResetTemplate:
    kind = NotificationKind.PASSWORD_RESET.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name") or "there"
        return {
            "subject": "Password Reset Request",
            "body": (
                f"Hi {name},\n\n"
                "A password reset was requested for your account. "
                f"The reset link expires at {context.get('expires_at') or 'soon'}.\n\n"
                "If you did not ask for this, you can ignore this email."
            ),
        }
