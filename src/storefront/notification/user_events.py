"""Notifications reacting to User events: welcome and password reset emails."""

from protean.utils.mixins import handle

from storefront.domain import logger, storefront
from storefront.notification.dispatch import notify_user
from storefront.notification.notification import Notification, NotificationKind
from storefront.user.events import PasswordResetRequested, UserRegistered


@storefront.event_handler(part_of=Notification, stream_category="storefront::user")
class UserEventsHandler:
    @handle(UserRegistered)
    def on_user_registered(self, event: UserRegistered) -> None:
        try:
            notify_user(event.user_id, NotificationKind.WELCOME.value, {})
        except Exception as exc:
            logger.error("welcome_notification_failed", user_id=str(event.user_id), error=str(exc))

    @handle(PasswordResetRequested)
    def on_password_reset_requested(self, event: PasswordResetRequested) -> None:
        try:
            notify_user(
                event.user_id,
                NotificationKind.PASSWORD_RESET.value,
                {"expires_at": event.expires_at.isoformat() if event.expires_at else None},
            )
        except Exception as exc:
            logger.error("password_reset_notification_failed", user_id=str(event.user_id), error=str(exc))
