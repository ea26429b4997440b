"""Compose, record and send a notification to one user.

The message is recorded first, then handed to the channel adapter, then the
outcome (Sent or Failed) is persisted.
"""

from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.notification.channel import get_channel
from storefront.notification.notification import Notification
from storefront.notification.templates import get_template
from storefront.user.user import User


def notify_user(user_id, kind: str, context: dict, order_id=None):
    """Send a ``kind`` notification to ``user_id``.

    Returns the Notification, or None when the user cannot be found.
    """
    user = current_domain.repository_for(User)._dao.query.filter(id=str(user_id)).all().first
    if user is None:
        logger.warning("notification_recipient_missing", user_id=str(user_id), kind=kind)
        return None

    rendered = get_template(kind).render({"name": user.name, "email": user.email, **context})
    notification = Notification.create(
        recipient_id=str(user.id),
        recipient_address=user.email,
        kind=kind,
        subject=rendered.get("subject"),
        body=rendered["body"],
        order_id=order_id,
    )

    try:
        result = get_channel(notification.channel).send(
            to=notification.recipient_address,
            subject=notification.subject or "",
            body=notification.body,
        )
    except Exception as exc:
        result = {"status": "failed", "error": str(exc)}

    if result.get("status") == "sent":
        notification.mark_sent()
        logger.info("notification_sent", notification_id=str(notification.id), kind=kind, to=user.email)
    else:
        notification.mark_failed(result.get("error"))
        logger.error(
            "notification_failed",
            notification_id=str(notification.id),
            kind=kind,
            to=user.email,
            error=notification.failure_reason,
        )

    current_domain.repository_for(Notification).add(notification)
    return notification
