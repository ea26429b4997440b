"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Notification")
class NotificationCreated:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    kind: String(required=True)
    channel: String(required=True)
    order_id: Identifier()
    created_at: DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationSent:
    """The channel accepted the message."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel: String(required=True)
    sent_at: DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationFailed:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel: String(required=True)
    reason: String(required=True)
    failed_at: DateTime(required=True)
