"""Notification aggregate — one message sent to one user through one channel.

State Machine:
    PENDING → SENT
    PENDING → FAILED

Delivery is best-effort: a failed notification is recorded with its reason
and never retried.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront
from storefront.notification.events import NotificationCreated, NotificationFailed, NotificationSent


class NotificationKind(Enum):
    ORDER_CONFIRMATION = "OrderConfirmation"
    ORDER_STATUS_UPDATE = "OrderStatusUpdate"
    WELCOME = "Welcome"
    PASSWORD_RESET = "PasswordReset"


class NotificationChannel(Enum):
    EMAIL = "Email"


class NotificationStatus(Enum):
    PENDING = "Pending"
    SENT = "Sent"
    FAILED = "Failed"


@storefront.aggregate
class Notification:
    """A message to a user, kept for audit whether or not it went out."""

    # Recipient
    recipient_id: Identifier(required=True)
    recipient_address: String(required=True, max_length=254)

    kind: String(choices=NotificationKind, required=True)
    channel: String(choices=NotificationChannel, default=NotificationChannel.EMAIL.value)

    # Content
    subject: String(max_length=500)
    body: Text(required=True)

    # Source correlation
    order_id: Identifier()

    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    failure_reason: String(max_length=500)
    sent_at: DateTime()

    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(
        cls,
        recipient_id,
        recipient_address,
        kind,
        body,
        subject=None,
        channel=NotificationChannel.EMAIL.value,
        order_id=None,
    ):
        """Create a new notification in PENDING status."""
        now = datetime.now(UTC)
        notification = cls(
            recipient_id=recipient_id,
            recipient_address=recipient_address,
            kind=kind,
            channel=channel,
            subject=subject,
            body=body,
            order_id=order_id,
            status=NotificationStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient_id=str(recipient_id),
                kind=kind,
                channel=channel,
                order_id=str(order_id) if order_id else None,
                created_at=now,
            )
        )
        return notification

    def _assert_pending(self):
        if NotificationStatus(self.status) != NotificationStatus.PENDING:
            raise ValidationError({"status": [f"Notification is already {self.status}"]})

    def mark_sent(self):
        self._assert_pending()

        now = datetime.now(UTC)
        self.status = NotificationStatus.SENT.value
        self.sent_at = now
        self.updated_at = now

        self.raise_(
            NotificationSent(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel=self.channel,
                sent_at=now,
            )
        )

    def mark_failed(self, reason):
        self._assert_pending()

        now = datetime.now(UTC)
        self.status = NotificationStatus.FAILED.value
        self.failure_reason = (reason or "Unknown dispatch error")[:500]
        self.updated_at = now

        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel=self.channel,
                reason=self.failure_reason,
                failed_at=now,
            )
        )


@storefront.repository(part_of=Notification)
class NotificationRepository:
    def for_recipient(self, recipient_id) -> list[Notification]:
        return self._dao.query.filter(recipient_id=str(recipient_id)).order_by("-created_at").all().items

    def for_order(self, order_id) -> list[Notification]:
        return self._dao.query.filter(order_id=str(order_id)).order_by("created_at").all().items
