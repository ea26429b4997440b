"""In-memory email adapter. Nothing leaves the process."""

from email.utils import make_msgid

from storefront.notification.channel.email_port import EmailPort


class FakeEmailAdapter(EmailPort):
    """Keeps every delivered message in ``sent_emails`` for inspection.

    ``configure(should_succeed=False)`` makes every send fail with
    ``failure_reason`` until ``reset()`` is called.
    """

    def __init__(self):
        self.reset()

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email delivery failed"):
        self._failure = None if should_succeed else failure_reason

    def send(self, to: str, subject: str, body: str) -> dict:
        if self._failure is not None:
            return {"message_id": None, "status": "failed", "error": self._failure}

        message = {
            "message_id": make_msgid(domain="storefront.test"),
            "to": to,
            "subject": subject,
            "body": body,
        }
        self.sent_emails.append(message)
        return {"message_id": message["message_id"], "status": "sent"}

    def emails_to(self, address: str) -> list[dict]:
        return [message for message in self.sent_emails if message["to"] == address]

    def reset(self):
        self.sent_emails: list[dict] = []
        self._failure = None
