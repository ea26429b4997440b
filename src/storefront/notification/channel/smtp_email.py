"""SMTP email adapter — delivers through a mail server using smtplib.

Settings come from the environment: SMTP_HOST, SMTP_PORT, SMTP_USER,
SMTP_PASSWORD, SMTP_USE_TLS and EMAIL_FROM.
"""

import os
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from storefront.notification.channel.email_port import EmailPort


class SMTPEmailAdapter(EmailPort):
    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool | None = None,
        sender: str | None = None,
        timeout: float = 10.0,
    ):
        self.host = host or os.getenv("SMTP_HOST", "localhost")
        self.port = port or int(os.getenv("SMTP_PORT", "587"))
        self.username = username if username is not None else os.getenv("SMTP_USER")
        self.password = password if password is not None else os.getenv("SMTP_PASSWORD")
        if use_tls is None:
            use_tls = os.getenv("SMTP_USE_TLS", "true").lower() in ("1", "true", "yes")
        self.use_tls = use_tls
        self.sender = sender or os.getenv("EMAIL_FROM", "Your Store <no-reply@localhost>")
        self.timeout = timeout

    def build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content(body)
        return message

    def send(self, to: str, subject: str, body: str) -> dict:
        message = self.build_message(to, subject, body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
                if self.use_tls:
                    client.starttls()
                if self.username:
                    client.login(self.username, self.password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}
