"""Tests for the email channel adapters and their registry."""

import smtplib
from unittest.mock import patch

import pytest

from storefront.notification.channel import get_channel, reset_channels
from storefront.notification.channel.fake_email import FakeEmailAdapter
from storefront.notification.channel.smtp_email import SMTPEmailAdapter


class TestFakeEmailAdapter:
    def setup_method(self):
        self.adapter = FakeEmailAdapter()

    def test_send_records_email(self):
        result = self.adapter.send(to="test@example.com", subject="Hi", body="Hello!")
        assert result["status"] == "sent"
        assert result["message_id"] is not None
        assert len(self.adapter.sent_emails) == 1
        assert self.adapter.sent_emails[0]["to"] == "test@example.com"

    def test_send_failure(self):
        self.adapter.configure(should_succeed=False, failure_reason="Mailbox full")
        result = self.adapter.send(to="a@b.com", subject="Hi", body="Hello")
        assert result == {"message_id": None, "status": "failed", "error": "Mailbox full"}
        assert self.adapter.sent_emails == []

    def test_reset(self):
        self.adapter.send(to="a@b.com", subject="Hi", body="Hello")
        self.adapter.configure(should_succeed=False)
        self.adapter.reset()
        assert self.adapter.sent_emails == []
        assert self.adapter.send(to="a@b.com", subject="Hi", body="Hello")["status"] == "sent"


class TestSMTPEmailAdapter:
    def setup_method(self):
        self.adapter = SMTPEmailAdapter(
            host="mail.example.com",
            port=2525,
            username="shop",
            password="s3cret",
            use_tls=True,
            sender="Shop <no-reply@example.com>",
        )

    def test_send_delivers_over_starttls_with_login(self):
        with patch.object(smtplib, "SMTP") as smtp_cls:
            result = self.adapter.send(to="jane@example.com", subject="Order confirmed", body="Thanks!")

        smtp_cls.assert_called_once_with("mail.example.com", 2525, timeout=10.0)
        client = smtp_cls.return_value.__enter__.return_value
        client.starttls.assert_called_once_with()
        client.login.assert_called_once_with("shop", "s3cret")
        client.send_message.assert_called_once()

        message = client.send_message.call_args.args[0]
        assert message["To"] == "jane@example.com"
        assert message["From"] == "Shop <no-reply@example.com>"
        assert message["Subject"] == "Order confirmed"
        assert message.get_content().strip() == "Thanks!"
        assert result == {"message_id": message["Message-ID"], "status": "sent"}

    def test_plain_connection_without_credentials(self):
        adapter = SMTPEmailAdapter(host="localhost", port=25, username="", use_tls=False)

        with patch.object(smtplib, "SMTP") as smtp_cls:
            result = adapter.send(to="jane@example.com", subject="Hi", body="Hello")

        client = smtp_cls.return_value.__enter__.return_value
        client.starttls.assert_not_called()
        client.login.assert_not_called()
        client.send_message.assert_called_once()
        assert result["status"] == "sent"

    def test_unreachable_server_reports_failure(self):
        with patch.object(smtplib, "SMTP", side_effect=OSError("Connection refused")):
            result = self.adapter.send(to="jane@example.com", subject="Hi", body="Hello")

        assert result == {"message_id": None, "status": "failed", "error": "Connection refused"}

    def test_rejected_login_reports_failure(self):
        with patch.object(smtplib, "SMTP") as smtp_cls:
            client = smtp_cls.return_value.__enter__.return_value
            client.login.side_effect = smtplib.SMTPAuthenticationError(535, b"Bad credentials")
            result = self.adapter.send(to="jane@example.com", subject="Hi", body="Hello")

        client.send_message.assert_not_called()
        assert result["status"] == "failed"
        assert result["message_id"] is None
        assert "Bad credentials" in result["error"]

    def test_settings_come_from_environment(self, monkeypatch):
        monkeypatch.setenv("SMTP_HOST", "smtp.internal")
        monkeypatch.setenv("SMTP_PORT", "465")
        monkeypatch.setenv("SMTP_USER", "mailer")
        monkeypatch.setenv("SMTP_PASSWORD", "pw")
        monkeypatch.setenv("SMTP_USE_TLS", "false")
        monkeypatch.setenv("EMAIL_FROM", "Store <store@example.com>")

        adapter = SMTPEmailAdapter()

        assert (adapter.host, adapter.port) == ("smtp.internal", 465)
        assert (adapter.username, adapter.password) == ("mailer", "pw")
        assert adapter.use_tls is False
        assert adapter.sender == "Store <store@example.com>"


class TestChannelRegistry:
    def setup_method(self):
        reset_channels()

    def teardown_method(self):
        reset_channels()

    def test_fake_adapter_by_default(self, monkeypatch):
        monkeypatch.delenv("EMAIL_ADAPTER", raising=False)
        channel = get_channel()
        assert isinstance(channel, FakeEmailAdapter)
        assert get_channel() is channel

    def test_smtp_adapter_when_configured(self, monkeypatch):
        monkeypatch.setenv("EMAIL_ADAPTER", "smtp")
        assert isinstance(get_channel(), SMTPEmailAdapter)

    def test_unknown_adapter(self, monkeypatch):
        monkeypatch.setenv("EMAIL_ADAPTER", "pigeon")
        with pytest.raises(ValueError, match="Unknown email adapter"):
            get_channel()

    def test_unknown_channel_type(self):
        with pytest.raises(ValueError, match="Unknown channel type"):
            get_channel("sms")
