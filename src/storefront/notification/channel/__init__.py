"""Channel adapter registry.

Provides singleton access to channel adapters. The fake email adapter is the
default; ``EMAIL_ADAPTER=smtp`` switches to real delivery.
"""

import os

from storefront.notification.notification import NotificationChannel

_channel_instances: dict[str, object] = {}


def get_channel(channel_type: str = NotificationChannel.EMAIL.value):
    """Return the configured channel adapter (singleton per channel type)."""
    if channel_type not in _channel_instances:
        if channel_type != NotificationChannel.EMAIL.value:
            raise ValueError(f"Unknown channel type: {channel_type}")

        adapter = os.getenv("EMAIL_ADAPTER", "fake").lower()
        if adapter == "smtp":
            from storefront.notification.channel.smtp_email import SMTPEmailAdapter

            _channel_instances[channel_type] = SMTPEmailAdapter()
        elif adapter == "fake":
            from storefront.notification.channel.fake_email import FakeEmailAdapter

            _channel_instances[channel_type] = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown email adapter: {adapter}")

    return _channel_instances[channel_type]


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()
