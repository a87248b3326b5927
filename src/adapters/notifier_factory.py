"""Notifier factory: creates the right messaging adapter based on config."""

from __future__ import annotations

from src.config import settings
from src.ports.notification_port import NotificationPort


def create_notifier() -> NotificationPort:
    """Return the notifier matching the NOTIFY_PROVIDER setting."""
    provider = settings.NOTIFY_PROVIDER.lower()

    if provider == "line":
        from src.adapters.line_notifier import LineNotifier

        return LineNotifier(settings.LINE_CHANNEL_ACCESS_TOKEN)

    if provider == "telegram":
        from src.adapters.telegram_notifier import TelegramNotifier

        return TelegramNotifier(token=settings.TELEGRAM_BOT_TOKEN)

    raise ValueError(f"Unknown NOTIFY_PROVIDER: {provider!r}")
