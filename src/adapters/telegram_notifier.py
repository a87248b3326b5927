"""Telegram notification adapter: implements NotificationPort.

Wraps a telegram.Bot instance to satisfy the NotificationPort protocol.
The Bot is built on first use, so a missing token only fails the calls
that need it and never blocks startup.
"""

from __future__ import annotations

import logging

from telegram import Bot
from telegram.error import TelegramError

from src.ports.notification_port import NotificationError, Profile

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """Telegram implementation of NotificationPort."""

    def __init__(self, bot: Bot | None = None, token: str = "") -> None:
        self._bot = bot
        self._token = token

    def _get_bot(self) -> Bot:
        if self._bot is None:
            if not self._token:
                raise NotificationError("TELEGRAM_BOT_TOKEN is not set")
            try:
                self._bot = Bot(token=self._token)
            except TelegramError as exc:
                raise NotificationError(f"Invalid Telegram bot token: {exc}", exc.message) from exc
        return self._bot

    async def send_message(self, destination_id: str, text: str) -> None:
        bot = self._get_bot()
        try:
            await bot.send_message(chat_id=destination_id, text=text)
        except TelegramError as exc:
            raise NotificationError(f"Telegram send failed: {exc}", exc.message) from exc

    async def get_profile(self, destination_id: str) -> Profile:
        bot = self._get_bot()
        try:
            chat = await bot.get_chat(chat_id=destination_id)
        except TelegramError as exc:
            raise NotificationError(f"Telegram get_chat failed: {exc}", exc.message) from exc
        return Profile(
            user_id=str(chat.id),
            display_name=chat.title or chat.full_name or "",
        )
