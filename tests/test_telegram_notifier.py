"""Tests for src.adapters.telegram_notifier."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from telegram.error import TelegramError

from src.adapters.telegram_notifier import TelegramNotifier
from src.ports.notification_port import NotificationError, Profile


class TestTelegramNotifier:
    @pytest.mark.asyncio
    async def test_send_message(self):
        bot = AsyncMock()
        await TelegramNotifier(bot).send_message("-100123", "hello")
        bot.send_message.assert_called_once_with(chat_id="-100123", text="hello")

    @pytest.mark.asyncio
    async def test_send_failure_wrapped(self):
        bot = AsyncMock()
        bot.send_message.side_effect = TelegramError("Chat not found")

        with pytest.raises(NotificationError) as excinfo:
            await TelegramNotifier(bot).send_message("-100123", "hello")

        assert excinfo.value.detail == "Chat not found"

    @pytest.mark.asyncio
    async def test_group_profile_uses_title(self):
        chat = MagicMock(id=-100123, title="Raid Party", full_name=None)
        bot = AsyncMock()
        bot.get_chat.return_value = chat

        profile = await TelegramNotifier(bot).get_profile("-100123")

        assert profile == Profile(user_id="-100123", display_name="Raid Party")

    @pytest.mark.asyncio
    async def test_private_profile_uses_full_name(self):
        chat = MagicMock(id=42, title=None, full_name="Amit K")
        bot = AsyncMock()
        bot.get_chat.return_value = chat

        profile = await TelegramNotifier(bot).get_profile("42")

        assert profile.display_name == "Amit K"

    @pytest.mark.asyncio
    async def test_get_chat_failure_wrapped(self):
        bot = AsyncMock()
        bot.get_chat.side_effect = TelegramError("Forbidden")

        with pytest.raises(NotificationError):
            await TelegramNotifier(bot).get_profile("42")


class TestTelegramNotifierToken:
    @pytest.mark.asyncio
    async def test_missing_token_fails_send_not_construction(self):
        notifier = TelegramNotifier(token="")

        with pytest.raises(NotificationError, match="TELEGRAM_BOT_TOKEN"):
            await notifier.send_message("-100123", "hello")

    @pytest.mark.asyncio
    async def test_missing_token_fails_profile_lookup(self):
        with pytest.raises(NotificationError):
            await TelegramNotifier(token="").get_profile("-100123")

    @pytest.mark.asyncio
    async def test_bot_built_once_on_first_use(self):
        bot = AsyncMock()
        with patch("src.adapters.telegram_notifier.Bot", return_value=bot) as mock_bot_cls:
            notifier = TelegramNotifier(token="123456:fake-telegram-token")
            mock_bot_cls.assert_not_called()

            await notifier.send_message("-100123", "one")
            await notifier.send_message("-100123", "two")

        mock_bot_cls.assert_called_once_with(token="123456:fake-telegram-token")
        assert bot.send_message.call_count == 2
