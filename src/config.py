"""
Boss Respawn Notifier — Centralized configuration.

Loads all settings from .env and validates required keys.
The spreadsheet credentials are mandatory: without them there is nothing
to poll, so the process refuses to start.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (two levels up from src/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

_REQUIRED_KEYS = (
    "GOOGLE_SHEETS_ID",
    "GOOGLE_SERVICE_ACCOUNT_EMAIL",
    "GOOGLE_PRIVATE_KEY",
)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Google Sheets (service account, read-only)
    GOOGLE_SHEETS_ID: str
    GOOGLE_SERVICE_ACCOUNT_EMAIL: str
    GOOGLE_PRIVATE_KEY: str
    SHEET_NAME: str = "Boss"

    # Messaging provider: "line" | "telegram"
    NOTIFY_PROVIDER: str = "line"

    # LINE Messaging API (not validated at startup)
    LINE_CHANNEL_ACCESS_TOKEN: str = ""
    LINE_CHANNEL_SECRET: str = ""
    LINE_NOTIFY_ID: str = ""       # user or group id that receives notifications

    # Telegram (only needed when NOTIFY_PROVIDER=telegram)
    TELEGRAM_BOT_TOKEN: str = ""
    TELEGRAM_CHAT_ID: str = ""

    TIMEZONE: str = "Asia/Taipei"

    # Liveness endpoint
    PORT: int = 10001

    @field_validator("GOOGLE_PRIVATE_KEY", mode="before")
    @classmethod
    def unescape_private_key(cls, v: str) -> str:
        # Hosting dashboards store the PEM on one line with literal "\n"
        return v.replace("\\n", "\n")

    @field_validator("TIMEZONE")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v!r}") from exc
        return v

    @field_validator("PORT", mode="before")
    @classmethod
    def parse_port(cls, v: str | int) -> int:
        return int(v)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)

    @property
    def destination_id(self) -> str:
        """Chat that receives notifications for the active provider."""
        if self.NOTIFY_PROVIDER.lower() == "telegram":
            return self.TELEGRAM_CHAT_ID
        return self.LINE_NOTIFY_ID


def _load_settings() -> Settings:
    """Load settings from environment, validating required keys."""
    for key in _REQUIRED_KEYS:
        if not os.getenv(key, ""):
            print(f"ERROR: {key} is missing or not set in .env", file=sys.stderr)
            sys.exit(1)

    return Settings(
        GOOGLE_SHEETS_ID=os.getenv("GOOGLE_SHEETS_ID", ""),
        GOOGLE_SERVICE_ACCOUNT_EMAIL=os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL", ""),
        GOOGLE_PRIVATE_KEY=os.getenv("GOOGLE_PRIVATE_KEY", ""),
        SHEET_NAME=os.getenv("SHEET_NAME", "Boss"),
        NOTIFY_PROVIDER=os.getenv("NOTIFY_PROVIDER", "line"),
        LINE_CHANNEL_ACCESS_TOKEN=os.getenv("LINE_CHANNEL_ACCESS_TOKEN", ""),
        LINE_CHANNEL_SECRET=os.getenv("LINE_CHANNEL_SECRET", ""),
        LINE_NOTIFY_ID=os.getenv("LINE_NOTIFY_ID", ""),
        TELEGRAM_BOT_TOKEN=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        TELEGRAM_CHAT_ID=os.getenv("TELEGRAM_CHAT_ID", ""),
        TIMEZONE=os.getenv("TIMEZONE", "Asia/Taipei"),
        PORT=os.getenv("PORT", "10001"),
    )


# Singleton, imported by all other modules as:
#   from src.config import settings
settings = _load_settings()
