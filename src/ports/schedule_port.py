"""Schedule port: abstract interface for reading raw boss schedule rows.

Core modules depend on this protocol, never on Google Sheets directly.
"""

from __future__ import annotations

from typing import Protocol


class ScheduleStoreError(Exception):
    """Raised when the schedule rows cannot be fetched."""


class ScheduleStorePort(Protocol):
    """Abstract schedule source used by core modules."""

    async def fetch_rows(self) -> list[list[str]]: ...
