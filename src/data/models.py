"""
Boss Respawn Notifier — Data Models.

The spreadsheet is the only durable store: a BossRecord is rebuilt from
its row on every reload. The `notified` flag may be flipped in memory after
a push, but nothing is ever written back to the sheet.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class BossRecord:
    """One named recurring event ("boss") and its next respawn."""

    name: str                             # unique key, also the display name
    interval: float = 0.0                 # respawn period in hours (informational)
    next_respawn: datetime | None = None  # aware, in the configured timezone
    notified: bool = False
    notify_date: str = "ALL"              # reserved, never applied
    missed_count: int = 0                 # reserved, never incremented
    category: str = ""                    # reserved, never used

    @property
    def is_trackable(self) -> bool:
        """Only records with a respawn time and a non-zero interval are evaluated."""
        return self.next_respawn is not None and bool(self.interval)
