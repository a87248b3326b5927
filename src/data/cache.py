"""In-memory schedule cache: name → BossRecord.

Owned by the notification cycle and passed by reference into each phase.
A reload swaps in a brand-new mapping; records are never merged with the
previous contents.
"""

from __future__ import annotations

from collections.abc import Iterator

from src.data.models import BossRecord


class ScheduleCache:
    """Reload-replaced mapping from boss name to its parsed record."""

    def __init__(self) -> None:
        self._records: dict[str, BossRecord] = {}

    def replace(self, records: dict[str, BossRecord]) -> None:
        self._records = dict(records)

    def get(self, name: str) -> BossRecord | None:
        return self._records.get(name)

    def records(self) -> list[BossRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[BossRecord]:
        return iter(self.records())

    def __contains__(self, name: object) -> bool:
        return name in self._records
