"""
Boss Respawn Notifier — Notification Cycle.

One tick = identity check → schedule reload → notify pass, strictly in
that order. The cycle owns the schedule cache and hands it to each phase.

Ticks never overlap: if the previous tick is still waiting on the network
when the timer fires again, the new tick is skipped.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

from src.core.notify_engine import send_notifications
from src.core.identity import log_notifier_identity
from src.core.schedule_loader import reload_schedule
from src.data.cache import ScheduleCache

if TYPE_CHECKING:
    from src.ports.notification_port import NotificationPort
    from src.ports.schedule_port import ScheduleStorePort

logger = logging.getLogger(__name__)


class NotificationCycle:
    """Sequences the per-minute work and guards against overlapping ticks."""

    def __init__(
        self,
        store: ScheduleStorePort,
        notifier: NotificationPort,
        destination_id: str,
        tz: tzinfo,
        cache: ScheduleCache | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.destination_id = destination_id
        self.tz = tz
        self.cache = cache if cache is not None else ScheduleCache()
        self._lock = asyncio.Lock()

    @property
    def in_flight(self) -> bool:
        return self._lock.locked()

    async def run(self, now: datetime | None = None) -> bool:
        """Run one tick. Returns False if it was skipped because one is in flight."""
        if self._lock.locked():
            logger.warning("Previous notification cycle still running, skipping this tick")
            return False

        async with self._lock:
            await log_notifier_identity(self.notifier, self.destination_id)

            try:
                await reload_schedule(self.store, self.cache, self.tz)
            except Exception as exc:
                logger.error("Schedule reload failed unexpectedly: %s", exc)

            try:
                await send_notifications(
                    self.cache, self.notifier, self.destination_id, self.tz, now=now,
                )
            except Exception as exc:
                logger.error("Notification pass failed: %s", exc)
        return True
