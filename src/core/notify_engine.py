"""Respawn notification engine: decides when to push an advance warning.

For every trackable boss the engine computes the whole minutes left until
its next respawn and picks one of three branches:

- FIRE:  0 < minutes <= 10 and not yet notified → push, then mark notified
- RESET: minutes <= 0 → clear `notified` so the next occurrence can fire
- NOOP:  anything else

The window is half-open: exactly 10 minutes fires, exactly 0 resets.
"""

from __future__ import annotations

import enum
import logging
import math
from datetime import datetime, timedelta, timezone, tzinfo
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.data.cache import ScheduleCache
    from src.data.models import BossRecord
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)

LOOKAHEAD_MINUTES = 10


class Action(enum.Enum):
    FIRE = "fire"
    RESET = "reset"
    NOOP = "noop"


def minutes_until(target: datetime, now: datetime) -> int:
    """Elapsed whole minutes from `now` to `target`, truncated toward zero.

    Both sides are converted to UTC first: subtracting two datetimes that
    share a tzinfo compares wall-clock times and ignores DST offset changes.
    """
    elapsed = target.astimezone(timezone.utc) - now.astimezone(timezone.utc)
    return math.trunc(elapsed / timedelta(minutes=1))


def decide(record: BossRecord, diff_min: int) -> Action:
    if diff_min <= 0:
        return Action.RESET
    if diff_min <= LOOKAHEAD_MINUTES and not record.notified:
        return Action.FIRE
    return Action.NOOP


def format_notification(name: str, respawn: datetime, diff_min: int) -> str:
    return f"⏰ 預告：{name} 將於 {respawn:%H:%M} 重生（剩餘 {diff_min} 分鐘）"


async def send_notifications(
    cache: ScheduleCache,
    notifier: NotificationPort,
    destination_id: str,
    tz: tzinfo,
    now: datetime | None = None,
) -> list[str]:
    """Evaluate every cached boss and push advance warnings.

    Mutates `notified` on the cached records in place. A failed push is
    logged and leaves `notified` false, so the next tick tries again while
    the window is still open.

    Returns the names of bosses notified during this call.
    """
    now = now.astimezone(tz) if now is not None else datetime.now(tz)
    sent: list[str] = []

    for record in cache:
        if not record.is_trackable:
            continue

        respawn = record.next_respawn.astimezone(tz)
        diff_min = minutes_until(respawn, now)
        logger.info(
            "now=%s | boss=%s | next_respawn=%s | diff_min=%d | notified=%s",
            now.isoformat(timespec="seconds"),
            record.name,
            respawn.isoformat(timespec="minutes"),
            diff_min,
            record.notified,
        )

        action = decide(record, diff_min)
        if action is Action.RESET:
            record.notified = False
            continue
        if action is Action.NOOP:
            continue

        if not destination_id:
            logger.warning("No notification destination configured, cannot notify '%s'", record.name)
            continue

        text = format_notification(record.name, respawn, diff_min)
        try:
            await notifier.send_message(destination_id, text)
        except Exception as exc:
            logger.error(
                "Failed to notify '%s': %s %s",
                record.name, exc, getattr(exc, "detail", None) or "",
            )
            continue

        record.notified = True
        sent.append(record.name)
        logger.info("Notified '%s': %s", record.name, text)

    return sent
