"""Diagnostic identity check: logs who the notifier is talking to.

A debugging aid only: the result never influences notification decisions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.ports.notification_port import NotificationPort, Profile

logger = logging.getLogger(__name__)


async def log_notifier_identity(
    notifier: NotificationPort, destination_id: str
) -> Profile | None:
    """Fetch and log the destination's id and display name, or None on failure."""
    if not destination_id:
        logger.warning("No notification destination configured, skipping identity check")
        return None

    try:
        profile = await notifier.get_profile(destination_id)
    except Exception as exc:
        logger.error(
            "Could not fetch notifier identity: %s %s", exc, getattr(exc, "detail", None) or "",
        )
        return None

    logger.info("Notifier destination id: %s", profile.user_id)
    logger.info("Notifier destination name: %s", profile.display_name)
    return profile
