"""
Boss Respawn Notifier — HTTP service and timer wiring.

A FastAPI app exposes the liveness route hosting platforms ping, and its
lifespan starts an APScheduler job that runs the notification cycle at the
top of every minute. Both share uvicorn's event loop.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import tzinfo

import uvicorn
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from src.config import settings
from src.core.cycle import NotificationCycle

logger = logging.getLogger(__name__)

LIVENESS_TEXT = "Boss notifier is running (notify only)."
_JOB_ID = "boss_notification_cycle"


def build_cycle() -> NotificationCycle:
    """Wire the Sheets store and the configured notifier into a cycle."""
    from src.adapters.notifier_factory import create_notifier
    from src.adapters.sheet_store import GoogleSheetScheduleStore

    store = GoogleSheetScheduleStore(settings.GOOGLE_SHEETS_ID, settings.SHEET_NAME)
    return NotificationCycle(
        store=store,
        notifier=create_notifier(),
        destination_id=settings.destination_id,
        tz=settings.tz,
    )


def build_scheduler(cycle: NotificationCycle, tz: tzinfo) -> AsyncIOScheduler:
    """Register the once-a-minute notification job."""
    scheduler = AsyncIOScheduler(timezone=tz)
    scheduler.add_job(
        cycle.run,
        "cron",
        minute="*",
        id=_JOB_ID,
        max_instances=1,
        coalesce=True,
    )
    return scheduler


def build_app(cycle: NotificationCycle | None = None) -> FastAPI:
    """Build the FastAPI application.

    The cycle is created lazily at startup unless one is injected.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        active = cycle if cycle is not None else build_cycle()
        scheduler = build_scheduler(active, settings.tz)
        scheduler.start()
        app.state.cycle = active
        app.state.scheduler = scheduler
        logger.info("Notification cycle scheduled every minute (%s)", settings.TIMEZONE)
        try:
            yield
        finally:
            scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")

    app = FastAPI(title="Boss Respawn Notifier", lifespan=lifespan)

    @app.get("/", response_class=PlainTextResponse)
    async def liveness() -> str:
        return LIVENESS_TEXT

    return app


def main() -> None:
    """Entry point: build the app and serve it."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Starting Boss Respawn Notifier on port %d...", settings.PORT)
    uvicorn.run(build_app(), host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
