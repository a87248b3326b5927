"""Schedule loader: turns raw sheet rows into BossRecords.

Row layout (positional, header excluded):

    name | interval | nextRespawn | notified | notifyDate | missedCount | category

Empty or missing cells take defaults. Cells that are present but malformed
make the whole row invalid: it is skipped with a warning rather than being
silently defaulted.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, tzinfo

from src.data.cache import ScheduleCache
from src.data.models import BossRecord
from src.ports.schedule_port import ScheduleStoreError, ScheduleStorePort

logger = logging.getLogger(__name__)

COLUMNS = (
    "name",
    "interval",
    "nextRespawn",
    "notified",
    "notifyDate",
    "missedCount",
    "category",
)

# Sheets renders date-time cells in the spreadsheet locale, e.g. 2025/01/15 09:58:00
_SLASH_FORMATS = ("%Y/%m/%d %H:%M:%S", "%Y/%m/%d %H:%M", "%Y/%m/%d")


class RowFormatError(ValueError):
    """A sheet row does not match the expected column schema."""


def parse_timestamp(raw: str, tz: tzinfo) -> datetime:
    """Parse a respawn timestamp and return it as an aware datetime in `tz`.

    Naive values are taken to already be in `tz`; values carrying an offset
    are converted into it.

    Raises ValueError on unrecognised input.
    """
    text = raw.strip()
    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _SLASH_FORMATS:
            try:
                dt = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
        else:
            raise ValueError(f"Unrecognised timestamp: {raw!r}") from None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def _cell(row: list[str], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def _parse_interval(raw: str) -> float:
    if not raw:
        return 0.0
    try:
        value = float(raw)
    except ValueError as exc:
        raise RowFormatError(f"interval is not a number: {raw!r}") from exc
    if not math.isfinite(value) or value < 0:
        raise RowFormatError(f"interval must be a non-negative number: {raw!r}")
    return value


def _parse_missed_count(raw: str) -> int:
    if not raw:
        return 0
    try:
        value = int(raw)
    except ValueError as exc:
        raise RowFormatError(f"missedCount is not an integer: {raw!r}") from exc
    if value < 0:
        raise RowFormatError(f"missedCount must be non-negative: {raw!r}")
    return value


def parse_row(row: list[str], tz: tzinfo) -> BossRecord:
    """Parse one sheet row into a BossRecord.

    Raises RowFormatError if the row does not fit the column schema.
    """
    if len(row) > len(COLUMNS):
        raise RowFormatError(
            f"expected at most {len(COLUMNS)} columns, got {len(row)}"
        )

    name = _cell(row, 0)
    if not name:
        raise RowFormatError("name is empty")

    raw_respawn = _cell(row, 2)
    next_respawn = None
    if raw_respawn:
        try:
            next_respawn = parse_timestamp(raw_respawn, tz)
        except ValueError as exc:
            raise RowFormatError(str(exc)) from exc

    return BossRecord(
        name=name,
        interval=_parse_interval(_cell(row, 1)),
        next_respawn=next_respawn,
        # Only the literal the sheet checkbox renders counts as checked
        notified=_cell(row, 3) == "TRUE",
        notify_date=_cell(row, 4) or "ALL",
        missed_count=_parse_missed_count(_cell(row, 5)),
        category=_cell(row, 6),
    )


def parse_rows(rows: list[list[str]], tz: tzinfo) -> dict[str, BossRecord]:
    """Parse all rows into a name → record mapping, skipping malformed rows.

    Row numbers in warnings are sheet row numbers (data starts at row 2).
    """
    records: dict[str, BossRecord] = {}
    for offset, row in enumerate(rows):
        sheet_row = offset + 2
        if not any(_cell(row, i) for i in range(len(row))):
            continue
        try:
            record = parse_row(row, tz)
        except RowFormatError as exc:
            logger.warning("Skipping sheet row %d: %s", sheet_row, exc)
            continue
        if record.name in records:
            logger.warning(
                "Duplicate boss '%s' at sheet row %d overrides earlier row",
                record.name, sheet_row,
            )
        records[record.name] = record
    return records


async def reload_schedule(
    store: ScheduleStorePort,
    cache: ScheduleCache,
    tz: tzinfo,
) -> bool:
    """Fetch the sheet and replace the cache with its parsed contents.

    On a fetch failure the cache is left untouched so the decision phase
    can still run on the previous data. Returns True if the cache was replaced.
    """
    try:
        rows = await store.fetch_rows()
    except ScheduleStoreError as exc:
        logger.error("Could not load boss schedule, keeping %d cached record(s): %s",
                     len(cache), exc)
        return False

    records = parse_rows(rows, tz)
    cache.replace(records)
    logger.info("Loaded %d boss record(s) from %d sheet row(s)", len(records), len(rows))
    return True
