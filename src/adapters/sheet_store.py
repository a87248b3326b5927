"""Google Sheets adapter: implements ScheduleStorePort.

All Sheets-specific logic lives here. google-api-python-client is
synchronous, so calls are wrapped with asyncio.to_thread to keep the
event loop (and the liveness endpoint) responsive.
"""

from __future__ import annotations

import asyncio
import logging

from src.ports.schedule_port import ScheduleStoreError

logger = logging.getLogger(__name__)


class GoogleSheetScheduleStore:
    """Google Sheets implementation of ScheduleStorePort.

    Reads `<sheet_name>!A2:G`: the header row is excluded and each row
    carries up to seven positional columns.
    """

    def __init__(self, spreadsheet_id: str, sheet_name: str = "Boss", service=None) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._sheet_name = sheet_name
        self._service = service

    @property
    def range(self) -> str:
        return f"{self._sheet_name}!A2:G"

    def _get_service(self):
        if self._service is None:
            from src.integrations.google_auth import get_sheets_service

            self._service = get_sheets_service()
        return self._service

    def _fetch_sync(self) -> list[list[str]]:
        result = (
            self._get_service()
            .spreadsheets()
            .values()
            .get(spreadsheetId=self._spreadsheet_id, range=self.range)
            .execute()
        )
        return result.get("values", [])

    async def fetch_rows(self) -> list[list[str]]:
        try:
            rows = await asyncio.to_thread(self._fetch_sync)
        except Exception as exc:
            logger.error("Google Sheets read failed for %s: %s", self.range, exc)
            raise ScheduleStoreError(f"Failed to read {self.range}: {exc}") from exc
        logger.debug("Fetched %d row(s) from %s", len(rows), self.range)
        return rows
