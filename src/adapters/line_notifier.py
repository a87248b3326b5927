"""LINE Messaging API adapter: implements NotificationPort.

Uses the push-message endpoint to deliver plain text to a user, group or
room id, and the profile / group summary endpoints for identity lookups.
Authentication is a long-lived channel access token sent as a bearer token.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from src.ports.notification_port import NotificationError, Profile

logger = logging.getLogger(__name__)

_API_BASE = "https://api.line.me/v2/bot"
_PUSH_URL = f"{_API_BASE}/message/push"
_TIMEOUT_SECONDS = 10


def _error_detail(response: httpx.Response) -> Any:
    """Return the LINE error payload, falling back to the raw body."""
    try:
        return response.json()
    except ValueError:
        return response.text


class LineNotifier:
    """LINE implementation of NotificationPort."""

    def __init__(self, channel_access_token: str) -> None:
        self._token = channel_access_token

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=_TIMEOUT_SECONDS) as client:
                resp = await client.request(method, url, headers=self._headers(), **kwargs)
                resp.raise_for_status()
                return resp
        except httpx.HTTPStatusError as exc:
            detail = _error_detail(exc.response)
            raise NotificationError(
                f"LINE API returned HTTP {exc.response.status_code}", detail,
            ) from exc
        except httpx.HTTPError as exc:
            raise NotificationError(f"LINE API request failed: {exc}") from exc

    async def send_message(self, destination_id: str, text: str) -> None:
        await self._request(
            "POST",
            _PUSH_URL,
            json={"to": destination_id, "messages": [{"type": "text", "text": text}]},
        )

    async def get_profile(self, destination_id: str) -> Profile:
        # Group ids start with "C"; everything else is looked up as a user
        if destination_id.startswith("C"):
            resp = await self._request("GET", f"{_API_BASE}/group/{destination_id}/summary")
            id_key, name_key = "groupId", "groupName"
        else:
            resp = await self._request("GET", f"{_API_BASE}/profile/{destination_id}")
            id_key, name_key = "userId", "displayName"

        try:
            data = resp.json()
            return Profile(user_id=data[id_key], display_name=data.get(name_key, ""))
        except (ValueError, KeyError) as exc:
            raise NotificationError(f"Unexpected LINE profile response: {exc}") from exc
