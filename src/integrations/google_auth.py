"""
Boss Respawn Notifier — Google Sheets Authentication.

The boss schedule lives in a Google Sheet shared with a service account.
Access is read-only: the notifier never writes back to the sheet.
"""

from __future__ import annotations

import logging

from google.oauth2 import service_account
from googleapiclient.discovery import build

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

_TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_credentials(
    client_email: str, private_key: str
) -> service_account.Credentials:
    """Build service-account credentials from an email and a PEM private key.

    The key must already be unescaped (real newlines, not literal "\\n").
    """
    info = {
        "type": "service_account",
        "client_email": client_email,
        "private_key": private_key,
        "token_uri": _TOKEN_URI,
    }
    return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)


def get_sheets_service():
    """Authenticate with the configured service account and return a
    Google Sheets API v4 service object.
    """
    from src.config import settings

    creds = build_credentials(
        settings.GOOGLE_SERVICE_ACCOUNT_EMAIL, settings.GOOGLE_PRIVATE_KEY
    )
    service = build("sheets", "v4", credentials=creds, cache_discovery=False)
    logger.info(
        "Google Sheets service built for %s", settings.GOOGLE_SERVICE_ACCOUNT_EMAIL
    )
    return service
