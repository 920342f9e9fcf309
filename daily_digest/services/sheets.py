"""Appends digest rows to the configured Google Sheet."""

import asyncio
import logging
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from daily_digest.core.config import settings
from daily_digest.core.exceptions import AuthRequiredError
from daily_digest.core.exceptions import ConfigurationError
from daily_digest.core.exceptions import SheetsSyncError
from daily_digest.core.sessions import AuthSession
from daily_digest.models.news_models import NewsItem
from daily_digest.services.presentation import to_row

logger = logging.getLogger(__name__)

VALUE_INPUT_OPTION = "USER_ENTERED"


def _default_service_factory(credentials: Any) -> Any:
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


class SheetsService:
    def __init__(
        self,
        service_factory: Callable[[Any], Any] | None = None,
        *,
        spreadsheet_id: str | None = None,
        sheet_range: str | None = None,
    ) -> None:
        self._service_factory = service_factory or _default_service_factory
        self._spreadsheet_id = spreadsheet_id
        self._sheet_range = sheet_range

    @property
    def spreadsheet_id(self) -> str | None:
        return self._spreadsheet_id or settings.spreadsheet_id

    @property
    def sheet_range(self) -> str:
        return self._sheet_range or settings.sheet_range

    async def append_news_items(self, session: AuthSession | None, items: Sequence[NewsItem]) -> int:
        """Append one row per item. Returns the number of rows sent.

        Raises:
            AuthRequiredError: no authorization session; nothing is sent.
            ConfigurationError: no target spreadsheet configured.
            SheetsSyncError: the append call failed. Not retried.
        """
        if session is None:
            raise AuthRequiredError("Unauthorized: connect a Google account before updating the sheet.")
        spreadsheet_id = self.spreadsheet_id
        if not spreadsheet_id:
            raise ConfigurationError("SPREADSHEET_ID is not configured on server")

        request_id = str(uuid4())
        values = [to_row(item) for item in items]
        logger.info("[%s] Appending %d row(s) to %s (%s)", request_id, len(values), spreadsheet_id, self.sheet_range)

        def _sync_append() -> dict:
            service = self._service_factory(session.credentials)
            return (
                service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=spreadsheet_id,
                    range=self.sheet_range,
                    valueInputOption=VALUE_INPUT_OPTION,
                    body={"values": values},
                )
                .execute()
            )

        try:
            result = await asyncio.to_thread(_sync_append)
        except HttpError as e:
            message = getattr(e, "reason", None) or str(e)
            logger.error("[%s] Sheets API error: %s", request_id, message)
            raise SheetsSyncError(message) from e
        except Exception as e:
            logger.exception("[%s] Unexpected error updating sheet", request_id)
            raise SheetsSyncError(str(e) or "Failed to update sheet") from e

        updated = (result or {}).get("updates", {}).get("updatedRows")
        logger.info("[%s] Sheet updated (%s rows reported)", request_id, updated)
        return len(values)
