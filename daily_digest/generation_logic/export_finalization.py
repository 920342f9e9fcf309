"""Renders an export and streams it back to the client as an attachment."""

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from fastapi.responses import StreamingResponse

from daily_digest.core.exceptions import ExportError
from daily_digest.models.news_models import NewsItem
from daily_digest.services.doc_builder import build_docx
from daily_digest.services.presentation import export_filename
from daily_digest.services.presentation import render_document
from daily_digest.services.workbook import build_workbook

__all__ = [
    "_generate_and_stream_export",
    "EXPORT_FORMATS",
    "HTML_MEDIA_TYPE",
    "DOCX_MEDIA_TYPE",
    "XLSX_MEDIA_TYPE",
]

logger = logging.getLogger(__name__)

HTML_MEDIA_TYPE = "text/html; charset=utf-8"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _html_bytes(items: list[NewsItem], day: date) -> bytes:
    return render_document(items, day).encode("utf-8")


# format -> (renderer, media type, file extension)
EXPORT_FORMATS: dict[str, tuple[Callable[[list[NewsItem], date], bytes], str, str]] = {
    "html": (_html_bytes, HTML_MEDIA_TYPE, "html"),
    "docx": (build_docx, DOCX_MEDIA_TYPE, "docx"),
    "xlsx": (build_workbook, XLSX_MEDIA_TYPE, "xlsx"),
}


async def _generate_and_stream_export(
    export_format: str,
    items: list[NewsItem],
    request_id: str,
    day: date | None = None,
) -> StreamingResponse:
    """Render *items* in *export_format* and stream the file back as an attachment."""
    if export_format not in EXPORT_FORMATS:
        raise ExportError(f"Unsupported export format: {export_format}")
    renderer, media_type, extension = EXPORT_FORMATS[export_format]
    edition_day = day or date.today()

    try:
        content = await asyncio.to_thread(renderer, items, edition_day)
    except ExportError:
        raise
    except Exception as e:
        logger.error("[%s] Failed to render %s export: %s", request_id, export_format, e, exc_info=True)
        raise ExportError(f"An unexpected error occurred while generating the {export_format.upper()} export.") from e

    filename = export_filename(edition_day, extension)
    logger.info("[%s] %s export ready: %s (%d bytes)", request_id, export_format.upper(), filename, len(content))
    return StreamingResponse(
        iter([content]),
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
