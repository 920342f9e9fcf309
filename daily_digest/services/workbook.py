"""XLSX export of a digest, one row per news item."""

import io
import logging
from collections.abc import Sequence
from datetime import date
from datetime import datetime
from zipfile import ZIP_DEFLATED
from zipfile import ZipFile

from openpyxl import Workbook
from openpyxl.styles import Alignment
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.writer.excel import ExcelWriter

from daily_digest.models.news_models import NewsItem
from daily_digest.services.presentation import TABLE_HEADERS
from daily_digest.services.presentation import to_row

logger = logging.getLogger(__name__)

SHEET_TITLE = "Current Affairs"
COLUMN_WIDTHS: tuple[int, ...] = (30, 30, 20, 40, 60, 40)


def build_workbook(items: Sequence[NewsItem], day: date) -> bytes:
    wb = Workbook()
    stamp = datetime(day.year, day.month, day.day)
    wb.properties.created = stamp
    wb.properties.modified = stamp
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append(list(TABLE_HEADERS))
    for cell in ws[1]:
        cell.font = Font(bold=True)

    wrap = Alignment(wrap_text=True, vertical="top")
    for item in items:
        ws.append(to_row(item))
        for cell in ws[ws.max_row]:
            cell.alignment = wrap

    for idx, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width
    ws.freeze_panes = "A2"

    # Workbook.save would restamp "modified" with the save time
    bio = io.BytesIO()
    with ZipFile(bio, "w", ZIP_DEFLATED, allowZip64=True) as archive:
        ExcelWriter(wb, archive).write_data()
    logger.debug("Workbook ready (%d rows)", len(items))
    return bio.getvalue()
