import io
import logging
from collections.abc import Sequence
from datetime import date
from datetime import datetime

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt
from docx.shared import RGBColor

from daily_digest.models.news_models import NewsItem
from daily_digest.services.presentation import DIGEST_FOOTER
from daily_digest.services.presentation import DIGEST_TAGLINE
from daily_digest.services.presentation import DIGEST_TITLE
from daily_digest.services.presentation import NOT_APPLICABLE
from daily_digest.services.presentation import edition_label

# Configure module logger
logger = logging.getLogger(__name__)

MUTED = RGBColor(0x78, 0x71, 0x6C)


def _add_item(doc, item: NewsItem) -> None:
    doc.add_heading(f"{item.section} – {item.subsection}", level=2)

    meta = doc.add_paragraph()
    run = meta.add_run(f"Date: {item.date}")
    run.font.size = Pt(9)
    run.font.color.rgb = MUTED

    headline = doc.add_paragraph()
    headline.add_run(item.headline).bold = True

    for point in item.body_points:
        doc.add_paragraph(point, style="List Bullet")

    gk = doc.add_paragraph()
    gk.add_run("Static GK:").bold = True
    if item.background_facts:
        for fact in item.background_facts:
            doc.add_paragraph(fact, style="List Bullet 2")
    else:
        gk.add_run(f" {NOT_APPLICABLE}").italic = True


def build_docx(items: Sequence[NewsItem], day: date) -> bytes:
    """Render *items* as a Word edition of the digest."""
    doc = Document()
    doc.core_properties.title = f"{DIGEST_TITLE} - {edition_label(day)}"
    # Metadata carries the edition date, not the save time
    stamp = datetime(day.year, day.month, day.day)
    doc.core_properties.created = stamp
    doc.core_properties.modified = stamp

    doc.add_heading(DIGEST_TITLE.upper(), level=0)
    tagline = doc.add_paragraph()
    tagline.add_run(DIGEST_TAGLINE).italic = True
    edition = doc.add_paragraph()
    edition.alignment = WD_ALIGN_PARAGRAPH.RIGHT
    edition_run = edition.add_run(f"EDITION: {edition_label(day).upper()}")
    edition_run.font.size = Pt(9)
    edition_run.font.color.rgb = MUTED

    for item in items:
        _add_item(doc, item)

    footer = doc.add_paragraph()
    footer.alignment = WD_ALIGN_PARAGRAPH.CENTER
    footer.add_run(DIGEST_FOOTER).italic = True

    bio = io.BytesIO()
    doc.save(bio)
    size = bio.tell()
    bio.seek(0)
    logger.debug("DOCX edition ready (%d items, %d bytes)", len(items), size)
    return bio.read()
