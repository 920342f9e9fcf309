"""Pure formatting helpers shared by every rendering of a digest.

All functions here are deterministic in their inputs: the edition date is
always passed in, never read from the clock.
"""

import pathlib
from collections.abc import Sequence
from datetime import date

import jinja2

from daily_digest.models.news_models import NewsItem

NOT_APPLICABLE = "Not applicable"

DIGEST_TITLE = "The Daily Digest"
DIGEST_TAGLINE = "Curated Current Affairs for Competitive Excellence"
DIGEST_FOOTER = "End of Daily Digest. Success follows consistency."

TABLE_HEADERS: tuple[str, ...] = ("Section", "Sub-Section", "Date", "Headline", "Content", "Static GK")

TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"
env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(TEMPLATE_DIR),
    autoescape=jinja2.select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def edition_label(day: date) -> str:
    """``16 October 2026`` (two-digit day, full month name)."""
    return f"{day.day:02d} {day.strftime('%B')} {day.year}"


def export_filename(day: date, extension: str) -> str:
    return f"Daily_Digest_{day.isoformat()}.{extension}"


def body_text(item: NewsItem) -> str:
    return "\n".join(item.body_points)


def background_text(item: NewsItem) -> str:
    return "\n".join(item.background_facts) if item.background_facts else NOT_APPLICABLE


def to_row(item: NewsItem) -> list[str]:
    """Tabular row in column order: section, subsection, date, headline, content, static GK."""
    return [
        item.section,
        item.subsection,
        item.date,
        item.headline,
        body_text(item),
        background_text(item),
    ]


def _context(items: Sequence[NewsItem], day: date) -> dict:
    return {
        "items": list(items),
        "edition": edition_label(day),
        "title": DIGEST_TITLE,
        "tagline": DIGEST_TAGLINE,
        "footer": DIGEST_FOOTER,
        "not_applicable": NOT_APPLICABLE,
    }


def render_view(items: Sequence[NewsItem], day: date) -> str:
    """HTML fragment for the on-screen editorial layout."""
    return env.get_template("view.html").render(**_context(items, day))


def render_document(items: Sequence[NewsItem], day: date) -> str:
    """Standalone, printable HTML document."""
    return env.get_template("digest.html").render(**_context(items, day))
