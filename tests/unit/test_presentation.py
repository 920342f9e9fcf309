from datetime import date

from daily_digest.services.presentation import NOT_APPLICABLE
from daily_digest.services.presentation import background_text
from daily_digest.services.presentation import edition_label
from daily_digest.services.presentation import export_filename
from daily_digest.services.presentation import render_document
from daily_digest.services.presentation import render_view
from daily_digest.services.presentation import to_row

DAY = date(2026, 2, 5)


def test_edition_label_uses_two_digit_day_and_full_month():
    assert edition_label(DAY) == "05 February 2026"
    assert edition_label(date(2026, 10, 16)) == "16 October 2026"


def test_export_filename():
    assert export_filename(DAY, "html") == "Daily_Digest_2026-02-05.html"
    assert export_filename(DAY, "xlsx") == "Daily_Digest_2026-02-05.xlsx"


def test_to_row_column_order(sample_items):
    row = to_row(sample_items[0])

    assert row == [
        "BANKING & FINANCE",
        "RBI",
        "18 February 2026",
        "RBI keeps repo rate unchanged at 6.5%",
        "The MPC voted 5:1 to hold the rate.\nStance remains neutral.",
        "RBI HQ: Mumbai\nEstablished: 1935",
    ]


def test_to_row_without_background_facts(sample_items):
    assert background_text(sample_items[1]) == NOT_APPLICABLE
    assert to_row(sample_items[1])[-1] == "Not applicable"


def test_render_document_contains_every_item(sample_items):
    html = render_document(sample_items, DAY)

    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Daily Digest - 05 February 2026</title>" in html
    assert "Edition: 05 February 2026" in html
    assert "BANKING &amp; FINANCE – RBI" in html
    assert "<li>RBI HQ: Mumbai</li>" in html
    assert "Date: 17 February 2026" in html
    assert NOT_APPLICABLE in html
    assert "End of Daily Digest. Success follows consistency." in html


def test_render_document_escapes_model_text(sample_items):
    html = render_document(sample_items, DAY)

    assert "Asia Cup &lt;final&gt;" in html
    assert "<final>" not in html


def test_render_document_is_deterministic(sample_items):
    first = render_document(sample_items, DAY)
    second = render_document(list(sample_items), DAY)

    assert first == second


def test_render_document_differs_only_by_edition_stamp(sample_items):
    first = render_document(sample_items, DAY)
    later = render_document(sample_items, date(2026, 3, 1))

    assert later == first.replace("05 February 2026", "01 March 2026")


def test_render_document_does_not_mutate_items(sample_items):
    snapshot = [item.model_dump() for item in sample_items]

    render_document(sample_items, DAY)
    render_view(sample_items, DAY)

    assert [item.model_dump() for item in sample_items] == snapshot


def test_render_view_layout(sample_items):
    html = render_view(sample_items, DAY)

    assert html.count('class="news-block"') == 2
    # Dividers only between items
    assert html.count('class="news-divider"') == 1
    assert "Not applicable for this topic" in html
    assert "Static GK Context" in html
    assert "Edition: 05 February 2026" in html


def test_render_view_empty_list():
    html = render_view([], DAY)

    assert "news-block" not in html
    assert "The Daily Digest" in html
