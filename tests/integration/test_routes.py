import io
from unittest.mock import MagicMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from openpyxl import load_workbook

# Router under test
from daily_digest.api import routes as routes_module
from daily_digest.core.exceptions import ConfigurationError
from daily_digest.core.exceptions import FormatError
from daily_digest.core.exceptions import TerminalServiceError
from daily_digest.core.sessions import SessionStore
from daily_digest.main import create_app
from daily_digest.models.news_models import NewsItem
from daily_digest.services.sheets import SheetsService

PDF_BYTES = b"%PDF-1.4\n%%EOF\n"

ITEM_JSON = {
    "title": "APPOINTMENTS",
    "subTitle": "CEO / MD",
    "date": "18 February 2026",
    "headline": "New MD appointed at NABARD",
    "content": ["Appointed for three years."],
    "staticGk": ["NABARD HQ: Mumbai"],
}


# ---------------------------------------------------------------------------
# Helper fakes
# ---------------------------------------------------------------------------


class FakeExtractor:
    def __init__(self, result=(), error=None):
        self.result = result
        self.error = error
        self.documents = None

    async def extract(self, documents):
        self.documents = documents
        if self.error:
            raise self.error
        return self.result


class FakeAuthService:
    def __init__(self, fail=False):
        self.fail = fail
        self.credentials = object()

    def authorization_url(self):
        return "https://accounts.google.com/o/oauth2/auth?client_id=x"

    async def exchange_code(self, code):
        if self.fail:
            raise RuntimeError("invalid_grant")
        return self.credentials


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def store():
    return SessionStore()


@pytest.fixture()
def sheets_factory():
    api = MagicMock()
    api.spreadsheets.return_value.values.return_value.append.return_value.execute.return_value = {}
    return MagicMock(return_value=api)


@pytest.fixture()
def fastapi_app(monkeypatch, store, sheets_factory):
    monkeypatch.setattr(
        "daily_digest.generation_logic.file_processing.magic.from_buffer",
        lambda buf, mime=True: "application/pdf" if buf.startswith(b"%PDF") else "text/plain",
    )
    app = create_app(session_store=store)
    app.dependency_overrides[routes_module.get_auth_service] = lambda: FakeAuthService()
    app.dependency_overrides[routes_module.get_sheets_service] = lambda: SheetsService(
        sheets_factory, spreadsheet_id="sheet-1"
    )
    return app


@pytest.fixture()
def client(fastapi_app):
    with TestClient(fastapi_app) as c:
        yield c


def _use_extractor(app, extractor):
    app.dependency_overrides[routes_module.get_extractor] = lambda: extractor


# ---------------------------------------------------------------------------
# /health
# ---------------------------------------------------------------------------


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {"status": "ok"}


def test_create_app_keeps_injected_empty_store():
    store = SessionStore()

    app = create_app(session_store=store)

    assert len(store) == 0
    assert app.state.session_store is store


# ---------------------------------------------------------------------------
# /api/digest
# ---------------------------------------------------------------------------


def test_digest_success(fastapi_app, client):
    extractor = FakeExtractor(result=(NewsItem(**ITEM_JSON),))
    _use_extractor(fastapi_app, extractor)

    files = [
        ("files", ("one.pdf", PDF_BYTES, "application/pdf")),
        ("files", ("two.pdf", PDF_BYTES, "application/pdf")),
    ]
    resp = client.post("/api/digest", files=files)

    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["empty"] is False
    assert body["items"] == [ITEM_JSON]
    assert [doc.display_name for doc in extractor.documents] == ["one.pdf", "two.pdf"]


def test_digest_empty_result_is_success(fastapi_app, client):
    _use_extractor(fastapi_app, FakeExtractor(result=()))

    resp = client.post("/api/digest", files={"files": ("one.pdf", PDF_BYTES, "application/pdf")})

    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {"items": [], "empty": True}


def test_digest_rejects_non_pdf(fastapi_app, client):
    extractor = FakeExtractor()
    _use_extractor(fastapi_app, extractor)

    resp = client.post("/api/digest", files={"files": ("notes.txt", b"hello", "text/plain")})

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert "Only PDF files are supported" in resp.json()["error"]
    assert extractor.documents is None


@pytest.mark.parametrize(
    "raised_exc, expected_status",
    [
        (TerminalServiceError("The AI service is temporarily unavailable"), 502),
        (FormatError("Failed to process content into structured format"), 502),
        (ConfigurationError("GEMINI_API_KEY is not configured"), 500),
    ],
)
def test_digest_error_paths(fastapi_app, client, raised_exc, expected_status):
    _use_extractor(fastapi_app, FakeExtractor(error=raised_exc))

    resp = client.post("/api/digest", files={"files": ("one.pdf", PDF_BYTES, "application/pdf")})

    assert resp.status_code == expected_status
    assert resp.json() == {"error": str(raised_exc)}


# ---------------------------------------------------------------------------
# Rendering and exports
# ---------------------------------------------------------------------------


def test_view_fragment(client):
    resp = client.post("/api/view", json={"data": [ITEM_JSON]})

    assert resp.status_code == status.HTTP_200_OK
    assert resp.headers["content-type"].startswith("text/html")
    assert "New MD appointed at NABARD" in resp.text
    assert "NABARD HQ: Mumbai" in resp.text


def test_export_html(client):
    resp = client.post("/api/export/html", json={"data": [ITEM_JSON]})

    assert resp.status_code == status.HTTP_200_OK
    assert resp.headers["content-disposition"].startswith("attachment; filename=Daily_Digest_")
    assert resp.headers["content-disposition"].endswith(".html")
    assert "APPOINTMENTS – CEO / MD" in resp.text


def test_export_xlsx(client):
    resp = client.post("/api/export/xlsx", json={"data": [ITEM_JSON]})

    assert resp.status_code == status.HTTP_200_OK
    ws = load_workbook(io.BytesIO(resp.content))["Current Affairs"]
    assert ws["A2"].value == "APPOINTMENTS"
    assert ws["F2"].value == "NABARD HQ: Mumbai"


def test_export_unknown_format(client):
    resp = client.post("/api/export/pdf", json={"data": [ITEM_JSON]})

    assert resp.status_code == status.HTTP_404_NOT_FOUND


def test_export_rejects_malformed_items(client):
    resp = client.post("/api/export/html", json={"data": [{"title": "only a title"}]})

    assert resp.status_code == 422
    assert resp.json()["error"] == "Input validation failed"


# ---------------------------------------------------------------------------
# Authorization lifecycle and sheet sync
# ---------------------------------------------------------------------------


def test_auth_url(client):
    resp = client.get("/api/auth/google/url")

    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["url"].startswith("https://accounts.google.com/")


def test_sheets_update_without_session_is_unauthorized(client, sheets_factory):
    resp = client.post("/api/sheets/update", json={"data": [ITEM_JSON]})

    assert resp.status_code == status.HTTP_401_UNAUTHORIZED
    sheets_factory.assert_not_called()


def test_full_authorization_lifecycle(client, store, sheets_factory):
    assert client.get("/api/auth/status").json() == {"connected": False}

    resp = client.get("/auth/callback", params={"code": "auth-code"})
    assert resp.status_code == status.HTTP_200_OK
    assert "OAUTH_AUTH_SUCCESS" in resp.text
    assert len(store) == 1
    assert client.get("/api/auth/status").json() == {"connected": True}

    resp = client.post("/api/sheets/update", json={"data": [ITEM_JSON, ITEM_JSON]})
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {"success": True, "rows": 2}
    sheets_factory.assert_called_once()

    resp = client.post("/api/auth/logout")
    assert resp.json() == {"success": True}
    assert len(store) == 0
    assert client.get("/api/auth/status").json() == {"connected": False}

    resp = client.post("/api/sheets/update", json={"data": [ITEM_JSON]})
    assert resp.status_code == status.HTTP_401_UNAUTHORIZED


def test_reauthorizing_replaces_previous_session(client, store):
    client.get("/auth/callback", params={"code": "first"})
    client.get("/auth/callback", params={"code": "second"})

    assert len(store) == 1


def test_callback_without_code(client, store):
    resp = client.get("/auth/callback")

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert len(store) == 0


def test_callback_exchange_failure(fastapi_app, client, store):
    fastapi_app.dependency_overrides[routes_module.get_auth_service] = lambda: FakeAuthService(fail=True)

    resp = client.get("/auth/callback", params={"code": "bad"})

    assert resp.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert resp.text == "Authentication failed"
    assert len(store) == 0
