import logging
from datetime import date
from uuid import uuid4

from fastapi import APIRouter
from fastapi import Depends
from fastapi import File
from fastapi import HTTPException
from fastapi import Request
from fastapi import UploadFile
from fastapi.responses import HTMLResponse
from fastapi.responses import StreamingResponse

from daily_digest.core.sessions import SESSION_TOKEN_KEY
from daily_digest.core.sessions import AuthSession
from daily_digest.core.sessions import SessionStore
from daily_digest.core.sessions import get_current_session
from daily_digest.core.sessions import get_session_store
from daily_digest.generation_logic.digest_flow import build_digest
from daily_digest.generation_logic.export_finalization import EXPORT_FORMATS
from daily_digest.generation_logic.export_finalization import _generate_and_stream_export
from daily_digest.models.news_models import DigestResponse
from daily_digest.models.news_models import NewsItemsPayload
from daily_digest.services.extractor import NewsExtractor
from daily_digest.services.google_auth import GoogleAuthService
from daily_digest.services.presentation import render_view
from daily_digest.services.sheets import SheetsService

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
auth_callback_router = APIRouter()

OAUTH_SUCCESS_PAGE = """
<html>
  <body>
    <script>
      if (window.opener) {
        window.opener.postMessage({ type: 'OAUTH_AUTH_SUCCESS' }, '*');
        window.close();
      } else {
        window.location.href = '/';
      }
    </script>
    <p>Authentication successful. This window should close automatically.</p>
  </body>
</html>
"""


# ---------------------------------------------------------------
# Service providers (overridden in tests)
# ---------------------------------------------------------------


def get_extractor() -> NewsExtractor:
    return NewsExtractor()


def get_sheets_service() -> SheetsService:
    return SheetsService()


def get_auth_service() -> GoogleAuthService:
    return GoogleAuthService()


# ---------------------------------------------------------------
# Digest generation and exports
# ---------------------------------------------------------------


@router.post("/digest", response_model=DigestResponse)
async def create_digest(
    files: list[UploadFile] = File(...),
    extractor: NewsExtractor = Depends(get_extractor),
) -> DigestResponse:
    """Validate the uploaded PDFs and extract categorized news items from them.

    ``empty`` is true when the documents contained nothing exam-relevant; that
    is a successful outcome, not an error.
    """
    request_id = str(uuid4())
    logger.info("[%s] /digest called with %d file(s)", request_id, len(files))
    return await build_digest(files, request_id, extractor=extractor)


@router.post("/view", response_class=HTMLResponse)
async def view_digest(payload: NewsItemsPayload) -> HTMLResponse:
    """On-screen editorial layout for an already-extracted digest."""
    return HTMLResponse(render_view(payload.data, date.today()))


@router.post("/export/{export_format}")
async def export_digest(export_format: str, payload: NewsItemsPayload) -> StreamingResponse:
    """Download the digest as ``html``, ``docx`` or ``xlsx``."""
    if export_format not in EXPORT_FORMATS:
        raise HTTPException(status_code=404, detail=f"Unknown export format: {export_format}")
    request_id = str(uuid4())
    logger.info("[%s] Export requested: format=%s, items=%d", request_id, export_format, len(payload.data))
    return await _generate_and_stream_export(export_format, payload.data, request_id)


# ---------------------------------------------------------------
# Google authorization
# ---------------------------------------------------------------


@router.get("/auth/google/url")
async def google_auth_url(auth_service: GoogleAuthService = Depends(get_auth_service)) -> dict[str, str]:
    return {"url": auth_service.authorization_url()}


@auth_callback_router.get("/auth/callback", response_class=HTMLResponse)
async def google_auth_callback(
    request: Request,
    code: str | None = None,
    auth_service: GoogleAuthService = Depends(get_auth_service),
    store: SessionStore = Depends(get_session_store),
) -> HTMLResponse:
    if not code:
        return HTMLResponse("Missing authorization code", status_code=400)
    try:
        credentials = await auth_service.exchange_code(code)
    except Exception as e:
        logger.error("Error exchanging code for tokens: %s", e, exc_info=True)
        return HTMLResponse("Authentication failed", status_code=500)

    # Replace any session this browser already held
    store.clear(request.session.get(SESSION_TOKEN_KEY))
    session = store.create(credentials)
    request.session[SESSION_TOKEN_KEY] = session.token
    return HTMLResponse(OAUTH_SUCCESS_PAGE)


@router.get("/auth/status")
async def google_auth_status(session: AuthSession | None = Depends(get_current_session)) -> dict[str, bool]:
    return {"connected": session is not None}


@router.post("/auth/logout")
async def google_auth_logout(request: Request, store: SessionStore = Depends(get_session_store)) -> dict[str, bool]:
    store.clear(request.session.get(SESSION_TOKEN_KEY))
    request.session.clear()
    return {"success": True}


# ---------------------------------------------------------------
# Spreadsheet sync
# ---------------------------------------------------------------


@router.post("/sheets/update")
async def update_sheet(
    payload: NewsItemsPayload,
    session: AuthSession | None = Depends(get_current_session),
    sheets_service: SheetsService = Depends(get_sheets_service),
) -> dict[str, bool | int]:
    rows = await sheets_service.append_news_items(session, payload.data)
    return {"success": True, "rows": rows}
