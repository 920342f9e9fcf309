import logging
from datetime import timedelta

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from daily_digest.api.routes import auth_callback_router
from daily_digest.api.routes import router
from daily_digest.core.config import settings
from daily_digest.core.exceptions import AuthRequiredError
from daily_digest.core.exceptions import ConfigurationError
from daily_digest.core.exceptions import ExportError
from daily_digest.core.exceptions import FormatError
from daily_digest.core.exceptions import SheetsSyncError
from daily_digest.core.exceptions import TerminalServiceError
from daily_digest.core.exceptions import ValidationError
from daily_digest.core.logging import setup_logging
from daily_digest.core.sessions import SessionStore

setup_logging()

logger = logging.getLogger(__name__)


def _error_response(exc: Exception, status_code: int) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=status_code)


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.error(f"HTTP exception: {exc.detail} (status: {exc.status_code})")
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.error("Request validation failed: %s", exc.errors(), exc_info=False)
    return JSONResponse(
        {"error": "Input validation failed", "details": exc.errors()},
        status_code=422,
    )


async def configuration_exception_handler(_request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error(f"Configuration error: {str(exc)}")
    return _error_response(exc, 500)


async def upload_validation_exception_handler(_request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Upload rejected: {str(exc)}")
    return _error_response(exc, exc.status_code)


async def service_exception_handler(_request: Request, exc: TerminalServiceError) -> JSONResponse:
    logger.error(f"Content service error: {str(exc)}")
    return _error_response(exc, 502)


async def format_exception_handler(_request: Request, exc: FormatError) -> JSONResponse:
    logger.error(f"Malformed service response: {str(exc)}")
    return _error_response(exc, 502)


async def auth_required_exception_handler(_request: Request, exc: AuthRequiredError) -> JSONResponse:
    logger.warning(f"Authorization required: {str(exc)}")
    return _error_response(exc, 401)


async def sheets_exception_handler(_request: Request, exc: SheetsSyncError) -> JSONResponse:
    logger.error(f"Sheets sync error: {str(exc)}")
    return _error_response(exc, 502)


async def export_exception_handler(_request: Request, exc: ExportError) -> JSONResponse:
    logger.error(f"Export error: {str(exc)}")
    return _error_response(exc, 500)


EXCEPTION_HANDLERS = {
    StarletteHTTPException: http_exception_handler,
    RequestValidationError: validation_exception_handler,
    ConfigurationError: configuration_exception_handler,
    ValidationError: upload_validation_exception_handler,
    TerminalServiceError: service_exception_handler,
    FormatError: format_exception_handler,
    AuthRequiredError: auth_required_exception_handler,
    SheetsSyncError: sheets_exception_handler,
    ExportError: export_exception_handler,
}


def create_app(session_store: SessionStore | None = None) -> FastAPI:
    """Build the application. A fresh SessionStore is created unless one is given."""
    application = FastAPI(title="Daily Digest")
    application.state.session_store = (
        session_store if session_store is not None else SessionStore(ttl=timedelta(hours=settings.session_ttl_hours))
    )

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        application.add_exception_handler(exc_class, handler)

    @application.on_event("startup")
    async def startup_event() -> None:
        if settings.session_secret == "supersecret":
            logger.warning("SESSION_SECRET is not set; using the insecure development default")
        logger.info("Application started successfully (model: %s)", settings.model_id)

    @application.get("/health", status_code=status.HTTP_200_OK, tags=["Health"])
    async def health_check() -> dict[str, str]:
        logger.info("Health check endpoint called")
        return {"status": "ok"}

    application.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        same_site="none" if settings.is_production else "lax",
        https_only=settings.is_production,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["*"],
    )
    application.include_router(router)
    application.include_router(auth_callback_router)

    if settings.frontend_dir.is_dir():
        application.mount("/", StaticFiles(directory=settings.frontend_dir, html=True), name="static")
    else:
        logger.info("No frontend directory at %s; serving the API only", settings.frontend_dir)
    return application


app = create_app()
