"""Application configuration settings.

This module defines the application-wide settings using Pydantic's BaseSettings.
It allows for loading configurations from environment variables and .env files,
providing type validation and default values.
"""

from pathlib import Path

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings

# Default list of CORS allowed origins
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8080",
    "https://localhost:3000",
    "https://localhost:8080",
    "http://0.0.0.0:8080",
]


class Settings(BaseSettings):
    """Manages application settings, loading them from environment variables or an .env file.

    Attributes:
        gemini_api_key: API key for the Gemini content-generation service.
        model_id: Identifier for the Gemini model to be used.
        llm_timeout_seconds: HTTP timeout applied by the Gemini client to each attempt.
        google_client_id: OAuth client id used for the Google Sheets authorization flow.
        google_client_secret: OAuth client secret paired with ``google_client_id``.
        google_redirect_uri: Redirect URI registered for the OAuth client. Falls back to
            ``{app_url}/auth/callback`` when unset.
        app_url: Public base URL of the deployed application.
        spreadsheet_id: Identifier of the spreadsheet that receives synced rows.
        sheet_range: A1 range the rows are appended to.
        session_secret: Secret used to sign the session cookie.
        session_ttl_hours: Lifetime of an authorization session before it is evicted.
        environment: Deployment environment name; ``production`` enables secure cookies.
        log_level: Level applied to the application logger.
        cors_allowed_origins: List of allowed origins for CORS.
        frontend_dir: Directory with the static browser client, mounted at ``/`` when present.
    """

    gemini_api_key: str | None = Field(default=None)
    model_id: str = Field(default="gemini-3-flash-preview")
    llm_timeout_seconds: float = Field(default=180.0, description="Gemini client timeout per attempt, in seconds.")

    google_client_id: str | None = Field(default=None)
    google_client_secret: str | None = Field(default=None)
    google_redirect_uri: str | None = Field(default=None)
    app_url: str = Field(default="http://localhost:8080")

    spreadsheet_id: str | None = Field(default=None)
    sheet_range: str = Field(default="Current Affairs!A:F")

    session_secret: str = Field(default="supersecret")
    session_ttl_hours: float = Field(default=24.0)
    environment: str = Field(default="development")
    log_level: str = Field(default="DEBUG")

    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS),  # Use a copy of the default list
    )

    frontend_dir: Path = Field(default=Path("frontend"))

    model_config = {
        "env_file": ".env",
        "protected_namespaces": ("settings_",),
        "env_prefix": "",  # No prefix for environment variables
        "extra": "ignore",  # Ignore extra fields
    }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def oauth_redirect_uri(self) -> str:
        return self.google_redirect_uri or f"{self.app_url.rstrip('/')}/auth/callback"

    @field_validator("cors_allowed_origins", mode="before")  # type: ignore
    @classmethod
    def assemble_cors_origins(cls, v: str | list[str] | None) -> list[str]:
        """Assembles the list of CORS allowed origins.

        If 'v' is a string, it splits it by commas. If 'v' is already a list,
        it's used directly. Otherwise, returns the default list of origins.

        Args:
            v: The value from the environment or direct assignment.

        Returns:
            A list of strings representing allowed CORS origins.
        """
        if isinstance(v, str) and v:
            return [origin.strip() for origin in v.split(",")]
        elif isinstance(v, list):
            return v
        return list(DEFAULT_CORS_ORIGINS)


settings = Settings()
