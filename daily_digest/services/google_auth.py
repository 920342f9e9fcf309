"""Google OAuth2 authorization-code flow for spreadsheet access."""

import asyncio
import logging
from typing import Any

from google_auth_oauthlib.flow import Flow

from daily_digest.core.config import settings
from daily_digest.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"


class GoogleAuthService:
    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        redirect_uri: str | None = None,
    ) -> None:
        self.client_id = client_id or settings.google_client_id
        self.client_secret = client_secret or settings.google_client_secret
        self.redirect_uri = redirect_uri or settings.oauth_redirect_uri

    def _flow(self) -> Flow:
        if not self.client_id or not self.client_secret:
            logger.error("Google OAuth client is not configured")
            raise ConfigurationError("GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must be configured on the server.")
        client_config = {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": AUTH_URI,
                "token_uri": TOKEN_URI,
                "redirect_uris": [self.redirect_uri],
            }
        }
        return Flow.from_client_config(
            client_config,
            scopes=SCOPES,
            redirect_uri=self.redirect_uri,
            autogenerate_code_verifier=False,
        )

    def authorization_url(self) -> str:
        """Consent-screen URL requesting offline spreadsheet access."""
        url, _state = self._flow().authorization_url(access_type="offline", prompt="consent")
        return url

    async def exchange_code(self, code: str) -> Any:
        """Exchange an authorization code for credentials.

        The token request is a blocking HTTP call, so it runs in a worker thread.
        """
        flow = self._flow()
        await asyncio.to_thread(flow.fetch_token, code=code)
        logger.info("Authorization code exchanged for Google credentials")
        return flow.credentials
