"""
Strava OAuth flow.

Handles:
- Authorization URL generation
- Code exchange for tokens
- Token refresh

The frontend cannot do the exchange itself: Strava requires the
client secret and its token endpoint sends no CORS headers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from urllib.parse import urlencode

import httpx

from app.config import settings
from app.shared.constants import STRAVA_AUTHORIZE_URL, STRAVA_TOKEN_URL

logger = logging.getLogger(__name__)

# Only these fields are passed back to the browser (no athlete data)
TOKEN_FIELDS = ("access_token", "refresh_token", "expires_at")


class StravaOAuthError(Exception):
    """OAuth-related error."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{message} ({status_code})")


class StravaOAuth:
    """
    Strava OAuth handler.

    Usage:
        oauth = StravaOAuth()
        auth_url = oauth.get_authorization_url(
            redirect_uri="https://example.com/",
            state="abc"
        )
        tokens = await oauth.exchange_code(code)
        tokens = await oauth.refresh_token(refresh_token)
    """

    AUTHORIZE_URL = STRAVA_AUTHORIZE_URL
    TOKEN_URL = STRAVA_TOKEN_URL

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        self.client_id = settings.strava_client_id
        self.client_secret = settings.strava_client_secret
        self._http_client = http_client

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            yield client

    def get_authorization_url(
        self,
        redirect_uri: str,
        state: Optional[str] = None,
        scope: str = "read"
    ) -> str:
        """
        Generate Strava OAuth authorization URL.

        Args:
            redirect_uri: URL to redirect after authorization
            state: Optional state parameter for CSRF protection
            scope: OAuth scope (default: read - public segments)

        Returns:
            Authorization URL string
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": scope,
            "approval_prompt": "auto"
        }
        if state:
            params["state"] = state

        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def _token_request(self, payload: dict, action: str) -> dict:
        async with self._client() as client:
            response = await client.post(
                self.TOKEN_URL,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    **payload,
                }
            )

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code != 200:
            logger.error(f"Strava {action} failed: {response.status_code} {response.text}")
            message = data.get("message") if isinstance(data, dict) else None
            raise StravaOAuthError(
                response.status_code,
                message or f"Token {action} failed"
            )

        return {key: data.get(key) for key in TOKEN_FIELDS}

    async def exchange_code(self, code: str) -> dict:
        """
        Exchange authorization code for tokens.

        Args:
            code: Authorization code from Strava callback

        Returns:
            {"access_token": "...", "refresh_token": "...", "expires_at": 1234567890}

        Raises:
            StravaOAuthError: If token exchange fails
        """
        return await self._token_request(
            {"code": code, "grant_type": "authorization_code"},
            "exchange"
        )

    async def refresh_token(self, refresh_token: str) -> dict:
        """
        Refresh an expired access token.

        Args:
            refresh_token: Current refresh token

        Returns:
            {"access_token": "...", "refresh_token": "...", "expires_at": 1234567890}

        Raises:
            StravaOAuthError: If token refresh fails
        """
        return await self._token_request(
            {"refresh_token": refresh_token, "grant_type": "refresh_token"},
            "refresh"
        )
