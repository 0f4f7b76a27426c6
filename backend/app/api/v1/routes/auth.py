"""
Strava OAuth Relay Routes

Stateless token relay for the browser app:
- GET  /auth/url      - Strava authorization URL
- POST /auth/exchange - { code }          -> tokens
- POST /auth/refresh  - { refresh_token } -> tokens

Tokens are not stored; only access_token, refresh_token and
expires_at are returned.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import settings
from app.features.strava import StravaOAuth, StravaOAuthError

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================

class ExchangeRequest(BaseModel):
    code: Optional[str] = None


class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = None


class TokenResponse(BaseModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None


class AuthUrlResponse(BaseModel):
    url: str


# =============================================================================
# Dependencies
# =============================================================================

def get_oauth() -> StravaOAuth:
    """OAuth handler (overridable in tests)."""
    return StravaOAuth()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _not_configured() -> Optional[JSONResponse]:
    if not settings.strava_configured:
        return _error("Strava integration not configured", 503)
    return None


# =============================================================================
# Routes
# =============================================================================

@router.get("/url", response_model=AuthUrlResponse)
async def authorization_url(
    redirect_uri: str = Query(..., description="Where Strava sends the user back"),
    state: Optional[str] = Query(None),
    oauth: StravaOAuth = Depends(get_oauth)
):
    """Build the Strava authorization URL (scope: read)."""
    if not settings.strava_client_id:
        return _error("Strava integration not configured", 503)
    return AuthUrlResponse(url=oauth.get_authorization_url(redirect_uri, state))


@router.post("/exchange", response_model=TokenResponse)
async def exchange(
    request: Optional[ExchangeRequest] = None,
    oauth: StravaOAuth = Depends(get_oauth)
):
    """Exchange an authorization code for tokens."""
    if (response := _not_configured()) is not None:
        return response
    if request is None or not request.code:
        return _error("Missing code", 400)

    try:
        tokens = await oauth.exchange_code(request.code)
    except StravaOAuthError as e:
        return _error(e.message, e.status_code)
    except Exception as e:
        logger.exception("Token exchange relay failed")
        return _error(str(e), 500)

    logger.info("Strava authorization code exchanged")
    return tokens


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    request: Optional[RefreshRequest] = None,
    oauth: StravaOAuth = Depends(get_oauth)
):
    """Refresh an expired access token."""
    if (response := _not_configured()) is not None:
        return response
    if request is None or not request.refresh_token:
        return _error("Missing refresh_token", 400)

    try:
        tokens = await oauth.refresh_token(request.refresh_token)
    except StravaOAuthError as e:
        return _error(e.message, e.status_code)
    except Exception as e:
        logger.exception("Token refresh relay failed")
        return _error(str(e), 500)

    return tokens
