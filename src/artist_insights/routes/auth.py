"""Spotify OAuth endpoints."""
from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from artist_insights.config import Settings
from artist_insights.dependencies import get_settings, get_state_store
from artist_insights.errors import ConfigurationError, TokenExchangeError
from artist_insights.oauth import OAuthStateStore, build_authorize_url, exchange_code, refresh_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth/spotify", tags=["auth"])


class AuthCodeRequest(BaseModel):
    code: str | None = None


class RefreshRequest(BaseModel):
    refresh_token: str


def _setup_redirect(error: str) -> RedirectResponse:
    return RedirectResponse(f"/setup?error={quote(error, safe='')}", status_code=302)


@router.get("")
def spotify_login(
    settings: Settings = Depends(get_settings),
    state_store: OAuthStateStore = Depends(get_state_store),
):
    """Start the authorization-code flow."""
    try:
        auth_url = build_authorize_url(settings, state_store.issue())
    except ConfigurationError as exc:
        logger.error("Error generating Spotify auth URL: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to generate auth URL")
    return RedirectResponse(auth_url, status_code=302)


@router.post("")
def spotify_exchange(
    request: AuthCodeRequest,
    settings: Settings = Depends(get_settings),
):
    if not request.code:
        raise HTTPException(status_code=400, detail="Authorization code is required")
    try:
        tokens = exchange_code(settings, request.code)
    except (ConfigurationError, TokenExchangeError) as exc:
        logger.error("Error handling Spotify auth: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to authenticate with Spotify")
    return {"success": True, "tokens": tokens.to_dict()}


@router.get("/callback")
def spotify_callback(
    code: str | None = None,
    error: str | None = None,
    state: str | None = None,
    settings: Settings = Depends(get_settings),
    state_store: OAuthStateStore = Depends(get_state_store),
):
    if error:
        logger.warning("Spotify authorization failed with error: %s", error)
        return _setup_redirect(error)
    if not code:
        return _setup_redirect("no_code")
    if settings.validate_oauth_state and not state_store.consume(state):
        logger.warning("Spotify callback state was not issued by this server")
        return _setup_redirect("state_mismatch")

    try:
        tokens = exchange_code(settings, code)
    except (ConfigurationError, TokenExchangeError) as exc:
        logger.error("Spotify callback error: %s", exc)
        return _setup_redirect("Authentication failed")

    # Tokens travel back in the query string; acceptable for the demo only.
    params = {"access_token": tokens.access_token}
    if tokens.refresh_token:
        params["refresh_token"] = tokens.refresh_token
    params["expires_in"] = str(tokens.expires_in)
    return RedirectResponse(f"/dashboard?{urlencode(params)}", status_code=302)


@router.post("/refresh")
def spotify_refresh(
    request: RefreshRequest,
    settings: Settings = Depends(get_settings),
):
    try:
        tokens = refresh_access_token(settings, request.refresh_token)
    except (ConfigurationError, TokenExchangeError) as exc:
        logger.error("Spotify token refresh failed: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to refresh Spotify token")
    return {"success": True, "tokens": tokens.to_dict()}
