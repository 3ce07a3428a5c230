"""Spotify authorization-code flow: authorize URL, code exchange and refresh."""
from __future__ import annotations

import logging
import secrets
import threading
import time

import requests
from requests.auth import HTTPBasicAuth
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth

from artist_insights.config import Settings
from artist_insights.errors import TokenExchangeError
from artist_insights.models import TokenSet

logger = logging.getLogger(__name__)

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_SCOPES = [
    "user-read-private",
    "user-read-email",
    "streaming",
    "user-top-read",
    "user-read-recently-played",
    "playlist-read-private",
    "user-library-read",
]

# Unanswered authorize redirects are forgotten after ten minutes.
_STATE_TTL_SECONDS = 600


class OAuthStateStore:
    """Remembers issued ``state`` values until the callback consumes them."""

    def __init__(self, ttl: float = _STATE_TTL_SECONDS) -> None:
        self._ttl = ttl
        self._issued: dict[str, float] = {}
        self._lock = threading.Lock()

    def issue(self) -> str:
        state = secrets.token_urlsafe(16)
        with self._lock:
            self._prune()
            self._issued[state] = time.monotonic()
        return state

    def consume(self, state: str | None) -> bool:
        if not state:
            return False
        with self._lock:
            self._prune()
            return self._issued.pop(state, None) is not None

    def _prune(self) -> None:
        cutoff = time.monotonic() - self._ttl
        for state, issued_at in list(self._issued.items()):
            if issued_at < cutoff:
                del self._issued[state]


def _oauth_manager(settings: Settings) -> SpotifyOAuth:
    settings.require_spotify_credentials()
    return SpotifyOAuth(
        client_id=settings.spotify_client_id,
        client_secret=settings.spotify_client_secret,
        redirect_uri=settings.spotify_redirect_uri,
        scope=SPOTIFY_SCOPES,
        cache_handler=MemoryCacheHandler(),
        open_browser=False,
    )


def build_authorize_url(settings: Settings, state: str) -> str:
    return _oauth_manager(settings).get_authorize_url(state=state)


def _post_token_request(settings: Settings, payload: dict[str, str]) -> TokenSet:
    settings.require_spotify_credentials()
    try:
        response = requests.post(
            SPOTIFY_TOKEN_URL,
            data=payload,
            auth=HTTPBasicAuth(settings.spotify_client_id, settings.spotify_client_secret),
            timeout=settings.http_timeout,
        )
    except requests.RequestException as exc:
        raise TokenExchangeError(f"Token request failed: {exc}") from exc

    if not response.ok:
        logger.error(
            "Spotify token endpoint returned %s for grant_type=%s: %s",
            response.status_code,
            payload["grant_type"],
            response.text[:200],
        )
        raise TokenExchangeError(
            f"Token exchange failed: {response.status_code} {response.reason}",
            status=response.status_code,
        )

    try:
        body = response.json()
    except ValueError as exc:
        raise TokenExchangeError("Token response was not JSON", status=response.status_code) from exc
    if not isinstance(body, dict) or not body.get("access_token"):
        raise TokenExchangeError("Token response did not contain access_token", status=response.status_code)
    try:
        return TokenSet.from_response(body)
    except (TypeError, ValueError) as exc:
        raise TokenExchangeError(f"Malformed token response: {exc}", status=response.status_code) from exc


def exchange_code(settings: Settings, code: str) -> TokenSet:
    logger.info("Exchanging Spotify authorization code (code: %s...)", code[:6])
    tokens = _post_token_request(
        settings,
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": settings.spotify_redirect_uri,
        },
    )
    logger.info("Spotify token exchange successful, expires in %ss", tokens.expires_in)
    return tokens


def refresh_access_token(settings: Settings, refresh_token: str) -> TokenSet:
    tokens = _post_token_request(
        settings,
        {"grant_type": "refresh_token", "refresh_token": refresh_token},
    )
    # Spotify may omit the refresh token when it is unchanged.
    if tokens.refresh_token is None:
        tokens.refresh_token = refresh_token
    return tokens
