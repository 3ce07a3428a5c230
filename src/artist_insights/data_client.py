"""Session object owning the Spotify token and the collections shown on the dashboard."""
from __future__ import annotations

import logging
import threading
from typing import Callable, TypeVar

from artist_insights.config import Settings
from artist_insights.errors import DashboardError, TokenExpiredError
from artist_insights.models import Album, Artist, AudioFeatures, SearchResults, Track
from artist_insights.oauth import OAuthStateStore, build_authorize_url
from artist_insights.sources import DataSource
from artist_insights.tokens import TokenStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

PLATFORM = "spotify"


class SpotifyDataClient:
    def __init__(
        self,
        settings: Settings,
        source: DataSource,
        token_store: TokenStore,
        state_store: OAuthStateStore | None = None,
    ) -> None:
        self.settings = settings
        self.source = source
        self.token_store = token_store
        self.state_store = state_store or OAuthStateStore()
        self.tracks: list[Track] = []
        self.albums: list[Album] = []
        self.artists: list[Artist] = []
        self.similar_artists: list[Artist] = []
        self.error: str | None = None
        # Held by callers across a fetch and the snapshot that reports it.
        self.lock = threading.RLock()

    @property
    def access_token(self) -> str | None:
        return self.token_store.get_token(PLATFORM)

    def set_access_token(self, token: str) -> None:
        self.token_store.set_token(PLATFORM, token)
        self.error = None

    def disconnect(self) -> None:
        self.token_store.clear_token(PLATFORM)

    def authenticate(self) -> str:
        """Return the provider URL the user must visit to grant access."""
        state = self.state_store.issue()
        return build_authorize_url(self.settings, state)

    def request(self, fn: Callable[[str | None], T]) -> T:
        """Run ``fn`` with the current token, handling an expired token.

        On HTTP 401 the stored token is cleared and the error message set
        before the failure is re-raised.
        """
        try:
            return fn(self.access_token)
        except TokenExpiredError as exc:
            logger.info("Spotify token rejected; clearing stored token")
            self.disconnect()
            self.error = str(exc)
            raise

    def fetch_featured_artist_data(self, artist_name: str | None = None) -> bool:
        artist_name = artist_name or self.settings.featured_artist
        with self.lock:
            self.error = None
            try:
                catalog = self.request(lambda token: self.source.featured_artist(token, artist_name))
            except TokenExpiredError:
                return False
            except DashboardError as exc:
                self.error = str(exc)
                logger.warning("Featured artist fetch failed: %s", exc)
                return False

            self.artists = catalog.artists
            self.albums = catalog.albums
            self.tracks = catalog.tracks
            self.similar_artists = catalog.similar_artists
            return True

    def search_content(self, query: str, types: tuple[str, ...] = ("artist", "track", "album")) -> SearchResults:
        if not query or not query.strip():
            return SearchResults()
        try:
            return self.request(lambda token: self.source.search(token, query.strip(), types))
        except TokenExpiredError:
            return SearchResults()
        except DashboardError as exc:
            logger.warning("Search for %r failed: %s", query, exc)
            self.error = str(exc)
            return SearchResults()

    def get_audio_features(self, track_ids: list[str]) -> list[AudioFeatures | None]:
        if not track_ids:
            return []
        try:
            return self.request(lambda token: self.source.audio_features(token, track_ids))
        except TokenExpiredError:
            return []
        except DashboardError as exc:
            logger.warning("Audio features fetch failed: %s", exc)
            self.error = str(exc)
            return []

    def snapshot(self) -> dict:
        with self.lock:
            return {
                "connected": self.access_token is not None,
                "source": self.source.name,
                "error": self.error,
                "artists": [a.to_dict() for a in self.artists],
                "tracks": [t.to_dict() for t in self.tracks],
                "albums": [a.to_dict() for a in self.albums],
                "similar_artists": [a.to_dict() for a in self.similar_artists],
            }
