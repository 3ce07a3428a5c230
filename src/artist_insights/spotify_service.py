from __future__ import annotations

import logging
import warnings
from typing import Iterable

import spotipy
from requests.exceptions import HTTPError
from spotipy.exceptions import SpotifyException

from artist_insights.errors import NotAuthenticatedError, TokenExpiredError, UpstreamError

logger = logging.getLogger(__name__)


def _status_of(exc: HTTPError | SpotifyException) -> int | None:
    if isinstance(exc, HTTPError):
        return exc.response.status_code if exc.response is not None else None
    return exc.http_status


class SpotifyService:
    """Spotify Web API calls made on behalf of a user access token."""

    # Spotify's search endpoint enforces a maximum of 20 results per page for
    # restricted app credentials.  Using a higher value returns HTTP 400
    # "Invalid limit", so we cap every page request at this safe maximum.
    SEARCH_PAGE_LIMIT = 20
    _AUDIO_FEATURES_BATCH = 100

    def __init__(self, access_token: str | None, timeout: int = 15) -> None:
        if not access_token:
            raise NotAuthenticatedError("spotify")
        # No retries: a failed call surfaces straight to the caller.
        self.client = spotipy.Spotify(
            auth=access_token,
            requests_timeout=timeout,
            retries=0,
            status_retries=0,
        )

    def _call(self, method: str, *args, **kwargs):
        try:
            return getattr(self.client, method)(*args, **kwargs)
        except (HTTPError, SpotifyException) as exc:
            status = _status_of(exc)
            if status == 401:
                raise TokenExpiredError("spotify") from exc
            logger.warning("Spotify %s failed with status %s", method, status)
            raise UpstreamError("spotify", status, f"Spotify API error: {status}") from exc

    def search(self, query: str, types: Iterable[str] = ("artist", "track"), limit: int = 20) -> dict:
        page_size = max(1, min(limit, self.SEARCH_PAGE_LIMIT))
        return self._call("search", q=query, type=",".join(types), limit=page_size)

    def audio_features(self, track_ids: list[str]) -> list[dict | None]:
        features: list[dict | None] = []
        for start in range(0, len(track_ids), self._AUDIO_FEATURES_BATCH):
            batch = track_ids[start:start + self._AUDIO_FEATURES_BATCH]
            try:
                features.extend(self._call("audio_features", batch) or [])
            except UpstreamError as exc:
                if exc.status == 403:
                    warnings.warn(
                        "Spotify audio-features endpoint returned 403 Forbidden. "
                        "This endpoint may be restricted for your app credentials. "
                        "Falling back to empty features.",
                        RuntimeWarning,
                        stacklevel=2,
                    )
                    return []
                raise
        return features

    def find_artist(self, name: str) -> dict | None:
        page = self.search(name, types=("artist",), limit=1)
        items = (page.get("artists") or {}).get("items") or []
        return items[0] if items else None

    def artist_albums(self, artist_id: str, limit: int = 20) -> list[dict]:
        page = self._call("artist_albums", artist_id, include_groups="album,single", limit=limit)
        return page.get("items") or []

    def artist_top_tracks(self, artist_id: str, country: str = "FI") -> list[dict]:
        return self._call("artist_top_tracks", artist_id, country=country).get("tracks") or []

    def related_artists(self, artist_id: str, limit: int = 10) -> list[dict]:
        try:
            artists = self._call("artist_related_artists", artist_id).get("artists") or []
        except UpstreamError as exc:
            if exc.status in (403, 404):
                warnings.warn(
                    f"Spotify related-artists endpoint returned {exc.status}. "
                    "Falling back to no similar artists.",
                    RuntimeWarning,
                    stacklevel=2,
                )
                return []
            raise
        return artists[:limit]

    def current_user(self) -> dict:
        return self._call("current_user")

    def top_tracks(self, time_range: str = "medium_term", limit: int = 20) -> list[dict]:
        return self._call("current_user_top_tracks", limit=limit, time_range=time_range).get("items") or []

    def top_artists(self, time_range: str = "medium_term", limit: int = 20) -> list[dict]:
        return self._call("current_user_top_artists", limit=limit, time_range=time_range).get("items") or []

    def recently_played(self, limit: int = 50) -> list[dict]:
        return self._call("current_user_recently_played", limit=limit).get("items") or []
