"""HTTP clients for the non-Spotify platforms."""
from __future__ import annotations

import logging

import requests

from artist_insights.errors import ConfigurationError, TokenExpiredError, UpstreamError
from artist_insights.models import UnifiedTrack
from artist_insights.normalize import (
    unified_track_from_apple_music,
    unified_track_from_soundcloud,
    unified_track_from_tidal,
)

logger = logging.getLogger(__name__)

SOUNDCLOUD_TRACKS_URL = "https://api.soundcloud.com/tracks"
APPLE_MUSIC_SEARCH_URL = "https://api.music.apple.com/v1/catalog/us/search"
TIDAL_SEARCH_URL = "https://api.tidalhifi.com/v1/search/tracks"
GENIUS_API_URL = "https://api.genius.com"

_PAGE_LIMIT = 50


def _get_json(platform: str, url: str, *, timeout: int, **kwargs) -> dict | list:
    try:
        response = requests.get(url, timeout=timeout, **kwargs)
    except requests.RequestException as exc:
        logger.warning("%s request failed: %s", platform, exc)
        raise UpstreamError(platform, None, f"{platform} request failed") from exc
    if response.status_code == 401:
        raise TokenExpiredError(platform)
    if not response.ok:
        raise UpstreamError(platform, response.status_code, f"{platform} API error: {response.status_code}")
    return response.json()


def search_soundcloud(client_id: str, query: str, timeout: int = 15) -> list[UnifiedTrack]:
    if not client_id:
        raise ConfigurationError("SoundCloud client ID not configured")
    data = _get_json(
        "soundcloud",
        SOUNDCLOUD_TRACKS_URL,
        params={"q": query, "client_id": client_id, "limit": _PAGE_LIMIT},
        timeout=timeout,
    )
    return [unified_track_from_soundcloud(item) for item in data]


def search_apple_music(developer_token: str, query: str, timeout: int = 15) -> list[UnifiedTrack]:
    if not developer_token:
        raise ConfigurationError("Apple Music developer token not configured")
    data = _get_json(
        "apple_music",
        APPLE_MUSIC_SEARCH_URL,
        params={"term": query, "types": "songs", "limit": 25},
        headers={"Authorization": f"Bearer {developer_token}"},
        timeout=timeout,
    )
    songs = ((data.get("results") or {}).get("songs") or {}).get("data") or []
    return [unified_track_from_apple_music(item) for item in songs]


def search_tidal(token: str, query: str, timeout: int = 15) -> list[UnifiedTrack]:
    if not token:
        raise ConfigurationError("Tidal client ID not configured")
    data = _get_json(
        "tidal",
        TIDAL_SEARCH_URL,
        params={"query": query, "limit": _PAGE_LIMIT},
        headers={"X-Tidal-Token": token},
        timeout=timeout,
    )
    return [unified_track_from_tidal(item) for item in data.get("items") or []]


def lookup_genius_song(access_token: str, track_name: str, artist_name: str, timeout: int = 15) -> dict | None:
    """Find the best Genius match for a track and return its page statistics."""
    headers = {"Authorization": f"Bearer {access_token}"}
    search = _get_json(
        "genius",
        f"{GENIUS_API_URL}/search",
        params={"q": f"{track_name} {artist_name}"},
        headers=headers,
        timeout=timeout,
    )
    hits = (search.get("response") or {}).get("hits") or []
    if not hits:
        return None

    song_id = hits[0]["result"]["id"]
    detail = _get_json("genius", f"{GENIUS_API_URL}/songs/{song_id}", headers=headers, timeout=timeout)
    song = (detail.get("response") or {}).get("song") or {}
    stats = song.get("stats") or {}
    return {
        "genius_id": song.get("id", song_id),
        "genius_url": song.get("url", ""),
        "annotation_count": int(song.get("annotation_count") or 0),
        "page_views": int(stats.get("pageviews") or 0),
        "hot": bool(stats.get("hot")),
    }
