"""Where dashboard data comes from: live platform APIs or seeded samples.

The source is chosen once when the application starts; callers never
switch to sample data on their own when a live call fails.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any

from artist_insights import platform_clients
from artist_insights.config import Settings
from artist_insights.errors import ConfigurationError, NotAuthenticatedError
from artist_insights.models import (
    ArtistCatalog,
    AudioFeatures,
    SearchResults,
    UnifiedArtist,
    UnifiedTrack,
)
from artist_insights.normalize import (
    album_from_spotify,
    artist_from_spotify,
    track_from_spotify,
    unified_artist_from_spotify,
    unified_track_from_spotify,
)
from artist_insights.sample_data import SampleDataProvider
from artist_insights.spotify_service import SpotifyService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlatformSearchResult:
    platform: str
    tracks: list[UnifiedTrack] = field(default_factory=list)
    artists: list[UnifiedArtist] = field(default_factory=list)
    total_results: int = 0
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        if self.note is None:
            payload.pop("note")
        return payload


class DataSource(ABC):
    name = "abstract"

    @abstractmethod
    def featured_artist(self, token: str | None, artist_name: str) -> ArtistCatalog: ...

    @abstractmethod
    def search(self, token: str | None, query: str, types: tuple[str, ...]) -> SearchResults: ...

    @abstractmethod
    def audio_features(self, token: str | None, track_ids: list[str]) -> list[AudioFeatures | None]: ...

    @abstractmethod
    def platform_search(self, platform: str, token: str | None, query: str) -> PlatformSearchResult: ...

    @abstractmethod
    def lyrical_analysis(self, token: str | None, track_name: str, artist_name: str) -> dict: ...


class MockDataSource(DataSource):
    name = "mock"

    def __init__(self, provider: SampleDataProvider) -> None:
        self.provider = provider

    def featured_artist(self, token, artist_name):
        return self.provider.featured_catalog(artist_name)

    def search(self, token, query, types):
        return self.provider.search_results(query, types)

    def audio_features(self, token, track_ids):
        return list(self.provider.audio_features(track_ids))

    def platform_search(self, platform, token, query):
        tracks = self.provider.platform_tracks(platform, query)
        artists: list[UnifiedArtist] = []
        if platform == "spotify":
            for track, features in zip(tracks, self.provider.audio_features([t.id for t in tracks])):
                track.audio_features = features
            artists = [
                UnifiedArtist(
                    id=artist.id,
                    platform="spotify",
                    name=artist.name,
                    followers=artist.followers,
                    popularity=artist.popularity,
                    genres=artist.genres,
                )
                for artist in self.provider.featured_catalog(query).artists
            ]
        return PlatformSearchResult(
            platform=platform,
            tracks=tracks,
            artists=artists,
            total_results=len(tracks),
            note="Demo data - replace with real platform API integration",
        )

    def lyrical_analysis(self, token, track_name, artist_name):
        return self.provider.lyrical_analysis(track_name, artist_name)


class LiveDataSource(DataSource):
    name = "live"

    def __init__(self, settings: Settings, provider: SampleDataProvider) -> None:
        self.settings = settings
        # Lyrics text and theme scoring have no live backend yet.
        self.provider = provider

    def _spotify(self, token: str | None) -> SpotifyService:
        return SpotifyService(token, timeout=self.settings.http_timeout)

    def featured_artist(self, token, artist_name):
        service = self._spotify(token)
        artist = service.find_artist(artist_name)
        if artist is None:
            logger.info("No Spotify artist found for %r", artist_name)
            return ArtistCatalog()
        return ArtistCatalog(
            artists=[artist_from_spotify(artist)],
            albums=[album_from_spotify(a) for a in service.artist_albums(artist["id"])],
            tracks=[track_from_spotify(t) for t in service.artist_top_tracks(artist["id"])],
            similar_artists=[artist_from_spotify(a) for a in service.related_artists(artist["id"])],
        )

    def search(self, token, query, types):
        data = self._spotify(token).search(query, types=types, limit=SpotifyService.SEARCH_PAGE_LIMIT)
        return SearchResults(
            artists=[artist_from_spotify(a) for a in (data.get("artists") or {}).get("items") or []],
            tracks=[track_from_spotify(t) for t in (data.get("tracks") or {}).get("items") or []],
            albums=[album_from_spotify(a) for a in (data.get("albums") or {}).get("items") or []],
        )

    def audio_features(self, token, track_ids):
        raw = self._spotify(token).audio_features(track_ids)
        return [AudioFeatures.from_spotify(item) if item else None for item in raw]

    def platform_search(self, platform, token, query):
        timeout = self.settings.http_timeout
        if platform == "spotify":
            return self._spotify_search(token, query)
        if platform == "soundcloud":
            tracks = platform_clients.search_soundcloud(self.settings.soundcloud_client_id, query, timeout)
        elif platform == "apple_music":
            tracks = platform_clients.search_apple_music(
                token or self.settings.apple_music_developer_token, query, timeout
            )
        elif platform == "tidal":
            tracks = platform_clients.search_tidal(token or self.settings.tidal_client_id, query, timeout)
        else:
            raise ConfigurationError(f"Unsupported platform: {platform}")
        return PlatformSearchResult(platform=platform, tracks=tracks, total_results=len(tracks))

    def _spotify_search(self, token: str | None, query: str) -> PlatformSearchResult:
        service = self._spotify(token)
        data = service.search(query, types=("track", "artist"), limit=SpotifyService.SEARCH_PAGE_LIMIT)
        track_page = data.get("tracks") or {}
        tracks = [unified_track_from_spotify(t) for t in track_page.get("items") or []]
        artists = [unified_artist_from_spotify(a) for a in (data.get("artists") or {}).get("items") or []]

        if tracks:
            features = service.audio_features([t.id for t in tracks[:20]])
            for track, raw in zip(tracks, features):
                if raw:
                    track.audio_features = AudioFeatures.from_spotify(raw)

        return PlatformSearchResult(
            platform="spotify",
            tracks=tracks,
            artists=artists,
            total_results=int(track_page.get("total") or len(tracks)),
        )

    def lyrical_analysis(self, token, track_name, artist_name):
        analysis = self.provider.lyrical_analysis(track_name, artist_name)
        if not token:
            raise NotAuthenticatedError("genius")
        song = platform_clients.lookup_genius_song(
            token, track_name, artist_name, timeout=self.settings.http_timeout
        )
        if song is not None:
            analysis["genius_data"].update(song)
        return analysis


def create_data_source(settings: Settings, provider: SampleDataProvider | None = None) -> DataSource:
    provider = provider or SampleDataProvider(seed=settings.sample_seed)
    if settings.data_source == "mock":
        return MockDataSource(provider)
    if settings.data_source == "live":
        return LiveDataSource(settings, provider)
    raise ConfigurationError(f"DATA_SOURCE must be 'live' or 'mock', got {settings.data_source!r}")
