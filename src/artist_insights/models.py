from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

PLATFORMS = ("spotify", "soundcloud", "apple_music", "tidal", "genius")
STREAMING_PLATFORMS = ("spotify", "soundcloud", "apple_music", "tidal")


@dataclass(slots=True)
class AudioFeatures:
    danceability: float = 0.0
    energy: float = 0.0
    valence: float = 0.0
    tempo: float = 0.0
    acousticness: float = 0.0
    instrumentalness: float = 0.0

    @classmethod
    def from_spotify(cls, raw: dict) -> "AudioFeatures":
        return cls(
            danceability=float(raw.get("danceability") or 0.0),
            energy=float(raw.get("energy") or 0.0),
            valence=float(raw.get("valence") or 0.0),
            tempo=float(raw.get("tempo") or 0.0),
            acousticness=float(raw.get("acousticness") or 0.0),
            instrumentalness=float(raw.get("instrumentalness") or 0.0),
        )


@dataclass(slots=True)
class ArtistRef:
    id: str
    name: str


@dataclass(slots=True)
class AlbumRef:
    id: str
    name: str
    release_date: str = ""


@dataclass(slots=True)
class Track:
    id: str
    name: str
    artists: list[ArtistRef]
    album: AlbumRef
    popularity: int = 0
    duration_ms: int = 0
    preview_url: str | None = None
    external_url: str = ""
    audio_features: AudioFeatures | None = None
    theme_scores: dict[str, int] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Artist:
    id: str
    name: str
    popularity: int = 0
    followers: int = 0
    genres: list[str] = field(default_factory=list)
    monthly_listeners: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Album:
    id: str
    name: str
    artists: list[ArtistRef]
    release_date: str = ""
    total_tracks: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class UnifiedTrack:
    """A track normalized across platforms and tagged with where it came from."""

    id: str
    platform: str
    name: str
    artist: str
    album: str | None = None
    duration_ms: int = 0
    popularity: int = 0
    release_date: str = ""
    preview_url: str | None = None
    stream_count: int | None = None
    likes_count: int | None = None
    reposts_count: int | None = None
    audio_features: AudioFeatures | None = None
    platform_specific: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class UnifiedArtist:
    id: str
    platform: str
    name: str
    followers: int = 0
    popularity: int = 0
    genres: list[str] = field(default_factory=list)
    verified: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class TokenSet:
    access_token: str
    refresh_token: str | None = None
    expires_in: int = 0
    token_type: str = "Bearer"
    scope: str = ""

    @classmethod
    def from_response(cls, payload: dict) -> "TokenSet":
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_in=int(payload.get("expires_in") or 0),
            token_type=payload.get("token_type", "Bearer"),
            scope=payload.get("scope", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ArtistCatalog:
    """Everything the dashboard shows about one artist."""

    artists: list[Artist] = field(default_factory=list)
    tracks: list[Track] = field(default_factory=list)
    albums: list[Album] = field(default_factory=list)
    similar_artists: list[Artist] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class SearchResults:
    artists: list[Artist] = field(default_factory=list)
    tracks: list[Track] = field(default_factory=list)
    albums: list[Album] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
