"""Convert raw platform payloads into the dashboard's record types."""
from __future__ import annotations

from artist_insights.models import (
    Album,
    AlbumRef,
    Artist,
    ArtistRef,
    AudioFeatures,
    Track,
    UnifiedArtist,
    UnifiedTrack,
)


def _artist_refs(raw: dict) -> list[ArtistRef]:
    return [ArtistRef(id=a.get("id", ""), name=a.get("name", "")) for a in raw.get("artists") or []]


def track_from_spotify(raw: dict) -> Track:
    album = raw.get("album") or {}
    features = raw.get("audio_features")
    return Track(
        id=raw["id"],
        name=raw.get("name", ""),
        artists=_artist_refs(raw),
        album=AlbumRef(
            id=album.get("id", ""),
            name=album.get("name", ""),
            release_date=album.get("release_date", ""),
        ),
        popularity=int(raw.get("popularity") or 0),
        duration_ms=int(raw.get("duration_ms") or 0),
        preview_url=raw.get("preview_url"),
        external_url=(raw.get("external_urls") or {}).get("spotify", ""),
        audio_features=AudioFeatures.from_spotify(features) if features else None,
    )


def artist_from_spotify(raw: dict) -> Artist:
    return Artist(
        id=raw["id"],
        name=raw.get("name", ""),
        popularity=int(raw.get("popularity") or 0),
        followers=int((raw.get("followers") or {}).get("total") or 0),
        genres=list(raw.get("genres") or []),
    )


def album_from_spotify(raw: dict) -> Album:
    return Album(
        id=raw["id"],
        name=raw.get("name", ""),
        artists=_artist_refs(raw),
        release_date=raw.get("release_date", ""),
        total_tracks=int(raw.get("total_tracks") or 0),
    )


def unified_track_from_spotify(raw: dict) -> UnifiedTrack:
    album = raw.get("album") or {}
    return UnifiedTrack(
        id=raw["id"],
        platform="spotify",
        name=raw.get("name", ""),
        artist=", ".join(a.get("name", "") for a in raw.get("artists") or []),
        album=album.get("name"),
        duration_ms=int(raw.get("duration_ms") or 0),
        popularity=int(raw.get("popularity") or 0),
        release_date=album.get("release_date", ""),
        preview_url=raw.get("preview_url"),
        platform_specific={
            "spotify_id": raw["id"],
            "external_url": (raw.get("external_urls") or {}).get("spotify", ""),
        },
    )


def unified_artist_from_spotify(raw: dict) -> UnifiedArtist:
    return UnifiedArtist(
        id=raw["id"],
        platform="spotify",
        name=raw.get("name", ""),
        followers=int((raw.get("followers") or {}).get("total") or 0),
        popularity=int(raw.get("popularity") or 0),
        genres=list(raw.get("genres") or []),
    )


def unified_track_from_soundcloud(raw: dict) -> UnifiedTrack:
    plays = int(raw.get("playback_count") or 0)
    return UnifiedTrack(
        id=str(raw["id"]),
        platform="soundcloud",
        name=raw.get("title", ""),
        artist=(raw.get("user") or {}).get("username", ""),
        duration_ms=int(raw.get("duration") or 0),
        # SoundCloud has no popularity score; one point per thousand plays.
        popularity=min(100, plays // 1000),
        release_date=raw.get("created_at", ""),
        preview_url=raw.get("stream_url"),
        stream_count=plays,
        likes_count=raw.get("likes_count"),
        reposts_count=raw.get("reposts_count"),
        platform_specific={"soundcloud_permalink": raw.get("permalink_url", "")},
    )


def unified_track_from_apple_music(raw: dict) -> UnifiedTrack:
    attributes = raw.get("attributes") or {}
    previews = attributes.get("previews") or [{}]
    return UnifiedTrack(
        id=str(raw["id"]),
        platform="apple_music",
        name=attributes.get("name", ""),
        artist=attributes.get("artistName", ""),
        album=attributes.get("albumName"),
        duration_ms=int(attributes.get("durationInMillis") or 0),
        popularity=50,
        release_date=attributes.get("releaseDate", ""),
        preview_url=previews[0].get("url"),
        platform_specific={"apple_music_id": str(raw["id"])},
    )


def unified_track_from_tidal(raw: dict) -> UnifiedTrack:
    album = raw.get("album") or {}
    return UnifiedTrack(
        id=str(raw["id"]),
        platform="tidal",
        name=raw.get("title", ""),
        artist=(raw.get("artist") or {}).get("name", ""),
        album=album.get("title"),
        duration_ms=int(raw.get("duration") or 0) * 1000,
        popularity=int(raw.get("popularity") or 50),
        release_date=album.get("releaseDate") or raw.get("dateAdded", ""),
        platform_specific={"tidal_id": str(raw["id"])},
    )
