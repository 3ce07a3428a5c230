"""Seeded sample payloads standing in for a real analytics backend.

Every generator draws from its own ``random.Random`` seeded with the
provider seed plus the generator's inputs, so the same seed, date and
arguments always produce the same payload regardless of call order.
"""
from __future__ import annotations

import random
import re
from datetime import date, timedelta

from artist_insights.models import (
    Album,
    AlbumRef,
    Artist,
    ArtistCatalog,
    ArtistRef,
    AudioFeatures,
    SearchResults,
    Track,
    UnifiedTrack,
)

TIME_WINDOW_MULTIPLIERS = {
    "7d": 0.12,
    "30d": 0.5,
    "90d": 1.0,
    "6m": 2.2,
    "1y": 4.5,
    "all": 8.0,
}
TIME_WINDOW_DAYS = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "6m": 180,
    "1y": 365,
    "all": 730,
}
PLATFORM_MULTIPLIERS = {
    "spotify": 1.0,
    "soundcloud": 0.6,
    "apple_music": 0.4,
    "tidal": 0.15,
}
BASE_STREAMS = {
    "Peace & Unity": 15420,
    "Mental Clarity": 12890,
    "Voices Rise": 18760,
    "Roots & Wings": 9340,
    "Northern Lights": 7890,
    "Inner Strength": 11230,
}
MAX_SERIES_POINTS = 90

# (track id, name, audio features, theme scores, SDG scores)
_STREAMING_TRACKS = [
    (
        "peace_unity",
        "Peace & Unity",
        {"danceability": 0.65, "energy": 0.78, "valence": 0.89, "tempo": 95.2},
        {"peace_love": 95, "social_justice": 85, "education": 78},
        {"sdg_4": 88, "sdg_10": 75, "sdg_16": 92},
    ),
    (
        "mental_clarity",
        "Mental Clarity",
        {"danceability": 0.45, "energy": 0.62, "valence": 0.71, "tempo": 88.7},
        {"mental_health": 95, "empowerment": 82, "identity": 88},
        {"sdg_4": 85, "sdg_10": 68, "sdg_16": 71},
    ),
    (
        "voices_rise",
        "Voices Rise",
        {"danceability": 0.72, "energy": 0.88, "valence": 0.83, "tempo": 102.4},
        {"empowerment": 92, "social_justice": 89, "equality": 85},
        {"sdg_4": 78, "sdg_10": 89, "sdg_16": 83},
    ),
    (
        "roots_wings",
        "Roots & Wings",
        {"danceability": 0.58, "energy": 0.71, "valence": 0.76, "tempo": 92.8},
        {"nature": 88, "identity": 92, "growth": 85},
        {"sdg_4": 82, "sdg_10": 78, "sdg_16": 80},
    ),
]

_LYRICS = {
    "peace & unity": (
        "[Verse 1]\n"
        "In the heart of Finland where the silence speaks\n"
        "Teaching young minds while my soul seeks peace\n"
        "Every word I write, every rhyme I breathe\n"
        "Fighting for the change that we all believe\n\n"
        "[Chorus]\n"
        "Peace and unity, that's the way we rise\n"
        "Breaking down the walls, opening up our eyes\n"
        "From the classroom to the studio lights\n"
        "Spreading love and hope through these northern nights\n\n"
        "[Verse 2]\n"
        "Mental health matters, let me make it clear\n"
        "Your struggles are valid, you don't fight alone here\n"
        "Together we're stronger, together we heal\n"
        "Through music and message, we make it real"
    ),
    "mental clarity": (
        "[Verse 1]\n"
        "Mind racing fast but I find my center\n"
        "Teaching by day, in the booth I'm a mentor\n"
        "Clarity comes when I speak my truth\n"
        "Every lesson learned, I pass to the youth\n\n"
        "[Chorus]\n"
        "Mental clarity, washing over me\n"
        "Finding inner peace through this melody\n"
        "Share the wisdom, break the stigma down\n"
        "In this northern land, we wear no crown but truth\n\n"
        "[Verse 2]\n"
        "Nature's calling, forest wisdom deep\n"
        "Ancient spirits that our ancestors keep\n"
        "Modern struggles with an ancient soul\n"
        "Healing through music makes us whole"
    ),
}
_DEFAULT_LYRICS = (
    "[Verse 1]\n"
    "Every rhyme I spit comes from the heart\n"
    "Teaching through my music, that's my art\n"
    "Finnish roots run deep, message runs true\n"
    "Spread love and peace in everything I do\n\n"
    "[Chorus]\n"
    "Rise above the noise, find your inner voice\n"
    "In the face of struggle, we always have a choice\n"
    "Unity and love, that's the Finnish way\n"
    "Together we build tomorrow, starting from today"
)

_THEMES = {
    "peace & unity": {
        "mental_health": 45,
        "social_justice": 85,
        "peace_love": 95,
        "nature": 25,
        "empowerment": 78,
        "identity": 65,
        "education": 82,
    },
    "mental clarity": {
        "mental_health": 95,
        "social_justice": 35,
        "peace_love": 78,
        "nature": 88,
        "empowerment": 82,
        "identity": 92,
        "education": 75,
    },
}
_DEFAULT_THEMES = {
    "mental_health": 70,
    "social_justice": 60,
    "peace_love": 80,
    "nature": 40,
    "empowerment": 75,
    "identity": 55,
    "education": 65,
}

_SOUNDCLOUD_TRACKS = [
    ("sc_track_1", "Peace & Unity (SoundCloud Version)", 204000, 78, "2024-03-15", 12547, 892, 234, "peace-unity"),
    ("sc_track_2", "Mental Clarity (Demo)", 252000, 65, "2024-02-10", 8934, 567, 123, "mental-clarity"),
    ("sc_track_3", "Voices Rise", 198000, 82, "2024-04-20", 15672, 1243, 456, "voices-rise"),
]

_EXPORT_GENRES = ["finnish rap", "conscious hip hop", "nordic music"]


def slugify(text: str, sep: str = "-") -> str:
    return re.sub(r"\s+", sep, text.strip().lower())


class SampleDataProvider:
    def __init__(self, seed: int = 42, today: date | None = None) -> None:
        self.seed = seed
        self.today = today or date.today()

    def _rng(self, *parts: object) -> random.Random:
        return random.Random(":".join(str(p) for p in (self.seed, *parts)))

    # ------------------------------------------------------------------
    # Catalog data
    # ------------------------------------------------------------------

    def featured_catalog(self, artist_name: str) -> ArtistCatalog:
        artist_id = f"mock_{slugify(artist_name, '_')}"
        ref = ArtistRef(id=artist_id, name=artist_name)
        album = AlbumRef(id="album_1", name="Messages of Hope", release_date="2024-03-15")
        tracks = [
            Track(id="track_1", name="Peace & Unity", artists=[ref], album=album, popularity=42, duration_ms=204000),
            Track(id="track_2", name="Mental Clarity", artists=[ref], album=album, popularity=38, duration_ms=252000),
            Track(id="track_3", name="Voices Rise", artists=[ref], album=album, popularity=51, duration_ms=198000),
        ]
        return ArtistCatalog(
            artists=[
                Artist(
                    id=artist_id,
                    name=artist_name,
                    popularity=45,
                    followers=1250,
                    genres=["finnish rap", "conscious hip hop"],
                )
            ],
            tracks=tracks,
            albums=[
                Album(
                    id="album_1",
                    name="Messages of Hope",
                    artists=[ref],
                    release_date="2024-03-15",
                    total_tracks=8,
                )
            ],
            similar_artists=[
                Artist(id="similar_1", name="Pehmoaino", popularity=67, followers=15420,
                       genres=["finnish rap", "alternative hip hop"]),
                Artist(id="similar_2", name="Portion Boys", popularity=78, followers=45230,
                       genres=["finnish rap", "trap"]),
                Artist(id="similar_3", name="Mikael Gabriel", popularity=82, followers=156780,
                       genres=["finnish rap", "pop rap"]),
            ],
        )

    def search_results(self, query: str, types: tuple[str, ...] = ("artist", "track", "album")) -> SearchResults:
        results = SearchResults()
        if "artist" in types:
            results.artists.append(
                Artist(id="mock_artist_1", name=f'Mock Artist for "{query}"', popularity=50,
                       followers=1000, genres=["demo"])
            )
        if "track" in types:
            results.tracks.append(
                Track(
                    id="mock_track_1",
                    name=f'Mock Track for "{query}"',
                    artists=[ArtistRef(id="mock", name="Mock Artist")],
                    album=AlbumRef(id="mock", name="Mock Album", release_date="2024-01-01"),
                    popularity=50,
                    duration_ms=180000,
                )
            )
        return results

    def audio_features(self, track_ids: list[str]) -> list[AudioFeatures]:
        features = []
        for track_id in track_ids:
            rng = self._rng("features", track_id)
            features.append(
                AudioFeatures(
                    danceability=rng.random(),
                    energy=rng.random(),
                    valence=rng.random(),
                    tempo=60 + rng.random() * 140,
                    acousticness=rng.random(),
                    instrumentalness=rng.random(),
                )
            )
        return features

    def platform_tracks(self, platform: str, artist_name: str) -> list[UnifiedTrack]:
        if platform == "soundcloud":
            return [
                UnifiedTrack(
                    id=track_id,
                    platform="soundcloud",
                    name=name,
                    artist=artist_name,
                    duration_ms=duration,
                    popularity=popularity,
                    release_date=released,
                    stream_count=streams,
                    likes_count=likes,
                    reposts_count=reposts,
                    platform_specific={
                        "soundcloud_permalink": f"https://soundcloud.com/{slugify(artist_name)}/{permalink}",
                    },
                )
                for track_id, name, duration, popularity, released, streams, likes, reposts, permalink
                in _SOUNDCLOUD_TRACKS
            ]

        multiplier = PLATFORM_MULTIPLIERS.get(platform, 1.0)
        catalog = self.featured_catalog(artist_name)
        tracks = []
        for track in catalog.tracks:
            streams = int(BASE_STREAMS.get(track.name, 8000) * multiplier)
            tracks.append(
                UnifiedTrack(
                    id=f"{platform}_{track.id}",
                    platform=platform,
                    name=track.name,
                    artist=artist_name,
                    album=track.album.name,
                    duration_ms=track.duration_ms,
                    popularity=track.popularity,
                    release_date=track.album.release_date,
                    stream_count=streams,
                    platform_specific={f"{platform}_id": track.id},
                )
            )
        return tracks

    # ------------------------------------------------------------------
    # Streaming numbers
    # ------------------------------------------------------------------

    def streaming_metrics(self, track_name: str, time_window: str, platform: str) -> dict:
        rng = self._rng("streams", track_name, time_window, platform)
        base = BASE_STREAMS.get(track_name, 8000)
        total_streams = int(base * TIME_WINDOW_MULTIPLIERS.get(time_window, 1.0))
        platform_streams = int(total_streams * PLATFORM_MULTIPLIERS.get(platform, 1.0))

        days = TIME_WINDOW_DAYS.get(time_window, 90)
        daily_average = platform_streams // days
        series = []
        cumulative = 0
        for i in range(min(days, MAX_SERIES_POINTS)):
            day = self.today - timedelta(days=days - i)
            variation = (rng.random() - 0.5) * 0.6
            streams = max(0, int(daily_average * (1 + variation)))
            cumulative += streams
            series.append({"date": day.isoformat(), "streams": streams, "cumulative_streams": cumulative})

        previous = int(platform_streams * (0.6 + rng.random() * 0.3))
        growth_rate = (platform_streams - previous) / previous * 100 if previous else 0.0

        return {
            "total_streams": platform_streams,
            "daily_average": daily_average,
            "peak_day_streams": max((d["streams"] for d in series), default=0),
            "growth_rate": growth_rate,
            "engagement_metrics": {
                "completion_rate": 88 + rng.random() * 10,
                "skip_rate": rng.random() * 12,
                "save_rate": 65 + rng.random() * 30,
                "share_rate": rng.random() * 8,
            },
            "time_series_data": series,
            "comparative_ranking": rng.randint(1, 10),
            "platform_performance": {
                platform: {
                    "streams": platform_streams,
                    "engagement": 85 + rng.random() * 10,
                    "discovery_rate": 15 + rng.random() * 20,
                }
            },
        }

    def streaming_numbers(self, time_window: str, platform: str, artist_name: str) -> list[dict]:
        return [
            {
                "track_id": track_id,
                "track_name": name,
                "artist_name": artist_name,
                "platform": platform,
                "streaming_metrics": self.streaming_metrics(name, time_window, platform),
                "audio_features": dict(features),
                "social_impact": {"themes": dict(themes), "sdg_scores": dict(sdg)},
            }
            for track_id, name, features, themes, sdg in _STREAMING_TRACKS
        ]

    # ------------------------------------------------------------------
    # Export records
    # ------------------------------------------------------------------

    def export_tracks(self, track_ids: list[str], artist_name: str) -> list[dict]:
        tracks = []
        for index, track_id in enumerate(track_ids):
            rng = self._rng("export-track", index, track_id)
            tracks.append(
                {
                    "id": track_id,
                    "name": f"Track {index + 1}",
                    "popularity": rng.randint(0, 99),
                    "duration_ms": 180000 + rng.randint(0, 119999),
                    "audio_features": {
                        "danceability": rng.random(),
                        "energy": rng.random(),
                        "valence": rng.random(),
                        "tempo": 60 + rng.random() * 140,
                        "acousticness": rng.random(),
                        "instrumentalness": rng.random(),
                        "speechiness": rng.random(),
                        "liveness": rng.random(),
                        "loudness": -20 + rng.random() * 15,
                    },
                    "release_date": "2024-01-01",
                    "artist_name": artist_name,
                }
            )
        return tracks

    def export_artists(self, artist_ids: list[str], artist_name: str) -> list[dict]:
        artists = []
        for index, artist_id in enumerate(artist_ids):
            rng = self._rng("export-artist", index, artist_id)
            artists.append(
                {
                    "id": artist_id,
                    "name": artist_name if index == 0 else f"Similar Artist {index}",
                    "popularity": rng.randint(0, 99),
                    "followers": rng.randint(0, 9999),
                    "genres": list(_EXPORT_GENRES),
                    "monthly_listeners": rng.randint(0, 49999),
                }
            )
        return artists

    def export_albums(self, album_ids: list[str], artist_name: str) -> list[dict]:
        albums = []
        for index, album_id in enumerate(album_ids):
            rng = self._rng("export-album", index, album_id)
            albums.append(
                {
                    "id": album_id,
                    "name": f"Album {index + 1}",
                    "release_date": f"2024-{index % 12 + 1:02d}-01",
                    "total_tracks": 8 + rng.randint(0, 7),
                    "artist_name": artist_name,
                }
            )
        return albums

    # ------------------------------------------------------------------
    # Lyrics and social impact
    # ------------------------------------------------------------------

    def lyrical_analysis(self, track_name: str, artist_name: str) -> dict:
        key = track_name.strip().lower()
        lyrics = _LYRICS.get(key, _DEFAULT_LYRICS)
        words = re.findall(r"[a-z']+", re.sub(r"\[.*?\]", "", lyrics.lower()))
        return {
            "track_id": f"genius_{slugify(track_name, '_')}",
            "track_name": track_name,
            "artist_name": artist_name,
            "lyrics": {
                "full_text": lyrics,
                "verse_count": lyrics.count("[Verse"),
                "chorus_count": lyrics.count("[Chorus"),
                "word_count": len(words),
                "unique_words": len(set(words)),
                "reading_level": 8.2,
            },
            "themes": dict(_THEMES.get(key, _DEFAULT_THEMES)),
            "sentiment": {
                "overall_score": 0.82,
                "positive_percentage": 78,
                "negative_percentage": 8,
                "neutral_percentage": 14,
                "emotional_intensity": 85,
            },
            "impact_metrics": {
                "sdg_4_education": 88,
                "sdg_10_equality": 75,
                "sdg_16_peace_justice": 92,
                "social_message_strength": 85,
            },
            "linguistic_analysis": {
                "language": "english",
                "complexity_score": 7.8,
                "metaphor_count": 12,
                "rhyme_scheme": "ABAB",
                "rhythm_pattern": "iambic",
            },
            "genius_data": {
                "genius_url": f"https://genius.com/{slugify(artist_name)}-{slugify(track_name)}-lyrics",
                "annotation_count": 8,
                "page_views": 15420,
                "hot_score": 78,
            },
        }

    def social_impact(self) -> dict:
        return {
            "sdgScores": {"education": 92, "equality": 84, "peace": 80},
            "overallImpact": 85.3,
            "communityReach": 12,
            "positiveMessages": 94,
            "themes": {
                "mentalHealth": 34,
                "peaceLove": 28,
                "socialJustice": 22,
                "nature": 18,
                "empowerment": 16,
                "identity": 12,
            },
        }
