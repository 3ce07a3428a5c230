"""Export payloads meant to be loaded into pandas for offline analysis."""
from __future__ import annotations

from datetime import datetime, timezone

from artist_insights.sample_data import SampleDataProvider

EXPORT_FORMATS = ("json", "csv", "parquet")
CSV_HEADERS = ["id", "name", "popularity", "duration_ms", "danceability", "energy", "valence", "tempo"]

ANALYSIS_SUGGESTIONS = {
    "python_libraries": ["pandas", "plotly", "seaborn", "scikit-learn"],
    "analysis_types": [
        "Audio feature correlation analysis",
        "Popularity prediction modeling",
        "Genre clustering analysis",
        "Temporal trend analysis",
        "Comparative artist analysis",
    ],
    "sample_code": {
        "pandas_import": "import pandas as pd\nimport plotly.express as px",
        "data_loading": "df = pd.json_normalize(data['tracks'])",
        "basic_viz": "fig = px.scatter(df, x='popularity', y='audio_features.energy', title='Popularity vs Energy')",
    },
}


def split_ids(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_export_payload(
    provider: SampleDataProvider,
    artist_name: str,
    track_ids: list[str],
    artist_ids: list[str],
    album_ids: list[str],
    fmt: str = "json",
) -> dict:
    return {
        "metadata": {
            "export_timestamp": _timestamp(),
            "artist_focus": artist_name,
            "total_tracks": len(track_ids),
            "total_artists": len(artist_ids),
            "total_albums": len(album_ids),
            "format": fmt,
        },
        "tracks": provider.export_tracks(track_ids, artist_name),
        "artists": provider.export_artists(artist_ids, artist_name),
        "albums": provider.export_albums(album_ids, artist_name),
        "analysis_suggestions": ANALYSIS_SUGGESTIONS,
    }


def _quoted(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def tracks_to_csv(tracks: list[dict]) -> str:
    """Header plus one row per track; the name column is always quoted."""
    rows = [",".join(CSV_HEADERS)]
    for track in tracks:
        features = track["audio_features"]
        rows.append(
            ",".join(
                [
                    str(track["id"]),
                    _quoted(track["name"]),
                    str(track["popularity"]),
                    str(track["duration_ms"]),
                    f"{features['danceability']:.3f}",
                    f"{features['energy']:.3f}",
                    f"{features['valence']:.3f}",
                    f"{features['tempo']:.1f}",
                ]
            )
        )
    return "\n".join(rows)


def export_filename(artist_name: str, extension: str) -> str:
    slug = "_".join(artist_name.lower().split()) or "artist"
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{slug}_data_{stamp}.{extension}"


def parquet_instructions(json_url: str, artist_name: str) -> dict:
    slug = "_".join(artist_name.lower().split()) or "artist"
    return {
        "message": "Parquet export not implemented in this demo",
        "suggestion": "Use the JSON export and convert to Parquet using pandas.to_parquet()",
        "sample_python": (
            "import pandas as pd\n"
            "import requests\n\n"
            "# Fetch JSON data\n"
            f"response = requests.get('{json_url}')\n"
            "data = response.json()\n\n"
            "# Convert to DataFrame and save as Parquet\n"
            "df = pd.json_normalize(data['tracks'])\n"
            f"df.to_parquet('{slug}_tracks.parquet')"
        ),
    }


def build_filtered_export(
    artist_name: str,
    tracks: list[dict],
    artists: list[dict],
    albums: list[dict],
    filters: dict,
    analysis_type: str,
) -> dict:
    return {
        "metadata": {
            "export_timestamp": _timestamp(),
            "artist_focus": artist_name,
            "analysis_type": analysis_type,
            "filters_applied": filters,
            "data_points": len(tracks) + len(artists) + len(albums),
        },
        "filtered_data": {"tracks": tracks, "artists": artists, "albums": albums},
        "analysis_ready": {
            "comparative_analysis": len(tracks) > 1 or len(artists) > 1,
            "temporal_analysis": any(t.get("release_date") for t in tracks),
            "audio_analysis": any(t.get("audio_features") for t in tracks),
            "social_impact_analysis": True,
        },
        "python_integration": {
            "recommended_setup": [
                "pip install pandas plotly seaborn spotipy",
                "import pandas as pd",
                "import plotly.graph_objects as go",
                "from datetime import datetime",
            ],
            "data_structure": {
                "tracks": "DataFrame with audio features and metadata",
                "artists": "DataFrame with popularity and genre data",
                "albums": "DataFrame with release and track count data",
            },
            "analysis_examples": [
                "Audio feature correlation heatmap",
                "Popularity trend analysis",
                "Genre distribution visualization",
                "Artist similarity clustering",
            ],
        },
    }
