"""Dashboard, setup, session tokens, analytics settings and streaming numbers."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from artist_insights.analytics_settings import AnalyticsSettings, AnalyticsSettingsStore
from artist_insights.config import Settings
from artist_insights.data_client import SpotifyDataClient
from artist_insights.dependencies import (
    get_analytics_settings_store,
    get_data_client,
    get_sample_provider,
    get_settings,
    get_token_store,
)
from artist_insights.errors import DashboardError, TokenExpiredError
from artist_insights.models import PLATFORMS
from artist_insights.sample_data import SampleDataProvider
from artist_insights.spotify_service import SpotifyService
from artist_insights.tokens import TokenStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])

SPOTIFY_DATA_TYPES = ("overview", "tracks", "artists", "recent")


class PlatformTokenRequest(BaseModel):
    token: str


@router.get("/dashboard")
def dashboard(
    access_token: str | None = None,
    refresh_token: str | None = None,
    expires_in: int | None = None,
    client: SpotifyDataClient = Depends(get_data_client),
):
    """Landing page after the OAuth callback; stores any token it is handed."""
    with client.lock:
        if access_token:
            client.set_access_token(access_token)
        if refresh_token:
            client.token_store.set("spotify_refresh_token", refresh_token)

        client.fetch_featured_artist_data()
        payload = client.snapshot()
    payload["expires_in"] = expires_in
    return payload


@router.get("/setup")
def setup(
    error: str | None = None,
    settings: Settings = Depends(get_settings),
    token_store: TokenStore = Depends(get_token_store),
):
    return {
        "error": error,
        "spotify_configured": settings.spotify_configured,
        "redirect_uri": settings.spotify_redirect_uri,
        "data_source": settings.data_source,
        "featured_artist": settings.featured_artist,
        "connected_platforms": sorted(token_store.tokens()),
    }


@router.get("/api/dashboard/featured")
def featured_artist(
    artist: str | None = None,
    client: SpotifyDataClient = Depends(get_data_client),
):
    with client.lock:
        client.fetch_featured_artist_data(artist)
        return client.snapshot()


@router.get("/api/dashboard/search")
def dashboard_search(
    q: str = "",
    types: str = "artist,track,album",
    client: SpotifyDataClient = Depends(get_data_client),
):
    wanted = tuple(t.strip() for t in types.split(",") if t.strip())
    with client.lock:
        results = client.search_content(q, wanted)
        error = client.error
    payload = results.to_dict()
    payload["error"] = error
    return payload


@router.put("/api/session/tokens/{platform}")
def set_platform_token(
    platform: str,
    request: PlatformTokenRequest,
    token_store: TokenStore = Depends(get_token_store),
):
    if platform not in PLATFORMS:
        raise HTTPException(status_code=404, detail=f"Unknown platform: {platform}")
    token_store.set_token(platform, request.token)
    return {"platform": platform, "connected": True}


@router.delete("/api/session/tokens/{platform}")
def remove_platform_token(
    platform: str,
    token_store: TokenStore = Depends(get_token_store),
):
    if platform not in PLATFORMS:
        raise HTTPException(status_code=404, detail=f"Unknown platform: {platform}")
    token_store.clear_token(platform)
    return {"platform": platform, "connected": False}


@router.get("/api/settings/analytics", response_model=AnalyticsSettings)
def get_analytics_settings(store: AnalyticsSettingsStore = Depends(get_analytics_settings_store)):
    return store.get()


@router.put("/api/settings/analytics", response_model=AnalyticsSettings)
def replace_analytics_settings(
    settings: AnalyticsSettings,
    store: AnalyticsSettingsStore = Depends(get_analytics_settings_store),
):
    return store.replace(settings)


@router.delete("/api/settings/analytics", response_model=AnalyticsSettings)
def reset_analytics_settings(store: AnalyticsSettingsStore = Depends(get_analytics_settings_store)):
    return store.reset()


@router.get("/api/streaming/numbers")
def streaming_numbers(
    time_window: str = Query("90d", alias="timeWindow"),
    platform: str = "spotify",
    artist: str | None = None,
    include_growth: bool = Query(False, alias="includeGrowth"),
    include_engagement: bool = Query(False, alias="includeEngagement"),
    settings: Settings = Depends(get_settings),
    provider: SampleDataProvider = Depends(get_sample_provider),
):
    artist_name = artist or settings.featured_artist
    data = provider.streaming_numbers(time_window, platform, artist_name)
    return {
        "success": True,
        "time_window": time_window,
        "platform": platform,
        "artist": artist_name,
        "data": data,
        "metadata": {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "includes_growth": include_growth,
            "includes_engagement": include_engagement,
            "data_points": len(data),
        },
        "python_integration": {
            "usage_example": (
                "import requests\n"
                "import pandas as pd\n\n"
                "response = requests.get('http://localhost:8000/api/streaming/numbers"
                f"?timeWindow={time_window}&platform={platform}')\n"
                "data = response.json()\n"
                "df = pd.json_normalize(data['data'])"
            )
        },
    }


@router.get("/api/spotify/data")
def spotify_data(
    access_token: str | None = None,
    type: str = "overview",
    time_range: str = "medium_term",
    limit: int | None = Query(default=None, ge=1, le=50),
    settings: Settings = Depends(get_settings),
    provider: SampleDataProvider = Depends(get_sample_provider),
):
    """Proxy the signed-in user's own Spotify data."""
    if not access_token:
        raise HTTPException(status_code=401, detail="Access token is required")
    if type not in SPOTIFY_DATA_TYPES:
        raise HTTPException(status_code=400, detail="Invalid data type requested")

    try:
        service = SpotifyService(access_token, timeout=settings.http_timeout)
        if type == "overview":
            data = {
                "user": service.current_user(),
                "topTracks": service.top_tracks("medium_term", 10),
                "topArtists": service.top_artists("medium_term", 10),
                "recentTracks": service.recently_played(20),
            }
        elif type == "tracks":
            data = service.top_tracks(time_range, limit or 20)
        elif type == "artists":
            data = service.top_artists(time_range, limit or 20)
        else:
            data = service.recently_played(limit or 50)
    except TokenExpiredError:
        raise HTTPException(status_code=401, detail="Invalid or expired Spotify token")
    except DashboardError as exc:
        logger.error("Error fetching Spotify data: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to fetch data from Spotify API")

    return {
        "success": True,
        "data": data,
        "socialImpact": provider.social_impact(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "artist": settings.featured_artist,
    }
