"""Per-platform search proxies, lyrical analysis and the multi-platform fan-out."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from artist_insights.aggregator import MultiPlatformAggregator
from artist_insights.config import Settings
from artist_insights.dependencies import get_aggregator, get_data_source, get_settings
from artist_insights.errors import DashboardError, NotAuthenticatedError, TokenExpiredError
from artist_insights.sources import DataSource

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/platforms", tags=["platforms"])


class LyricsAnalysisRequest(BaseModel):
    track_name: str | None = None
    artist_name: str | None = None
    access_token: str | None = None


@router.get("/spotify/search")
def spotify_search(
    q: str = "",
    access_token: str | None = None,
    source: DataSource = Depends(get_data_source),
):
    if not access_token:
        raise HTTPException(status_code=401, detail="Spotify access token required")
    if not q:
        raise HTTPException(status_code=400, detail="Search query required")
    try:
        result = source.platform_search("spotify", access_token, q)
    except TokenExpiredError:
        raise HTTPException(status_code=401, detail="Invalid or expired Spotify token")
    except DashboardError as exc:
        logger.error("Spotify search error: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to search Spotify data")
    return result.to_dict()


@router.get("/soundcloud/search")
def soundcloud_search(
    q: str = "",
    source: DataSource = Depends(get_data_source),
):
    if not q:
        raise HTTPException(status_code=400, detail="Search query required")
    try:
        result = source.platform_search("soundcloud", None, q)
    except DashboardError as exc:
        logger.error("SoundCloud search error: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to search SoundCloud data")
    return result.to_dict()


@router.post("/genius/analyze")
def genius_analyze(
    request: LyricsAnalysisRequest,
    source: DataSource = Depends(get_data_source),
):
    if not request.track_name or not request.artist_name:
        raise HTTPException(status_code=400, detail="Track name and artist name required")
    try:
        return source.lyrical_analysis(request.access_token, request.track_name, request.artist_name)
    except (NotAuthenticatedError, TokenExpiredError):
        raise HTTPException(status_code=401, detail="Genius access token required")
    except DashboardError as exc:
        logger.error("Genius analysis error: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to analyze lyrics")


@router.get("/aggregate")
def aggregate_platforms(
    artist: str | None = None,
    settings: Settings = Depends(get_settings),
    aggregator: MultiPlatformAggregator = Depends(get_aggregator),
):
    tracks = aggregator.fetch_all_platform_data(artist or settings.featured_artist)
    return {
        "tracks": [t.to_dict() for t in tracks],
        "errors": aggregator.error_report(),
        "platforms_connected": sorted(aggregator.tokens),
    }


@router.post("/aggregate/lyrics")
def aggregate_lyrics(aggregator: MultiPlatformAggregator = Depends(get_aggregator)):
    analyses = aggregator.analyze_lyrics(aggregator.tracks)
    return {"analyses": analyses, "errors": aggregator.error_report()}


@router.get("/aggregate/analytics")
def aggregate_analytics(aggregator: MultiPlatformAggregator = Depends(get_aggregator)):
    return aggregator.cross_platform_analytics()
