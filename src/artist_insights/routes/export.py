"""Data export for offline analysis in pandas."""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from artist_insights.config import Settings
from artist_insights.dependencies import get_sample_provider, get_settings
from artist_insights.export import (
    build_export_payload,
    build_filtered_export,
    export_filename,
    parquet_instructions,
    split_ids,
    tracks_to_csv,
)
from artist_insights.sample_data import SampleDataProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/export", tags=["export"])


class FilteredExportRequest(BaseModel):
    tracks: list[dict[str, Any]] = Field(default_factory=list)
    artists: list[dict[str, Any]] = Field(default_factory=list)
    albums: list[dict[str, Any]] = Field(default_factory=list)
    filters: dict[str, Any] = Field(default_factory=dict)
    analysis_type: str = "comparative"


@router.get("/spotify-data")
def export_spotify_data(
    format: str = "json",
    tracks: str | None = None,
    artists: str | None = None,
    albums: str | None = None,
    settings: Settings = Depends(get_settings),
    provider: SampleDataProvider = Depends(get_sample_provider),
):
    fmt = format.lower()
    track_ids, artist_ids, album_ids = split_ids(tracks), split_ids(artists), split_ids(albums)
    payload = build_export_payload(provider, settings.featured_artist, track_ids, artist_ids, album_ids, fmt)

    if fmt == "csv":
        filename = export_filename(settings.featured_artist, "csv")
        return Response(
            content=tracks_to_csv(payload["tracks"]),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    if fmt == "parquet":
        query = {"format": "json"}
        for key, value in (("tracks", tracks), ("artists", artists), ("albums", albums)):
            if value:
                query[key] = value
        return parquet_instructions(f"/api/export/spotify-data?{urlencode(query)}", settings.featured_artist)

    filename = export_filename(settings.featured_artist, "json")
    return JSONResponse(
        payload,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/spotify-data")
def export_filtered_data(
    request: FilteredExportRequest,
    settings: Settings = Depends(get_settings),
):
    logger.info(
        "Filtered export: %d tracks, %d artists, %d albums",
        len(request.tracks),
        len(request.artists),
        len(request.albums),
    )
    return build_filtered_export(
        settings.featured_artist,
        request.tracks,
        request.artists,
        request.albums,
        request.filters,
        request.analysis_type,
    )
