"""Dashboard analytics settings, held in process memory only."""
from __future__ import annotations

import threading
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Fields are exchanged as camelCase JSON and also accepted by attribute name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomRange(_CamelModel):
    start: date
    end: date


class TimeWindow(_CamelModel):
    period: Literal["custom", "7d", "30d", "90d", "6m", "1y", "all"] = "90d"
    custom_range: CustomRange | None = None


class StreamingMetrics(_CamelModel):
    show_stream_counts: bool = True
    show_growth_rates: bool = True
    show_comparative_ranking: bool = False
    normalize_by_followers: bool = False


class VisualizationOptions(_CamelModel):
    chart_type: Literal["bar", "line", "area", "radar"] = "bar"
    show_trendlines: bool = True
    group_by_genre: bool = False
    include_audio_features: bool = True


class PlatformFilters(_CamelModel):
    spotify: bool = True
    soundcloud: bool = True
    apple_music: bool = False
    tidal: bool = False


class SocialImpactFilters(_CamelModel):
    show_sdg_scores: bool = Field(default=True, alias="showSDGScores")
    theme_filtering: list[str] = Field(default_factory=list)
    min_impact_score: int = Field(default=0, ge=0, le=100)
    focus_on_education: bool = True
    focus_on_equality: bool = True
    focus_on_peace: bool = True


class DataExportSettings(_CamelModel):
    include_raw_data: bool = True
    include_calculated_metrics: bool = True
    include_audio_features: bool = True
    include_lyrical_analysis: bool = True
    export_format: Literal["json", "csv", "parquet"] = "json"


class AnalyticsSettings(_CamelModel):
    time_window: TimeWindow = Field(default_factory=TimeWindow)
    streaming_metrics: StreamingMetrics = Field(default_factory=StreamingMetrics)
    visualization_options: VisualizationOptions = Field(default_factory=VisualizationOptions)
    platform_filters: PlatformFilters = Field(default_factory=PlatformFilters)
    social_impact_filters: SocialImpactFilters = Field(default_factory=SocialImpactFilters)
    data_export_settings: DataExportSettings = Field(default_factory=DataExportSettings)


class AnalyticsSettingsStore:
    def __init__(self) -> None:
        self._settings = AnalyticsSettings()
        self._lock = threading.Lock()

    def get(self) -> AnalyticsSettings:
        with self._lock:
            return self._settings.model_copy(deep=True)

    def replace(self, settings: AnalyticsSettings) -> AnalyticsSettings:
        with self._lock:
            self._settings = settings.model_copy(deep=True)
            return self._settings.model_copy(deep=True)

    def reset(self) -> AnalyticsSettings:
        return self.replace(AnalyticsSettings())
