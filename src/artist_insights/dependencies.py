"""Process-wide service objects, built once and handed to routes via ``Depends``."""
from __future__ import annotations

from functools import lru_cache

from artist_insights.aggregator import MultiPlatformAggregator
from artist_insights.analytics_settings import AnalyticsSettingsStore
from artist_insights.config import Settings, load_local_env_file
from artist_insights.data_client import SpotifyDataClient
from artist_insights.oauth import OAuthStateStore
from artist_insights.sample_data import SampleDataProvider
from artist_insights.sources import DataSource, create_data_source
from artist_insights.tokens import TokenStore, create_token_store


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_local_env_file()
    return Settings.from_env()


@lru_cache(maxsize=1)
def get_sample_provider() -> SampleDataProvider:
    return SampleDataProvider(seed=get_settings().sample_seed)


@lru_cache(maxsize=1)
def get_data_source() -> DataSource:
    return create_data_source(get_settings(), get_sample_provider())


@lru_cache(maxsize=1)
def get_token_store() -> TokenStore:
    return create_token_store(get_settings().token_store_path)


@lru_cache(maxsize=1)
def get_state_store() -> OAuthStateStore:
    return OAuthStateStore()


@lru_cache(maxsize=1)
def get_analytics_settings_store() -> AnalyticsSettingsStore:
    return AnalyticsSettingsStore()


@lru_cache(maxsize=1)
def get_data_client() -> SpotifyDataClient:
    return SpotifyDataClient(get_settings(), get_data_source(), get_token_store(), get_state_store())


@lru_cache(maxsize=1)
def get_aggregator() -> MultiPlatformAggregator:
    return MultiPlatformAggregator(get_data_source(), get_token_store())
