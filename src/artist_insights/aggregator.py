"""Fan-out across the connected music platforms, merged into one track list."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable

from artist_insights.analysis import cross_platform_summary
from artist_insights.errors import DashboardError
from artist_insights.models import STREAMING_PLATFORMS, UnifiedTrack
from artist_insights.sources import DataSource
from artist_insights.tokens import TokenStore

logger = logging.getLogger(__name__)

PlatformFetcher = Callable[[str, str], list[UnifiedTrack]]


class MultiPlatformAggregator:
    def __init__(
        self,
        source: DataSource,
        token_store: TokenStore,
        fetchers: dict[str, PlatformFetcher] | None = None,
    ) -> None:
        self.source = source
        self.token_store = token_store
        self.fetchers = fetchers if fetchers is not None else self._default_fetchers()
        self.tracks: list[UnifiedTrack] = []
        self.lyrical_analyses: list[dict] = []
        self.errors: dict[str, str] = {}
        # Guards tracks, lyrical_analyses and errors; requests share one aggregator.
        self._lock = threading.Lock()

    def _default_fetchers(self) -> dict[str, PlatformFetcher]:
        def fetcher_for(platform: str) -> PlatformFetcher:
            return lambda token, artist_name: self.source.platform_search(platform, token, artist_name).tracks

        return {platform: fetcher_for(platform) for platform in STREAMING_PLATFORMS}

    @property
    def tokens(self) -> dict[str, str]:
        return self.token_store.tokens()

    def error_report(self) -> dict[str, str]:
        with self._lock:
            return dict(self.errors)

    def set_platform_token(self, platform: str, token: str) -> None:
        self.token_store.set_token(platform, token)

    def remove_platform_token(self, platform: str) -> None:
        self.token_store.clear_token(platform)
        with self._lock:
            self.errors.pop(platform, None)

    def _record_error(self, platform: str, message: str) -> None:
        with self._lock:
            self.errors[platform] = message

    def _merge(self, platform: str, fresh: list[UnifiedTrack]) -> None:
        with self._lock:
            self.errors.pop(platform, None)
            kept = [t for t in self.tracks if t.platform != platform]
            self.tracks = kept + fresh

    def fetch_all_platform_data(self, artist_name: str) -> list[UnifiedTrack]:
        tokens = self.tokens
        targets = {p: tokens[p] for p in self.fetchers if p in tokens}
        if targets:
            with ThreadPoolExecutor(max_workers=len(targets)) as pool:
                futures = {
                    pool.submit(self.fetchers[platform], token, artist_name): platform
                    for platform, token in targets.items()
                }
                for future in as_completed(futures):
                    platform = futures[future]
                    try:
                        fresh = future.result()
                    except DashboardError as exc:
                        logger.warning("%s fetch failed: %s", platform, exc)
                        self._record_error(platform, str(exc) or f"Failed to fetch {platform} data")
                        continue
                    except Exception:
                        logger.exception("Unexpected error fetching %s data", platform)
                        self._record_error(platform, f"Failed to fetch {platform} data")
                        continue
                    self._merge(platform, fresh)
        with self._lock:
            return list(self.tracks)

    def analyze_lyrics(self, tracks: list[UnifiedTrack]) -> list[dict]:
        token = self.token_store.get_token("genius")
        if not token:
            logger.info("Genius token not available for lyrical analysis")
            self._record_error("genius", "Genius token not available for lyrical analysis")
            return []
        if not tracks:
            return []

        analyses: list[dict] = []
        with ThreadPoolExecutor(max_workers=min(8, len(tracks))) as pool:
            futures = [
                pool.submit(self.source.lyrical_analysis, token, track.name, track.artist)
                for track in tracks
            ]
            for future in futures:
                try:
                    analyses.append(future.result())
                except DashboardError as exc:
                    logger.warning("Lyrical analysis failed: %s", exc)
                except Exception:
                    logger.exception("Unexpected error during lyrical analysis")

        with self._lock:
            if analyses:
                self.errors.pop("genius", None)
            else:
                self.errors["genius"] = "Lyrical analysis failed"
            self.lyrical_analyses = analyses
        return analyses

    def cross_platform_analytics(self) -> dict:
        with self._lock:
            tracks, analyses = list(self.tracks), list(self.lyrical_analyses)
        return cross_platform_summary(tracks, analyses, len(self.tokens))
