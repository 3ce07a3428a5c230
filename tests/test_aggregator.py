import threading
import unittest

from artist_insights.aggregator import MultiPlatformAggregator
from artist_insights.errors import NotAuthenticatedError, UpstreamError
from artist_insights.models import UnifiedTrack
from artist_insights.sample_data import SampleDataProvider
from artist_insights.sources import MockDataSource
from artist_insights.tokens import MemoryTokenStore


def _track(platform: str, name: str, streams: int = 100, popularity: int = 50) -> UnifiedTrack:
    return UnifiedTrack(
        id=f"{platform}_{name}",
        platform=platform,
        name=name,
        artist="Ella V",
        popularity=popularity,
        stream_count=streams,
    )


def _make_aggregator(tokens: dict[str, str], fetchers=None) -> MultiPlatformAggregator:
    store = MemoryTokenStore()
    for platform, token in tokens.items():
        store.set_token(platform, token)
    return MultiPlatformAggregator(MockDataSource(SampleDataProvider(seed=1)), store, fetchers)


class FetchAllPlatformDataTests(unittest.TestCase):
    def test_failed_platform_does_not_block_the_others(self) -> None:
        def failing(token, artist_name):
            raise UpstreamError("soundcloud", 500, "SoundCloud API error: 500")

        aggregator = _make_aggregator(
            {"spotify": "s", "soundcloud": "c"},
            {
                "spotify": lambda token, artist_name: [_track("spotify", "Peace & Unity")],
                "soundcloud": failing,
            },
        )

        tracks = aggregator.fetch_all_platform_data("Ella V")

        self.assertEqual([t.platform for t in tracks], ["spotify"])
        self.assertEqual(aggregator.errors, {"soundcloud": "SoundCloud API error: 500"})

    def test_unexpected_exception_is_recorded_per_platform(self) -> None:
        def broken(token, artist_name):
            raise ValueError("bad payload")

        aggregator = _make_aggregator(
            {"tidal": "t", "spotify": "s"},
            {
                "tidal": broken,
                "spotify": lambda token, artist_name: [_track("spotify", "Voices Rise")],
            },
        )

        aggregator.fetch_all_platform_data("Ella V")

        self.assertEqual(aggregator.errors["tidal"], "Failed to fetch tidal data")
        self.assertEqual(len(aggregator.tracks), 1)

    def test_only_platforms_with_tokens_are_fetched(self) -> None:
        calls = []

        def recording(platform):
            def fetch(token, artist_name):
                calls.append((platform, token))
                return [_track(platform, "Roots & Wings")]
            return fetch

        aggregator = _make_aggregator(
            {"apple_music": "am-token"},
            {p: recording(p) for p in ("spotify", "apple_music")},
        )

        aggregator.fetch_all_platform_data("Ella V")

        self.assertEqual(calls, [("apple_music", "am-token")])

    def test_refetch_replaces_tracks_of_that_platform_only(self) -> None:
        batches = {"spotify": [[_track("spotify", "a"), _track("spotify", "b")], [_track("spotify", "c")]]}

        aggregator = _make_aggregator(
            {"spotify": "s", "soundcloud": "c"},
            {
                "spotify": lambda token, artist_name: batches["spotify"].pop(0),
                "soundcloud": lambda token, artist_name: [_track("soundcloud", "x")],
            },
        )

        aggregator.fetch_all_platform_data("Ella V")
        aggregator.fetch_all_platform_data("Ella V")

        names = sorted((t.platform, t.name) for t in aggregator.tracks)
        self.assertEqual(names, [("soundcloud", "x"), ("spotify", "c")])

    def test_success_clears_previous_error(self) -> None:
        outcomes = [UpstreamError("tidal", 503, "Tidal API error: 503"), [_track("tidal", "a")]]

        def flaky(token, artist_name):
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        aggregator = _make_aggregator({"tidal": "t"}, {"tidal": flaky})

        aggregator.fetch_all_platform_data("Ella V")
        self.assertIn("tidal", aggregator.errors)
        aggregator.fetch_all_platform_data("Ella V")

        self.assertNotIn("tidal", aggregator.errors)
        self.assertEqual(len(aggregator.tracks), 1)

    def test_no_tokens_is_a_no_op(self) -> None:
        aggregator = _make_aggregator({})

        self.assertEqual(aggregator.fetch_all_platform_data("Ella V"), [])
        self.assertEqual(aggregator.errors, {})

    def test_default_fetchers_use_the_data_source(self) -> None:
        aggregator = _make_aggregator({"spotify": "s", "soundcloud": "c"})

        tracks = aggregator.fetch_all_platform_data("Ella V")

        platforms = {t.platform for t in tracks}
        self.assertEqual(platforms, {"spotify", "soundcloud"})
        self.assertEqual(aggregator.errors, {})


class PlatformTokenTests(unittest.TestCase):
    def test_removing_a_token_clears_its_error(self) -> None:
        aggregator = _make_aggregator({"tidal": "t"})
        aggregator.errors["tidal"] = "Failed to fetch tidal data"

        aggregator.remove_platform_token("tidal")

        self.assertNotIn("tidal", aggregator.tokens)
        self.assertNotIn("tidal", aggregator.errors)

    def test_set_platform_token_is_visible_in_tokens(self) -> None:
        aggregator = _make_aggregator({})

        aggregator.set_platform_token("genius", "g")

        self.assertEqual(aggregator.tokens, {"genius": "g"})


class LyricsTests(unittest.TestCase):
    def test_without_genius_token_records_error(self) -> None:
        aggregator = _make_aggregator({"spotify": "s"})

        self.assertEqual(aggregator.analyze_lyrics([_track("spotify", "Peace & Unity")]), [])
        self.assertEqual(aggregator.errors["genius"], "Genius token not available for lyrical analysis")

    def test_analyses_each_track(self) -> None:
        aggregator = _make_aggregator({"genius": "g"})
        tracks = [_track("spotify", "Peace & Unity"), _track("spotify", "Mental Clarity")]

        analyses = aggregator.analyze_lyrics(tracks)

        self.assertEqual([a["track_name"] for a in analyses], ["Peace & Unity", "Mental Clarity"])
        self.assertNotIn("genius", aggregator.errors)

    def test_all_failures_record_lyrical_analysis_failed(self) -> None:
        aggregator = _make_aggregator({"genius": "g"})

        def refuse(token, track_name, artist_name):
            raise NotAuthenticatedError("genius")

        aggregator.source.lyrical_analysis = refuse

        self.assertEqual(aggregator.analyze_lyrics([_track("spotify", "a")]), [])
        self.assertEqual(aggregator.errors["genius"], "Lyrical analysis failed")


class CrossPlatformAnalyticsTests(unittest.TestCase):
    def test_summary_over_merged_tracks(self) -> None:
        aggregator = _make_aggregator(
            {"spotify": "s", "soundcloud": "c", "genius": "g"},
            {
                "spotify": lambda token, artist_name: [
                    _track("spotify", "a", streams=100, popularity=40),
                    _track("spotify", "b", streams=300, popularity=60),
                ],
                "soundcloud": lambda token, artist_name: [_track("soundcloud", "c", streams=200, popularity=80)],
            },
        )
        aggregator.fetch_all_platform_data("Ella V")
        aggregator.analyze_lyrics(aggregator.tracks[:1])

        analytics = aggregator.cross_platform_analytics()

        self.assertEqual(analytics["platform_distribution"], {"spotify": 2, "soundcloud": 1})
        self.assertEqual(analytics["total_tracks"], 3)
        self.assertEqual(analytics["total_streams"], 600)
        self.assertAlmostEqual(analytics["average_popularity"], 60.0)
        self.assertEqual(analytics["platforms_connected"], 3)
        self.assertAlmostEqual(analytics["social_impact_score"], (88 + 75 + 92) / 3)


class ConcurrentFetchTests(unittest.TestCase):
    def test_parallel_refreshes_keep_one_batch_per_platform(self) -> None:
        platforms = ("spotify", "soundcloud", "apple_music", "tidal")
        aggregator = _make_aggregator(
            {p: p for p in platforms},
            {p: (lambda token, artist_name, p=p: [_track(p, "a"), _track(p, "b")]) for p in platforms},
        )

        workers = [
            threading.Thread(target=aggregator.fetch_all_platform_data, args=("Ella V",))
            for _ in range(8)
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join(timeout=10)

        counts = aggregator.cross_platform_analytics()["platform_distribution"]
        self.assertEqual(counts, {p: 2 for p in platforms})
        self.assertEqual(aggregator.error_report(), {})


if __name__ == "__main__":
    unittest.main()
