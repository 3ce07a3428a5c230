import unittest
from unittest.mock import patch

from artist_insights.config import Settings
from artist_insights.errors import ConfigurationError, NotAuthenticatedError
from artist_insights.sample_data import SampleDataProvider
from artist_insights.sources import LiveDataSource, MockDataSource, create_data_source


def _spotify_track(track_id: str) -> dict:
    return {
        "id": track_id,
        "name": f"Song {track_id}",
        "artists": [{"id": "a1", "name": "Ella V"}],
        "album": {"id": "al1", "name": "Messages of Hope", "release_date": "2024-03-15"},
        "popularity": 40,
        "duration_ms": 200000,
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
    }


class CreateDataSourceTests(unittest.TestCase):
    def test_picks_source_from_settings(self) -> None:
        self.assertIsInstance(create_data_source(Settings(data_source="mock")), MockDataSource)
        self.assertIsInstance(create_data_source(Settings(data_source="live")), LiveDataSource)

    def test_rejects_unknown_source(self) -> None:
        with self.assertRaises(ConfigurationError):
            create_data_source(Settings(data_source="cache"))


class LiveSpotifySearchTests(unittest.TestCase):
    def test_search_merges_audio_features(self) -> None:
        source = LiveDataSource(Settings(), SampleDataProvider())
        payload = {
            "tracks": {"items": [_spotify_track("t1"), _spotify_track("t2")], "total": 57},
            "artists": {"items": [{"id": "a1", "name": "Ella V", "images": [{"url": "x"}]}]},
        }

        with patch("artist_insights.spotify_service.spotipy.Spotify") as spotify_cls:
            spotify_cls.return_value.search.return_value = payload
            spotify_cls.return_value.audio_features.return_value = [{"energy": 0.7, "tempo": 99.0}, None]
            result = source.platform_search("spotify", "token", "Ella V")

        self.assertEqual(result.total_results, 57)
        self.assertEqual(result.tracks[0].audio_features.energy, 0.7)
        self.assertIsNone(result.tracks[1].audio_features)
        self.assertFalse(result.artists[0].verified)
        self.assertNotIn("note", result.to_dict())

    def test_unsupported_platform(self) -> None:
        source = LiveDataSource(Settings(), SampleDataProvider())

        with self.assertRaises(ConfigurationError):
            source.platform_search("napster", "token", "Ella V")


class LiveLyricsTests(unittest.TestCase):
    def test_requires_genius_token(self) -> None:
        source = LiveDataSource(Settings(), SampleDataProvider())

        with self.assertRaises(NotAuthenticatedError):
            source.lyrical_analysis(None, "Peace & Unity", "Ella V")

    def test_merges_genius_statistics(self) -> None:
        source = LiveDataSource(Settings(), SampleDataProvider())
        song = {"genius_id": 1, "genius_url": "https://genius.com/x", "annotation_count": 2, "page_views": 5, "hot": False}

        with patch("artist_insights.sources.platform_clients.lookup_genius_song", return_value=song):
            analysis = source.lyrical_analysis("g", "Peace & Unity", "Ella V")

        self.assertEqual(analysis["genius_data"]["page_views"], 5)
        self.assertEqual(analysis["genius_data"]["genius_url"], "https://genius.com/x")
        self.assertEqual(analysis["themes"]["peace_love"], 95)


class MockSourceTests(unittest.TestCase):
    def test_platform_search_is_labelled_demo_data(self) -> None:
        result = MockDataSource(SampleDataProvider()).platform_search("tidal", None, "Ella V")

        self.assertEqual(result.note, "Demo data - replace with real platform API integration")
        self.assertEqual(len(result.tracks), 3)
        self.assertEqual(result.artists, [])


if __name__ == "__main__":
    unittest.main()
