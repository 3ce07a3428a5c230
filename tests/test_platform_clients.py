import unittest
from unittest.mock import MagicMock, patch

import requests

from artist_insights import platform_clients
from artist_insights.errors import ConfigurationError, TokenExpiredError, UpstreamError


def _response(status: int = 200, body=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.json.return_value = body if body is not None else {}
    return response


class SoundCloudTests(unittest.TestCase):
    def test_requires_client_id(self) -> None:
        with patch("artist_insights.platform_clients.requests.get") as get:
            with self.assertRaises(ConfigurationError):
                platform_clients.search_soundcloud("", "Ella V")

        get.assert_not_called()

    def test_tracks_are_normalized(self) -> None:
        body = [
            {
                "id": 99,
                "title": "Voices Rise",
                "user": {"username": "ellav"},
                "duration": 198000,
                "playback_count": 250000,
                "likes_count": 10,
                "reposts_count": 2,
                "permalink_url": "https://soundcloud.com/ellav/voices-rise",
            }
        ]
        with patch("artist_insights.platform_clients.requests.get", return_value=_response(body=body)) as get:
            tracks = platform_clients.search_soundcloud("cid", "Ella V", timeout=5)

        self.assertEqual(get.call_args.kwargs["params"]["client_id"], "cid")
        self.assertEqual(get.call_args.kwargs["timeout"], 5)
        self.assertEqual(tracks[0].id, "99")
        self.assertEqual(tracks[0].popularity, 100)
        self.assertEqual(tracks[0].stream_count, 250000)


class AppleMusicAndTidalTests(unittest.TestCase):
    def test_apple_music_uses_bearer_token(self) -> None:
        body = {
            "results": {
                "songs": {
                    "data": [
                        {
                            "id": "am1",
                            "attributes": {
                                "name": "Peace & Unity",
                                "artistName": "Ella V",
                                "durationInMillis": 204000,
                                "previews": [{"url": "https://preview"}],
                            },
                        }
                    ]
                }
            }
        }
        with patch("artist_insights.platform_clients.requests.get", return_value=_response(body=body)) as get:
            tracks = platform_clients.search_apple_music("dev-token", "Ella V")

        self.assertEqual(get.call_args.kwargs["headers"], {"Authorization": "Bearer dev-token"})
        self.assertEqual(tracks[0].popularity, 50)
        self.assertEqual(tracks[0].preview_url, "https://preview")

    def test_tidal_duration_is_converted_to_ms(self) -> None:
        body = {"items": [{"id": 5, "title": "Roots & Wings", "artist": {"name": "Ella V"}, "duration": 200}]}
        with patch("artist_insights.platform_clients.requests.get", return_value=_response(body=body)):
            tracks = platform_clients.search_tidal("tidal-token", "Ella V")

        self.assertEqual(tracks[0].duration_ms, 200000)
        self.assertEqual(tracks[0].popularity, 50)


class ErrorMappingTests(unittest.TestCase):
    def test_401_is_token_expired(self) -> None:
        with patch("artist_insights.platform_clients.requests.get", return_value=_response(status=401)):
            with self.assertRaises(TokenExpiredError) as exc:
                platform_clients.search_tidal("t", "q")

        self.assertEqual(exc.exception.platform, "tidal")

    def test_non_2xx_is_upstream_error(self) -> None:
        with patch("artist_insights.platform_clients.requests.get", return_value=_response(status=503)):
            with self.assertRaises(UpstreamError) as exc:
                platform_clients.search_soundcloud("cid", "q")

        self.assertEqual(exc.exception.status, 503)

    def test_network_failure_is_upstream_error(self) -> None:
        with patch("artist_insights.platform_clients.requests.get", side_effect=requests.Timeout("slow")):
            with self.assertRaises(UpstreamError) as exc:
                platform_clients.search_apple_music("dev", "q")

        self.assertIsNone(exc.exception.status)


class GeniusTests(unittest.TestCase):
    def test_lookup_returns_song_statistics(self) -> None:
        search = {"response": {"hits": [{"result": {"id": 123}}]}}
        song = {
            "response": {
                "song": {
                    "id": 123,
                    "url": "https://genius.com/ella-v-peace-unity-lyrics",
                    "annotation_count": 4,
                    "stats": {"pageviews": 9000, "hot": True},
                }
            }
        }
        responses = [_response(body=search), _response(body=song)]
        with patch("artist_insights.platform_clients.requests.get", side_effect=responses) as get:
            result = platform_clients.lookup_genius_song("g-token", "Peace & Unity", "Ella V")

        self.assertEqual(get.call_args_list[1].args[0], "https://api.genius.com/songs/123")
        self.assertEqual(
            result,
            {
                "genius_id": 123,
                "genius_url": "https://genius.com/ella-v-peace-unity-lyrics",
                "annotation_count": 4,
                "page_views": 9000,
                "hot": True,
            },
        )

    def test_lookup_without_hits_returns_none(self) -> None:
        with patch(
            "artist_insights.platform_clients.requests.get",
            return_value=_response(body={"response": {"hits": []}}),
        ):
            self.assertIsNone(platform_clients.lookup_genius_song("g", "x", "y"))


if __name__ == "__main__":
    unittest.main()
