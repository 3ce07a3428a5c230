import unittest
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse

import requests

from artist_insights.config import Settings
from artist_insights.errors import ConfigurationError, TokenExchangeError
from artist_insights.oauth import (
    SPOTIFY_TOKEN_URL,
    OAuthStateStore,
    build_authorize_url,
    exchange_code,
    refresh_access_token,
)


def _settings() -> Settings:
    return Settings(
        spotify_client_id="client-id",
        spotify_client_secret="client-secret",
        spotify_redirect_uri="http://localhost:8000/api/auth/spotify/callback",
    )


def _token_response(status: int = 200, body: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = "OK" if response.ok else "Bad Request"
    response.text = ""
    response.json.return_value = body or {}
    return response


class ExchangeCodeTests(unittest.TestCase):
    def test_posts_authorization_code_with_basic_auth(self) -> None:
        body = {"access_token": "acc", "refresh_token": "ref", "expires_in": 3600, "token_type": "Bearer"}
        with patch("artist_insights.oauth.requests.post", return_value=_token_response(body=body)) as post:
            tokens = exchange_code(_settings(), "the-code")

        self.assertEqual(tokens.access_token, "acc")
        self.assertEqual(tokens.refresh_token, "ref")
        self.assertEqual(tokens.expires_in, 3600)

        args, kwargs = post.call_args
        self.assertEqual(args[0], SPOTIFY_TOKEN_URL)
        self.assertEqual(
            kwargs["data"],
            {
                "grant_type": "authorization_code",
                "code": "the-code",
                "redirect_uri": "http://localhost:8000/api/auth/spotify/callback",
            },
        )
        self.assertEqual(kwargs["auth"].username, "client-id")
        self.assertEqual(kwargs["auth"].password, "client-secret")
        self.assertIn("timeout", kwargs)

    def test_non_2xx_raises_token_exchange_error(self) -> None:
        with patch("artist_insights.oauth.requests.post", return_value=_token_response(status=400)) as post:
            with self.assertRaises(TokenExchangeError) as exc:
                exchange_code(_settings(), "bad-code")

        self.assertEqual(exc.exception.status, 400)
        self.assertEqual(post.call_count, 1)

    def test_network_failure_raises_token_exchange_error(self) -> None:
        with patch("artist_insights.oauth.requests.post", side_effect=requests.ConnectionError("down")):
            with self.assertRaises(TokenExchangeError):
                exchange_code(_settings(), "code")

    def test_missing_access_token_in_body_is_an_error(self) -> None:
        with patch("artist_insights.oauth.requests.post", return_value=_token_response(body={"error": "x"})):
            with self.assertRaises(TokenExchangeError):
                exchange_code(_settings(), "code")

    def test_non_json_body_raises_token_exchange_error(self) -> None:
        response = _token_response()
        response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)

        with patch("artist_insights.oauth.requests.post", return_value=response):
            with self.assertRaises(TokenExchangeError) as exc:
                exchange_code(_settings(), "code")

        self.assertEqual(exc.exception.status, 200)

    def test_missing_credentials_raise_before_any_request(self) -> None:
        with patch("artist_insights.oauth.requests.post") as post:
            with self.assertRaises(ConfigurationError):
                exchange_code(Settings(), "code")

        post.assert_not_called()


class RefreshTokenTests(unittest.TestCase):
    def test_refresh_keeps_old_refresh_token_when_omitted(self) -> None:
        body = {"access_token": "new-acc", "expires_in": 3600}
        with patch("artist_insights.oauth.requests.post", return_value=_token_response(body=body)) as post:
            tokens = refresh_access_token(_settings(), "old-ref")

        self.assertEqual(tokens.access_token, "new-acc")
        self.assertEqual(tokens.refresh_token, "old-ref")
        self.assertEqual(post.call_args.kwargs["data"]["grant_type"], "refresh_token")


class AuthorizeUrlTests(unittest.TestCase):
    def test_authorize_url_carries_client_state_and_scopes(self) -> None:
        url = build_authorize_url(_settings(), "state-123")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        self.assertEqual(parsed.netloc, "accounts.spotify.com")
        self.assertEqual(params["client_id"], ["client-id"])
        self.assertEqual(params["response_type"], ["code"])
        self.assertEqual(params["state"], ["state-123"])
        self.assertIn("user-top-read", params["scope"][0])

    def test_authorize_url_requires_credentials(self) -> None:
        with self.assertRaises(ConfigurationError):
            build_authorize_url(Settings(), "state")


class OAuthStateStoreTests(unittest.TestCase):
    def test_issued_state_is_consumed_once(self) -> None:
        store = OAuthStateStore()
        state = store.issue()

        self.assertTrue(store.consume(state))
        self.assertFalse(store.consume(state))

    def test_unknown_or_missing_state_is_rejected(self) -> None:
        store = OAuthStateStore()
        store.issue()

        self.assertFalse(store.consume("forged"))
        self.assertFalse(store.consume(None))

    def test_expired_state_is_rejected(self) -> None:
        store = OAuthStateStore(ttl=0)
        state = store.issue()

        with patch("artist_insights.oauth.time.monotonic", return_value=10**9):
            self.assertFalse(store.consume(state))


if __name__ == "__main__":
    unittest.main()
