from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from artist_insights.errors import ConfigurationError

DEFAULT_REDIRECT_URI = "http://localhost:8000/api/auth/spotify/callback"
DEFAULT_FEATURED_ARTIST = "Ella V"


def load_local_env_file(env_path: str = ".env") -> None:
    """Load key=value pairs from a local .env file into process env.

    Existing environment variables are preserved and not overwritten.
    """

    path = Path(env_path)
    if not path.exists():
        return

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")

        if key and key not in os.environ:
            os.environ[key] = value


def _env_str(name: str, fallback: str = "") -> str:
    return (os.getenv(name) or fallback).strip()


def _env_int(name: str, fallback: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback


def _env_bool(name: str, fallback: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return fallback
    return raw.strip().lower() in ("1", "true", "yes", "on")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@dataclass(slots=True)
class Settings:
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_redirect_uri: str = DEFAULT_REDIRECT_URI
    soundcloud_client_id: str = ""
    apple_music_developer_token: str = ""
    tidal_client_id: str = ""
    featured_artist: str = DEFAULT_FEATURED_ARTIST
    data_source: str = "mock"
    sample_seed: int = 42
    token_store_path: str = ""
    validate_oauth_state: bool = True
    http_timeout: int = 15
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        client_id = _env_str("SPOTIFY_CLIENT_ID")
        client_secret = _env_str("SPOTIFY_CLIENT_SECRET")
        # Live data only makes sense once the Spotify app is registered.
        default_source = "live" if client_id and client_secret else "mock"
        return cls(
            spotify_client_id=client_id,
            spotify_client_secret=client_secret,
            spotify_redirect_uri=_env_str("SPOTIFY_REDIRECT_URI", DEFAULT_REDIRECT_URI),
            soundcloud_client_id=_env_str("SOUNDCLOUD_CLIENT_ID"),
            apple_music_developer_token=_env_str("APPLE_MUSIC_DEVELOPER_TOKEN"),
            tidal_client_id=_env_str("TIDAL_CLIENT_ID"),
            featured_artist=_env_str("FEATURED_ARTIST", DEFAULT_FEATURED_ARTIST),
            data_source=_env_str("DATA_SOURCE", default_source).lower(),
            sample_seed=_env_int("SAMPLE_SEED", 42),
            token_store_path=_env_str("TOKEN_STORE_PATH"),
            validate_oauth_state=_env_bool("SPOTIFY_VALIDATE_STATE", True),
            http_timeout=_env_int("HTTP_TIMEOUT_SECONDS", 15),
            log_level=_env_str("LOG_LEVEL", "INFO"),
        )

    @property
    def spotify_configured(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)

    def require_spotify_credentials(self) -> None:
        missing = [
            name
            for name, value in (
                ("SPOTIFY_CLIENT_ID", self.spotify_client_id),
                ("SPOTIFY_CLIENT_SECRET", self.spotify_client_secret),
            )
            if not value
        ]
        if missing:
            missing_list = ", ".join(missing)
            raise ConfigurationError(
                f"Missing Spotify credentials: {missing_list}. "
                "Set them in environment variables or local .env file."
            )
