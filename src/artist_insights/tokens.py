"""Named key-value storage for per-platform bearer tokens."""
from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from artist_insights.models import PLATFORMS

logger = logging.getLogger(__name__)

# Values a browser-side store could leave behind for a cleared token.
_EMPTY_VALUES = ("", "null", "undefined")


def token_key(platform: str) -> str:
    return f"{platform}_access_token"


class TokenStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...

    def get_token(self, platform: str) -> str | None:
        value = self.get(token_key(platform))
        if value is None or value.strip() in _EMPTY_VALUES:
            return None
        return value

    def set_token(self, platform: str, token: str) -> None:
        self.set(token_key(platform), token)

    def clear_token(self, platform: str) -> None:
        self.delete(token_key(platform))

    def tokens(self) -> dict[str, str]:
        """Present tokens keyed by platform, in platform order."""
        found: dict[str, str] = {}
        for platform in PLATFORMS:
            token = self.get_token(platform)
            if token:
                found[platform] = token
        return found


class MemoryTokenStore(TokenStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)


class JsonFileTokenStore(TokenStore):
    """Token store persisted as a flat JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable token store at %s", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)


def create_token_store(path: str = "") -> TokenStore:
    if path:
        return JsonFileTokenStore(path)
    return MemoryTokenStore()
