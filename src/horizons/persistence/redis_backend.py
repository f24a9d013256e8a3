"""Redis-backed ISessionStore holding in-flight mapping sessions."""

from __future__ import annotations

import redis

from horizons.core.exceptions import SessionStoreError


class RedisSessionStore:
    """Session keys live in Redis with a TTL, so abandoned mapping dialogs expire.

    Values are the JSON strings ``SessionScope`` writes; nothing is decoded here.
    """

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0) -> None:
        self._client = redis.Redis(host=host, port=port, db=db, decode_responses=True)
        self._where = f"{host}:{port}/{db}"

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(key)
        except Exception as exc:
            raise SessionStoreError(f"Cannot read session key {key!r} from {self._where}: {exc}") from exc

    def setex(self, key: str, ttl: int, value: str) -> None:
        try:
            self._client.setex(key, ttl, value)
        except Exception as exc:
            raise SessionStoreError(
                f"Cannot store session key {key!r} (ttl {ttl}s) in {self._where}: {exc}"
            ) from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except Exception as exc:
            raise SessionStoreError(f"Cannot clear session key {key!r} in {self._where}: {exc}") from exc

    def ping(self) -> bool:
        """True when the session store answers."""
        try:
            return bool(self._client.ping())
        except Exception as exc:
            raise SessionStoreError(f"Session store at {self._where} is unreachable: {exc}") from exc
