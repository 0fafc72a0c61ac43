"""Time-boxed key/value cache shared by every resolver.

Caching is an optimization only. Reads fail open (any decode, storage or
expiry problem is a miss) and writes fail silently.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Protocol

from wxcaption.config.schema import CACHE_TTL_SECONDS, CacheBackend, CacheConfig
from wxcaption.models.common import Clock, system_clock
from wxcaption.models.location import Coordinate
from wxcaption.storage.database import connect, run_migrations

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...

    def close(self) -> None: ...


# --- Key helpers ---

def zip_key(postal_code: str) -> str:
    return f"zip:{postal_code}"


def point_key(coord: Coordinate) -> str:
    return f"point:{coord.rounded(3)}"


def forecast_key(url: str) -> str:
    return f"forecast:{url}"


def alerts_key(coord: Coordinate) -> str:
    return f"alerts:{coord.rounded(3)}"


def products_key(office: str) -> str:
    return f"products:{office}"


# --- Implementations ---

class MemoryCacheStore:
    """In-process store holding JSON envelopes, like browser local storage."""

    ttl_seconds = CACHE_TTL_SECONDS

    def __init__(self, clock: Clock = system_clock):
        self._clock = clock
        self._entries: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        raw = self._entries.get(key)
        if raw is None:
            return None
        try:
            envelope = json.loads(raw)
            stored_at = float(envelope["ts"])
            value = envelope["val"]
        except (ValueError, TypeError, KeyError):
            logger.debug("Dropping malformed cache entry %s", key)
            self._entries.pop(key, None)
            return None
        if self._clock() - stored_at > self.ttl_seconds:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        try:
            self._entries[key] = json.dumps({"ts": self._clock(), "val": value})
        except (TypeError, ValueError) as e:
            logger.debug("Cache write skipped for %s: %s", key, e)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._entries)


class SqliteCacheStore:
    """Persistent local cache in a SQLite file, surviving process restarts."""

    ttl_seconds = CACHE_TTL_SECONDS

    def __init__(
        self,
        conn: sqlite3.Connection,
        clock: Clock = system_clock,
    ):
        self.conn = conn
        self._clock = clock
        run_migrations(conn)

    @classmethod
    def open(cls, path: str | Path, clock: Clock = system_clock) -> "SqliteCacheStore":
        return cls(connect(path), clock=clock)

    def get(self, key: str) -> Any | None:
        try:
            row = self.conn.execute(
                "SELECT value, stored_at FROM cache_entries WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.debug("Cache read failed for %s: %s", key, e)
            return None
        if row is None:
            return None
        try:
            value = json.loads(row["value"])
            stored_at = float(row["stored_at"])
        except (ValueError, TypeError):
            logger.debug("Dropping malformed cache entry %s", key)
            self.delete(key)
            return None
        if self._clock() - stored_at > self.ttl_seconds:
            self.delete(key)
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
            self.conn.execute(
                "INSERT INTO cache_entries (key, value, stored_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                "stored_at = excluded.stored_at",
                (key, payload, self._clock()),
            )
            self.conn.commit()
        except (TypeError, ValueError, sqlite3.Error) as e:
            logger.debug("Cache write skipped for %s: %s", key, e)

    def delete(self, key: str) -> None:
        try:
            self.conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
            self.conn.commit()
        except sqlite3.Error as e:
            logger.debug("Cache delete failed for %s: %s", key, e)

    def clear(self) -> None:
        try:
            self.conn.execute("DELETE FROM cache_entries")
            self.conn.commit()
        except sqlite3.Error as e:
            logger.debug("Cache clear failed: %s", e)

    def close(self) -> None:
        self.conn.close()


def open_cache(config: CacheConfig, clock: Clock = system_clock) -> CacheStore:
    """Build the configured cache, degrading to memory if SQLite is unusable."""
    if config.backend == CacheBackend.MEMORY:
        return MemoryCacheStore(clock=clock)
    try:
        return SqliteCacheStore.open(config.path, clock=clock)
    except (sqlite3.Error, OSError) as e:
        logger.warning("Cache at %s unavailable (%s), using memory cache", config.path, e)
        return MemoryCacheStore(clock=clock)
