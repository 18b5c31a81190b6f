"""Caching layer for work item records.

Records are cached under the work item's edit URL. The fetcher only needs
get() and put(); freshness and eviction are owned by the cache.

Concurrency Model:
    - InMemoryIssueCache: Uses threading.Lock for thread-safe access.
    - FileBasedIssueCache: Uses threading.Lock for thread-safe access within
      a single process. Uses atomic writes (tempfile + os.replace) for
      crash-safety, but is optimistic for multi-process scenarios.

IssueRecord is immutable, so records are stored and returned as-is.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

from vsonline.integrations.models import IssueRecord

if TYPE_CHECKING:
    from vsonline.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class CachedIssue:
    """Cached record with expiration metadata. All timestamps use UTC.

    expires_at is None for entries that never expire.
    """

    record: IssueRecord
    cached_at: datetime
    expires_at: datetime | None = None

    @property
    def is_expired(self) -> bool:
        """Check if this cache entry has expired."""
        if self.expires_at is None:
            return False
        return datetime.now(UTC) > self.expires_at


def _make_entry(record: IssueRecord, ttl: timedelta | None) -> CachedIssue:
    now = datetime.now(UTC)
    return CachedIssue(
        record=record,
        cached_at=now,
        expires_at=now + ttl if ttl is not None else None,
    )


class IssueCache(ABC):
    """Abstract base class for record cache storage.

    Implementations must be thread-safe for concurrent access.
    """

    @abstractmethod
    def get(self, key: str) -> IssueRecord | None:
        """Retrieve a cached record, or None if absent or expired."""
        pass

    @abstractmethod
    def put(self, key: str, record: IssueRecord) -> None:
        """Store a record under key."""
        pass

    @abstractmethod
    def invalidate(self, key: str) -> None:
        """Remove a specific record from cache."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all cached records."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Get current number of cached entries."""
        pass


def get_from_cache_or_fetch(
    cache: IssueCache,
    key: str,
    fetch_fn: Callable[[], IssueRecord],
) -> IssueRecord:
    """Return the cached record for key, fetching and storing it on a miss.

    Nothing is stored when fetch_fn raises; the exception propagates.
    Concurrent misses for the same key may each call fetch_fn.

    Args:
        cache: Cache to consult and populate
        key: Cache key
        fetch_fn: Called with no arguments on a miss

    Returns:
        The cached or freshly fetched record
    """
    cached = cache.get(key)
    if cached is not None:
        logger.debug(f"Cache hit for {key}")
        return cached

    logger.debug(f"Cache miss for {key}")
    record = fetch_fn()
    cache.put(key, record)
    return record


class InMemoryIssueCache(IssueCache):
    """In-memory record cache with thread-safe access and LRU eviction.

    Args:
        default_ttl: Entry lifetime; None keeps entries until evicted
        max_size: Maximum entries before LRU eviction; 0 means unbounded
    """

    def __init__(
        self,
        default_ttl: timedelta | None = None,
        max_size: int = 0,
    ) -> None:
        self.default_ttl = default_ttl
        self.max_size = max_size
        self._cache: OrderedDict[str, CachedIssue] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> IssueRecord | None:
        with self._lock:
            cached = self._cache.get(key)

            if cached is None:
                return None

            if cached.is_expired:
                del self._cache[key]
                logger.debug(f"Cache expired for {key}")
                return None

            self._cache.move_to_end(key)
            return cached.record

    def put(self, key: str, record: IssueRecord) -> None:
        cached = _make_entry(record, self.default_ttl)

        with self._lock:
            if key in self._cache:
                del self._cache[key]

            while self.max_size > 0 and len(self._cache) >= self.max_size:
                oldest_key = next(iter(self._cache))
                del self._cache[oldest_key]
                logger.debug(f"LRU evicted: {oldest_key}")

            self._cache[key] = cached
            logger.debug(f"Cached {key} with TTL {self.default_ttl}")

    def invalidate(self, key: str) -> None:
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                logger.debug(f"Invalidated cache for {key}")

    def clear(self) -> None:
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            logger.debug(f"Cleared {count} cache entries")

    def size(self) -> int:
        with self._lock:
            return len(self._cache)


class FileBasedIssueCache(IssueCache):
    """File-based persistent record cache (~/.vsonline-cache/).

    One JSON file per key, named by the SHA-256 of the key. Unreadable or
    corrupt files are treated as misses and removed.

    Not multi-process safe without external locking.
    """

    def __init__(
        self,
        cache_dir: Path | None = None,
        default_ttl: timedelta | None = None,
    ) -> None:
        self.cache_dir = cache_dir or Path.home() / ".vsonline-cache"
        self.default_ttl = default_ttl
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _get_path(self, key: str) -> Path:
        """Get file path for a cache key."""
        safe_name = hashlib.sha256(key.encode()).hexdigest()[:32]
        return self.cache_dir / f"{safe_name}.json"

    def _serialize(self, key: str, cached: CachedIssue) -> dict[str, Any]:
        return {
            "key": key,
            "record": cached.record.to_dict(),
            "cached_at": cached.cached_at.isoformat(),
            "expires_at": cached.expires_at.isoformat() if cached.expires_at else None,
        }

    def _deserialize(self, data: dict[str, Any]) -> CachedIssue | None:
        try:
            expires_at = data.get("expires_at")
            return CachedIssue(
                record=IssueRecord.from_dict(data["record"]),
                cached_at=datetime.fromisoformat(data["cached_at"]),
                expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
            )
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Failed to deserialize cached record: {e}")
            return None

    def get(self, key: str) -> IssueRecord | None:
        path = self._get_path(key)
        with self._lock:
            if not path.exists():
                return None

            try:
                data = json.loads(path.read_text())
            except (ValueError, OSError) as e:  # JSONDecodeError, UnicodeDecodeError
                logger.warning(f"Failed to read cache file {path}: {e}")
                path.unlink(missing_ok=True)
                return None

            cached = self._deserialize(data) if isinstance(data, dict) else None
            if cached is None:
                path.unlink(missing_ok=True)
                return None

            if cached.is_expired:
                path.unlink(missing_ok=True)
                logger.debug(f"Cache expired for {key}")
                return None

            return cached.record

    def _atomic_write(self, path: Path, data: dict[str, Any]) -> None:
        """Write data to file atomically using temp file + rename.

        Raises:
            OSError: If file operations fail
        """
        fd, tmp_path = tempfile.mkstemp(suffix=".tmp", prefix=".cache_", dir=self.cache_dir)
        success = False
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, path)
            success = True
        finally:
            if not success:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass

    def put(self, key: str, record: IssueRecord) -> None:
        """Store a record; write failures are logged and the record is not cached."""
        cached = _make_entry(record, self.default_ttl)
        path = self._get_path(key)
        with self._lock:
            try:
                self._atomic_write(path, self._serialize(key, cached))
                logger.debug(f"Cached {key} to {path}")
            except OSError as e:
                logger.warning(f"Failed to write cache file {path}: {e}")

    def invalidate(self, key: str) -> None:
        path = self._get_path(key)
        with self._lock:
            if path.exists():
                path.unlink(missing_ok=True)
                logger.debug(f"Invalidated cache for {key}")

    def clear(self) -> None:
        with self._lock:
            count = 0
            for path in self.cache_dir.glob("*.json"):
                path.unlink(missing_ok=True)
                count += 1
            logger.debug(f"Cleared {count} cache files")

    def size(self) -> int:
        with self._lock:
            return len(list(self.cache_dir.glob("*.json")))


def create_cache(settings: Settings) -> IssueCache:
    """Create the cache backend selected by configuration.

    Args:
        settings: Loaded settings (CACHE_TYPE, CACHE_DIR, CACHE_TTL_MINUTES, CACHE_MAX_SIZE)

    Returns:
        A new cache instance
    """
    if settings.cache_type.strip().lower() == "file":
        logger.info("Initialized file-based issue cache")
        return FileBasedIssueCache(
            cache_dir=settings.get_cache_dir(),
            default_ttl=settings.get_cache_ttl(),
        )
    logger.info("Initialized in-memory issue cache")
    return InMemoryIssueCache(
        default_ttl=settings.get_cache_ttl(),
        max_size=settings.cache_max_size,
    )


__all__ = [
    "CachedIssue",
    "FileBasedIssueCache",
    "InMemoryIssueCache",
    "IssueCache",
    "create_cache",
    "get_from_cache_or_fetch",
]
