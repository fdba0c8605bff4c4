"""
On-disk cache for session detection results.

Backed by diskcache (SQLite). Entries are keyed by repository, HEAD and the
run's options, and expire after a TTL so a relative ``--since`` window cannot
serve a stale answer forever. A broken cache degrades to a miss.
"""

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

from diskcache import Cache

from .logging_config import get_logger
from .temporal.models import SessionDetectionResult

logger = get_logger(__name__)

KEY_PREFIX = "sessions:"


@dataclass(frozen=True)
class CacheStats:
    enabled: bool
    entries: int = 0
    volume_bytes: int = 0
    directory: Optional[str] = None
    error: Optional[str] = None


class SessionCache:
    """Persistent store of ``SessionDetectionResult`` objects.

    Usable as a context manager; the SQLite handle is closed on exit.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        ttl_hours: int = 24,
        enabled: bool = True,
    ):
        self.directory = Path(directory)
        self.expire = ttl_hours * 3600 or None  # 0 = never expire
        self._store: Optional[Cache] = None
        if enabled:
            try:
                self._store = Cache(str(self.directory))
            except Exception as e:
                logger.warning(f"Session cache unavailable at {self.directory}: {e}")
                enabled = False
        logger.debug(
            f"Session cache {'at ' + str(self.directory) if enabled else 'disabled'}"
            f" (ttl={ttl_hours}h)"
        )

    @property
    def enabled(self) -> bool:
        return self._store is not None

    def __enter__(self) -> "SessionCache":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _guarded(self, action: str, op: Callable[[Cache], Any], default: Any = None) -> Any:
        if self._store is None:
            return default
        try:
            return op(self._store)
        except Exception as e:
            logger.warning(f"Session cache {action} failed: {e}")
            return default

    def load(self, key: str) -> Optional[SessionDetectionResult]:
        """Cached result for ``key``, or None on a miss or unreadable entry."""
        value = self._guarded("read", lambda store: store.get(key))
        if value is None:
            return None
        if not isinstance(value, SessionDetectionResult):
            logger.debug(f"Ignoring cache entry of unexpected type {type(value).__name__}")
            return None
        logger.debug(f"Session cache hit: {key}")
        return value

    def store(self, key: str, result: SessionDetectionResult) -> None:
        self._guarded("write", lambda store: store.set(key, result, expire=self.expire))

    def clear(self) -> int:
        """Drop every entry; returns how many were removed."""
        removed = self._guarded("clear", lambda store: store.clear(), default=0)
        logger.info(f"Removed {removed} cached session results")
        return removed

    def stats(self) -> CacheStats:
        if self._store is None:
            return CacheStats(enabled=False)
        try:
            return CacheStats(
                enabled=True,
                entries=len(self._store),
                volume_bytes=self._store.volume(),
                directory=str(self.directory),
            )
        except Exception as e:
            logger.warning(f"Session cache stats failed: {e}")
            return CacheStats(enabled=True, directory=str(self.directory), error=str(e))

    def close(self) -> None:
        if self._store is not None:
            self._store.close()


def session_key(
    repo_path: str,
    head_sha: str,
    since: Optional[str],
    until: Optional[str],
    threshold: float,
    max_commits: int = 0,
) -> str:
    """Cache key for a sessions run; any change to HEAD or an option changes it."""
    payload = json.dumps(
        {
            "repo": repo_path,
            "head": head_sha,
            "since": since,
            "until": until,
            "threshold": threshold,
            "max_commits": max_commits,
        },
        sort_keys=True,
    )
    return KEY_PREFIX + hashlib.sha256(payload.encode()).hexdigest()[:16]
