"""
In-memory response cache with per-entry TTL.

Caches upstream provider responses to reduce TMDB API calls. The store is
shared by every request thread; a background sweeper reclaims expired
entries that are never looked up again.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from movie_terminal.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SWEEP_INTERVAL = 600.0


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class CacheService:
    """Thread-safe key/value store with TTL expiry and periodic sweeping."""

    def __init__(
        self,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the store.

        Args:
            sweep_interval: Seconds between background sweeps of expired entries
            clock: Monotonic time source in seconds, injectable for tests
        """
        if sweep_interval <= 0:
            raise ValueError(f"sweep_interval must be positive, got {sweep_interval}")
        self.sweep_interval = sweep_interval
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._sweeper: threading.Thread | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __enter__(self) -> "CacheService":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get(self, key: str) -> tuple[bool, Any]:
        """
        Look up a live entry.

        Returns:
            (True, value) on a hit, (False, None) when the key is absent or
            expired. An expired entry is evicted on the way out.
        """
        now = self.clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            if entry.is_expired(now):
                del self._entries[key]
                return False, None
            return True, entry.value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store value under key, replacing any previous entry."""
        entry = CacheEntry(value=value, expires_at=self.clock() + ttl)
        with self._lock:
            self._entries[key] = entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def sweep(self) -> int:
        """Remove every expired entry. Returns the number removed."""
        now = self.clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def start(self) -> None:
        """Start the background sweeper thread (no-op if already running)."""
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop.clear()
        self._sweeper = threading.Thread(
            target=self._run_sweeper, name="cache-sweeper", daemon=True
        )
        self._sweeper.start()
        logger.debug(f"Cache sweeper started (every {self.sweep_interval}s)")

    def close(self) -> None:
        """Stop the sweeper. Safe to call more than once."""
        self._stop.set()
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is not None and sweeper is not threading.current_thread():
            sweeper.join(timeout=5)

    def _run_sweeper(self) -> None:
        while not self._stop.wait(self.sweep_interval):
            removed = self.sweep()
            if removed:
                logger.debug(f"Cache sweep removed {removed} expired entries")
