import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from docscan.config.settings import Settings
from docscan.logging.logger import Log


@dataclass
class RateLimitEntry:
    """Request counter for one client within its current window."""

    client_key: str
    count: int
    window_reset_at: float


class RateLimiter:
    """Per-client fixed-budget request counter with a rolling reset time.

    All reads and writes of the ledger happen under one lock, so the
    check-then-increment in ``admit`` is atomic across request threads.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60,
        sweep_interval_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._sweeper: threading.Thread | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimiter":
        return cls(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            sweep_interval_seconds=settings.rate_limit_sweep_interval_seconds,
        )

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def admit(self, client_key: str) -> bool:
        """Record a request for client_key. Returns False when over budget."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(client_key)
            if entry is None:
                entry = RateLimitEntry(
                    client_key=client_key,
                    count=0,
                    window_reset_at=now + self._window_seconds,
                )
                self._entries[client_key] = entry

            if now > entry.window_reset_at:
                entry.count = 0
                entry.window_reset_at = now + self._window_seconds

            if entry.count >= self._max_requests:
                return False

            entry.count += 1
            return True

    def retry_after(self, client_key: str) -> int:
        """Whole seconds until client_key's window resets (at least 1)."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(client_key)
            if entry is None:
                return max(1, math.ceil(self._window_seconds))
            return max(1, math.ceil(entry.window_reset_at - now))

    def sweep(self) -> int:
        """Drop entries whose window has already expired."""
        now = self._clock()
        with self._lock:
            expired = [
                key for key, entry in self._entries.items() if now > entry.window_reset_at
            ]
            for key in expired:
                del self._entries[key]
        if expired:
            Log.debug(f"Rate limiter swept {len(expired)} expired entries")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def start(self) -> None:
        """Start the background sweep thread."""
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(
            target=self._sweep_loop, name="rate-limit-sweeper", daemon=True
        )
        self._sweeper.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._sweeper is not None:
            self._sweeper.join()
            self._sweeper = None

    def _sweep_loop(self) -> None:
        while not self._stop_event.wait(self._sweep_interval_seconds):
            self.sweep()
