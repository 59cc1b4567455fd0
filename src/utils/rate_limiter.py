"""In-memory per-client rate limiter.

Fixed-window request counting keyed by client identity, bounded to the most
recently used identities. Shared by every in-flight request in the process.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from src.utils.logger import logger


MAX_REQUESTS_PER_WINDOW = 5
WINDOW_SECONDS = 60.0
MAX_TRACKED_CLIENTS = 500


@dataclass
class RateLimitEntry:
    """Admitted-request count for one client in its current window."""

    window_start: float
    count: int = 0


class RateLimiter:
    """Per-client fixed-window limiter with LRU-bounded storage.

    Only admitted requests are counted: a rejected request does not extend the
    client's throttling. The window starts at the first request after the
    previous window expired and is not refreshed by later requests.
    """

    def __init__(
        self,
        max_requests: int = MAX_REQUESTS_PER_WINDOW,
        window_seconds: float = WINDOW_SECONDS,
        max_clients: int = MAX_TRACKED_CLIENTS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_requests: Requests admitted per client per window.
            window_seconds: Window length; also the lifetime of an idle entry.
            max_clients: Number of identities tracked before the least recently
                used one is evicted.
            clock: Monotonic time source in seconds (injectable for tests).

        Raises:
            ValueError: If any limit is not positive.
        """
        if max_requests < 1 or window_seconds <= 0 or max_clients < 1:
            raise ValueError("Rate limiter limits must be positive")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_clients = max_clients
        self._clock = clock
        self._entries: "OrderedDict[str, RateLimitEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def check_and_increment(self, identity: str) -> bool:
        """Admit or reject one request from identity.

        Returns:
            True if the request is admitted (and counted), False if the client
            already used its quota for the current window.
        """
        with self._lock:
            now = self._clock()
            entry = self._entries.get(identity)

            if entry is None or now > entry.window_start + self.window_seconds:
                entry = RateLimitEntry(window_start=now)
                self._entries[identity] = entry
            self._entries.move_to_end(identity)
            self._evict_overflow()

            if entry.count + 1 > self.max_requests:
                logger.debug(
                    f"Rate limit reached for {identity}: {entry.count}/{self.max_requests} "
                    f"in {self.window_seconds:.0f}s window"
                )
                return False

            entry.count += 1
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict_overflow(self) -> None:
        # Caller holds the lock
        while len(self._entries) > self.max_clients:
            self._entries.popitem(last=False)
