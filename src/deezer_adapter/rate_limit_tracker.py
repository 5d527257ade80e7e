"""
RateLimitTracker module for enforcing the service's sliding window request quota
"""

import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, Optional


class RateLimitTracker:
    """
    Tracks request timestamps in a trailing window and delays callers once the
    window is full

    The prune-check-record sequence in acquire() runs under a lock, so one
    tracker can be shared by every client and thread in the process.
    """

    def __init__(self, max_requests: int = 50, window_seconds: float = 5.0,
                 clock: Optional[Callable[[], float]] = None,
                 sleep: Optional[Callable[[float], None]] = None):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._timestamps: Deque[float] = deque()
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    def acquire(self) -> float:
        """
        Block until a request slot is available, then record the request

        Returns:
            Total seconds spent waiting for a slot
        """
        waited = 0.0
        while True:
            with self._lock:
                now = self._clock()
                self._cleanup_old_entries(now)
                if len(self._timestamps) < self.max_requests:
                    self._timestamps.append(now)
                    return waited
                wait_time = self._timestamps[0] + self.window_seconds - now

            self.logger.debug(
                f"Rate limit of {self.max_requests} requests per {self.window_seconds}s reached, "
                f"waiting {wait_time:.3f}s"
            )
            self._sleep(wait_time)
            waited += wait_time

    def get_current_usage(self) -> int:
        """
        Get the number of requests recorded in the current window

        Returns:
            Count of timestamps younger than the window duration
        """
        with self._lock:
            self._cleanup_old_entries(self._clock())
            return len(self._timestamps)

    def get_wait_time(self) -> float:
        """
        Estimate the delay the next request would incur without recording it

        Returns:
            Seconds until a slot frees up, 0.0 if one is free now
        """
        with self._lock:
            now = self._clock()
            self._cleanup_old_entries(now)
            if len(self._timestamps) < self.max_requests:
                return 0.0
            return max(0.0, self._timestamps[0] + self.window_seconds - now)

    def reset(self) -> None:
        """Forget every recorded request"""
        with self._lock:
            self._timestamps.clear()

    def _cleanup_old_entries(self, now: float) -> None:
        """
        Remove timestamps that have left the trailing window

        Args:
            now: Current clock reading
        """
        while self._timestamps and self._timestamps[0] + self.window_seconds <= now:
            self._timestamps.popleft()


_DEFAULT_TRACKER = RateLimitTracker()


def get_default_tracker() -> RateLimitTracker:
    """Return the process-wide tracker shared by clients that do not inject one"""
    return _DEFAULT_TRACKER
