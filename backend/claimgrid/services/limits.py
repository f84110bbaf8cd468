import threading
import time
from collections import deque
from typing import Deque, Dict, Optional


DEFAULT_WINDOW_MS = 1000
DEFAULT_MAX_PER_WINDOW = 20
DEFAULT_MAX_PER_ADDRESS = 5


class RateLimiter:
    """Sliding-window limit on claim attempts per connection."""

    def __init__(self, window_ms: int = DEFAULT_WINDOW_MS,
                 max_per_window: int = DEFAULT_MAX_PER_WINDOW):
        self.window_ms = window_ms
        self.max_per_window = max_per_window
        self._lock = threading.Lock()
        self._windows: Dict[str, Deque[float]] = {}

    def allow(self, conn_id: str, now: Optional[float] = None) -> bool:
        if now is None:
            now = time.time() * 1000
        cutoff = now - self.window_ms
        with self._lock:
            timestamps = self._windows.setdefault(conn_id, deque())
            while timestamps and timestamps[0] < cutoff:
                timestamps.popleft()
            if len(timestamps) >= self.max_per_window:
                return False
            timestamps.append(now)
            return True

    def cleanup(self, conn_id: str) -> None:
        with self._lock:
            self._windows.pop(conn_id, None)

    def _tracked(self) -> int:
        with self._lock:
            return len(self._windows)


class ConnectionAdmission:
    """Caps concurrent sessions per source address."""

    def __init__(self, max_per_address: int = DEFAULT_MAX_PER_ADDRESS):
        self.max_per_address = max_per_address
        self._lock = threading.Lock()
        self._counts: Dict[str, int] = {}

    def try_admit(self, address: str) -> bool:
        with self._lock:
            count = self._counts.get(address, 0)
            if count >= self.max_per_address:
                return False
            self._counts[address] = count + 1
            return True

    def release(self, address: str) -> None:
        with self._lock:
            count = self._counts.get(address, 0)
            if count <= 1:
                self._counts.pop(address, None)
            else:
                self._counts[address] = count - 1

    def active(self, address: str) -> int:
        with self._lock:
            return self._counts.get(address, 0)
