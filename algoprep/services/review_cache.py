# algoprep/services/review_cache.py
# In-process cache of finished code reviews, keyed by problem title + code hash.
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from algoprep.config import settings


def hash_code(text: str) -> int:
    """
    Java-style string hash: h = h*31 + unit over UTF-16 code units,
    wrapped to a signed 32-bit int.
    """
    h = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def cache_key(title: str, code: str) -> str:
    # language is not part of the key
    return f"{title}-{hash_code(code)}"


class ReviewCache:
    def __init__(
        self,
        ttl_sec: float = settings.review_cache_ttl_sec,
        sweep_threshold: int = settings.review_cache_sweep_threshold,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_sec = ttl_sec
        self.sweep_threshold = sweep_threshold
        self._clock = clock
        self._entries: Dict[str, Tuple[Dict[str, Any], float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        review, stored_at = entry
        if now - stored_at < self.ttl_sec:
            return review
        return None

    def put(self, key: str, review: Dict[str, Any]) -> None:
        now = self._clock()
        with self._lock:
            self._entries[key] = (review, now)
            if len(self._entries) > self.sweep_threshold:
                self._sweep_locked(now)

    def sweep(self) -> int:
        with self._lock:
            return self._sweep_locked(self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _sweep_locked(self, now: float) -> int:
        expired = [k for k, (_, ts) in self._entries.items() if now - ts > self.ttl_sec]
        for k in expired:
            del self._entries[k]
        return len(expired)


review_cache = ReviewCache()
