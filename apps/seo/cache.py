"""
Time-bounded document cache for generated SEO files (sitemap, RSS).

Holds one (document, built_at_ms) pair. A document younger than the TTL is
returned verbatim; otherwise the builder runs and its output replaces the
cached value. A failing builder leaves the previous value in place.
"""
import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class DocumentCache:
    def __init__(self, name: str, ttl_ms: int, clock: Callable[[], int] = _now_ms):
        self.name = name
        self.ttl_ms = ttl_ms
        self.clock = clock
        self._document: Optional[str] = None
        self._built_at = 0
        # Endpoints run on a thread pool: serialize check-then-rebuild
        self._lock = threading.Lock()

    def get(self, build: Callable[[], str]) -> str:
        with self._lock:
            now = self.clock()
            if self._document is not None and now - self._built_at < self.ttl_ms:
                return self._document

            document = build()
            self._document = document
            self._built_at = now
            logger.info(f"Rebuilt {self.name} ({len(document)} bytes)")
            return document

    def invalidate(self) -> None:
        with self._lock:
            self._document = None
            self._built_at = 0
