"""Size-bounded LRU cache for topic token signatures."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, List, Optional, Tuple

from .logging import get_logger

LOGGER = get_logger(__name__)


class SignatureCache:
    """Thread-safe least-recently-used mapping from content hash to token list.

    The cache is owned by whoever constructs the matcher; entries are keyed
    by a hash of the topic content, so edited topics simply miss.
    """

    def __init__(self, max_size: int = 256) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self._entries: "OrderedDict[str, Tuple[str, ...]]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> Optional[List[str]]:
        with self._lock:
            cached = self._entries.get(key)
            if cached is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return list(cached)

    def put(self, key: str, tokens: List[str]) -> None:
        with self._lock:
            self._entries[key] = tuple(tokens)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                LOGGER.debug("Evicted signature %s", evicted[:12])

    def get_or_compute(self, key: str, factory: Callable[[], List[str]]) -> List[str]:
        cached = self.get(key)
        if cached is not None:
            return cached
        tokens = factory()
        self.put(key, tokens)
        return list(tokens)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0


__all__ = ["SignatureCache"]
