"""ClassificationCache — write-once memo of prefix-dictionary hits.

The cache is an explicit object handed to the classifier, so tests can
reset it and concurrent batch runs can share or isolate it deliberately.
"""

from __future__ import annotations

import threading

# (matched dictionary key, equipment type)
PrefixHit = tuple[str, str]


class ClassificationCache:
    """Thread-safe name -> prefix hit memo.

    Each key is populated at most once; later ``put`` calls for the same
    key keep the first value.
    """

    def __init__(self) -> None:
        self._entries: dict[str, PrefixHit] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> PrefixHit | None:
        with self._lock:
            return self._entries.get(name)

    def put(self, name: str, hit: PrefixHit) -> PrefixHit:
        """Store *hit* for *name* unless already present.

        Returns the value held by the cache after the call.
        """
        with self._lock:
            return self._entries.setdefault(name, hit)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
