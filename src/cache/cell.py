#!/usr/bin/env python3
"""
Matrix Cache Cell
Single-slot cache for an expensive derived value (the matrix inverse)

Implements:
- set_source(value)   → replace input, drop cached result
- get_source()        → current input
- set_derived(value)  → store a computed result
- get_derived()       → cached result | None
- get_stats()         → {hits, misses, failures, invalidations, writes}
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

logger = logging.getLogger(__name__)

_ABSENT = object()


def _readonly(value: Any) -> Any:
    """Return numpy arrays as read-only views; everything else as-is."""
    if isinstance(value, np.ndarray):
        view = value.view()
        view.flags.writeable = False
        return view
    return value


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    failures: int = 0
    invalidations: int = 0
    writes: int = 0

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.failures = 0
        self.invalidations = 0
        self.writes = 0


class CacheCell:
    """
    Holds one source value and, lazily, the result derived from it.

    Design principles:
    - One slot: a new source always drops the derived value
    - No equality checks: setting the same source twice still invalidates
    - No verification: set_derived trusts the caller to have computed the
      value from the current source
    - Never raises: all policy lives in fetch_or_compute

    The source is held by reference. Mutating an array after handing it to
    set_source bypasses invalidation; call set_source again instead.
    """

    def __init__(self, source: Any = None):
        if source is None:
            source = np.empty((0, 0), dtype=float)

        self._lock = threading.RLock()
        self._source = source
        self._derived = _ABSENT
        self.stats = CacheStats()

        logger.debug("CacheCell created (source type=%s)", type(source).__name__)

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def has_derived(self) -> bool:
        return self._derived is not _ABSENT

    def set_source(self, value: Any) -> None:
        """Replace the source and forget any cached derived value."""
        with self._lock:
            self._source = value
            self._derived = _ABSENT
            self.stats.invalidations += 1
        logger.debug("Source replaced, derived value invalidated")

    def get_source(self) -> Any:
        return _readonly(self._source)

    def set_derived(self, value: Any) -> None:
        with self._lock:
            self._derived = value
            self.stats.writes += 1

    def get_derived(self) -> Optional[Any]:
        """Cached derived value, or None if nothing valid is stored."""
        derived = self._derived
        if derived is _ABSENT:
            return None
        return _readonly(derived)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            stats = self.stats
            total_requests = stats.hits + stats.misses
            hit_rate = (stats.hits / total_requests * 100) if total_requests > 0 else 0

            return {
                "hits": stats.hits,
                "misses": stats.misses,
                "hit_rate_percent": round(hit_rate, 1),
                "total_requests": total_requests,
                "failures": stats.failures,
                "invalidations": stats.invalidations,
                "writes": stats.writes,
                "cached": self.has_derived,
            }

    def reset_stats(self) -> None:
        with self._lock:
            self.stats.reset()

    def __repr__(self) -> str:
        shape = getattr(self._source, "shape", None)
        return f"CacheCell(shape={shape}, cached={self.has_derived})"
