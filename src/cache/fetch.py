#!/usr/bin/env python3
"""
Memoized access on top of a CacheCell

Implements:
- fetch_or_compute(cell, transform, *args, **kwargs) → cached or fresh result
- cache_solve(cell, *args, **kwargs) → cached or fresh matrix inverse
- make_cache_matrix(x) → CacheCell around a float matrix

The whole read-check-compute-store sequence runs under the cell's lock, so
threads racing on a miss compute the transform once per source assignment.
"""

import logging
from typing import Any, Callable

import numpy as np

from linalg.invert import invert

from .cell import CacheCell

logger = logging.getLogger(__name__)


def fetch_or_compute(cell: CacheCell, transform: Callable[..., Any], *args, **kwargs) -> Any:
    """
    Return the cell's derived value, computing and storing it on a miss.

    Args:
        cell: Cache cell holding the source value
        transform: Pure function of (source, *args, **kwargs)
        *args, **kwargs: Passed to transform on a miss; not part of the key

    Returns:
        The derived value (read-only view for numpy arrays)

    Raises:
        Whatever transform raises. The cell is left without a derived
        value so the next call retries.
    """
    with cell.lock:
        if cell.has_derived:
            cell.stats.hits += 1
            logger.info("getting cached data")
            return cell.get_derived()

        cell.stats.misses += 1
        data = cell.get_source()

        try:
            result = transform(data, *args, **kwargs)
        except Exception as e:
            cell.stats.failures += 1
            logger.warning(f"Derived value computation failed: {e}")
            raise

        cell.set_derived(result)
        logger.debug(f"Computed and cached derived value ({type(result).__name__})")
        return cell.get_derived()


def cache_solve(cell: CacheCell, *args, **kwargs) -> np.ndarray:
    """Return the inverse of the cell's matrix, computing it only on a miss."""
    return fetch_or_compute(cell, invert, *args, **kwargs)


def make_cache_matrix(x: Any = None) -> CacheCell:
    """Wrap a matrix in a fresh cache cell."""
    if x is None:
        return CacheCell()
    return CacheCell(np.asarray(x, dtype=float))


if __name__ == "__main__":
    from pathlib import Path

    from .config import load_config
    from .logging_config import setup_logging

    cfg = load_config(Path(__file__).parents[2] / "config" / "cache.defaults.yml")
    setup_logging(cfg.log_level, cfg.log_file)
    solve_kwargs = cfg.solve_kwargs()

    cm = make_cache_matrix([[4.0, 7.0], [2.0, 6.0]])

    print(f"First call (computes):\n{cache_solve(cm, **solve_kwargs)}")
    print(f"Second call (cached):\n{cache_solve(cm, **solve_kwargs)}")

    cm.set_source(np.eye(2))
    print(f"After set_source (recomputes):\n{cache_solve(cm, **solve_kwargs)}")
    print(cm.get_stats())
