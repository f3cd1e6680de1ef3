"""
Matrix Cache
Single-slot memoization of a matrix inverse, invalidated on every new source
"""

from .cell import CacheCell, CacheStats
from .config import CacheConfig, load_config
from .fetch import cache_solve, fetch_or_compute, make_cache_matrix
from .logging_config import setup_logging

__all__ = [
    'CacheCell',
    'CacheConfig',
    'CacheStats',
    'cache_solve',
    'fetch_or_compute',
    'load_config',
    'make_cache_matrix',
    'setup_logging',
]
