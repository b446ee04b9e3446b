"""Contracts (protocols) implemented by adapters and services."""

from smart_train_finder.domain.contracts.cache_warmer import CacheWarmerProtocol
from smart_train_finder.domain.contracts.timetable_cache import TimetableCacheProtocol

__all__ = [
    "CacheWarmerProtocol",
    "TimetableCacheProtocol",
]
