"""In-memory caches."""

from smart_train_finder.adapters.cache.inflight_cache import InFlightCache

__all__ = ["InFlightCache"]
