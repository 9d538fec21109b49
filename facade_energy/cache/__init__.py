"""Analysis result caching."""

from .result_cache import AnalysisCache, CACHE_TTL, get_cache

__all__ = ["AnalysisCache", "CACHE_TTL", "get_cache"]
