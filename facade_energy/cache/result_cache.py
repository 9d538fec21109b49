"""
Redis cache for analysis results.

Results are stored as JSON under `analysis:{building_id}:{city}` with a fixed
expiry. Hourly or seasonal variants append `:{season}:{hour}` so that one
pattern (`analysis:{building_id}:*`) covers everything cached for a design.

The cache is an optimization only. With no Redis client configured every
lookup is a miss, and Redis errors are logged and treated as misses, so
callers always fall back to recomputing.

Usage:
    cache = AnalysisCache(redis.Redis.from_url("redis://localhost:6379/0"))

    result = cache.get(design_id, "Mumbai")
    if result is None:
        result = calculator.analyze(design, city)
        cache.set(result)

    cache.invalidate(design_id)  # after the design changes
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import redis
from pydantic import ValidationError as PydanticValidationError

from ..core.config import settings
from ..core.models import AnalysisResult, Season

logger = logging.getLogger(__name__)

CACHE_TTL = 3600  # 1 hour in seconds
DEFAULT_PREFIX = "analysis"


class AnalysisCache:
    """get/set/invalidate wrapper around a Redis client with a fixed TTL."""

    def __init__(
        self,
        client: Optional[Any] = None,
        ttl: int = CACHE_TTL,
        prefix: str = DEFAULT_PREFIX,
    ):
        self._client = client
        self.ttl = ttl
        self.prefix = prefix

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def key(
        self,
        building_id: str,
        city: str,
        season: Optional[Season] = None,
        hour: Optional[int] = None,
    ) -> str:
        key = f"{self.prefix}:{building_id}:{city}"
        if season is not None or hour is not None:
            season_label = Season(season).value if season is not None else "day"
            hour_label = "all" if hour is None else str(hour)
            key = f"{key}:{season_label}:{hour_label}"
        return key

    def get(
        self,
        building_id: str,
        city: str,
        season: Optional[Season] = None,
        hour: Optional[int] = None,
    ) -> Optional[AnalysisResult]:
        """Cached result, or None on miss, expiry, disabled cache or Redis error."""
        if not self.enabled:
            return None

        key = self.key(building_id, city, season, hour)
        try:
            data = self._client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Error getting {key} from Redis: {e}")
            return None

        if data is None:
            return None

        try:
            return AnalysisResult.model_validate_json(data)
        except PydanticValidationError as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            self._delete([key])
            return None

    def set(self, result: AnalysisResult, ttl: Optional[int] = None) -> bool:
        """Store a result; returns False when it was not cached."""
        if not self.enabled or not result.building_design_id:
            return False

        key = self.key(result.building_design_id, result.city, result.season, result.hour)
        try:
            self._client.set(key, result.model_dump_json(), ex=ttl or self.ttl)
            return True
        except redis.RedisError as e:
            logger.warning(f"Error setting {key} in Redis: {e}")
            return False

    def keys(self, pattern: str) -> List[str]:
        if not self.enabled:
            return []
        try:
            return [k.decode() if isinstance(k, bytes) else k for k in self._client.keys(pattern)]
        except redis.RedisError as e:
            logger.warning(f"Error listing Redis keys for {pattern}: {e}")
            return []

    def invalidate(self, building_id: str) -> int:
        """Drop every cached result for a design; returns the number of keys removed."""
        keys = self.keys(f"{self.prefix}:{building_id}:*")
        removed = self._delete(keys)
        if removed:
            logger.info(f"Invalidated {removed} cached results", extra={"building_id": building_id})
        return removed

    def flush(self) -> int:
        """Drop every cached analysis result (only keys under this cache's prefix)."""
        return self._delete(self.keys(f"{self.prefix}:*"))

    def status(self) -> Dict[str, Any]:
        if not self.enabled:
            return {"enabled": False, "connected": False}
        try:
            connected = bool(self._client.ping())
        except redis.RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            connected = False
        return {"enabled": True, "connected": connected, "ttl_seconds": self.ttl}

    def _delete(self, keys: List[str]) -> int:
        if not self.enabled or not keys:
            return 0
        try:
            return int(self._client.delete(*keys))
        except redis.RedisError as e:
            logger.warning(f"Error deleting {len(keys)} keys from Redis: {e}")
            return 0


@lru_cache(maxsize=1)
def get_cache() -> AnalysisCache:
    """Singleton cache built from settings; disabled when no Redis URL is set."""
    if not settings.cache_enabled or not settings.redis_url:
        logger.info("Analysis cache disabled")
        return AnalysisCache(None, ttl=settings.cache_ttl_seconds, prefix=settings.cache_prefix)

    client = redis.Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=2,
        socket_timeout=2,
        retry_on_timeout=True,
    )
    return AnalysisCache(client, ttl=settings.cache_ttl_seconds, prefix=settings.cache_prefix)
