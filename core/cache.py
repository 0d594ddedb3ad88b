# core/cache.py
"""
Snapshot cache for the latest market prices
"""
from typing import Any, Optional
from cachetools import TTLCache

class CacheManager:
    """Simple in-memory cache manager"""

    def __init__(self, max_size: int = 16, ttl: int = 86400):
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        return self._cache.get(key)

    async def set(self, key: str, value: Any) -> None:
        """Set value in cache"""
        self._cache[key] = value

