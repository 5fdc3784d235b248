"""Key-value storage adapters the cart serializes itself into."""
from pathlib import Path
from typing import Dict, Optional, Protocol

from storefront.db import RedisKeys, TTL, get_redis


class CartStorage(Protocol):
    """Session-local text storage: one value per key."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Dict-backed storage, shared by every store given the same instance."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileStorage:
    """One UTF-8 file per key inside a directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        # Keys are fixed strings, but keep them from escaping the directory
        safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")


class RedisStorage:
    """
    Upstash Redis storage.

    Keys are namespaced as cart:{key}; every write refreshes the TTL so
    abandoned carts expire on their own.
    """

    def __init__(self, redis=None, ttl: int = TTL.CART):
        self._redis = redis  # Lazy initialization
        self.ttl = ttl

    @property
    def redis(self):
        if self._redis is None:
            self._redis = get_redis()
        return self._redis

    def get(self, key: str) -> Optional[str]:
        return self.redis.get(RedisKeys.cart_key(key))

    def set(self, key: str, value: str) -> None:
        self.redis.set(RedisKeys.cart_key(key), value, ex=self.ttl)
