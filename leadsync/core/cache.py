"""
Explicit caches injected into resolvers.
Invalidation is a method call, never module state.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Optional


class Cache(ABC):
    """Base interface for key/value caches used by the resolvers."""

    @abstractmethod
    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value or None."""
        pass

    @abstractmethod
    def set(self, key: Hashable, value: Any) -> None:
        """Store a value."""
        pass

    @abstractmethod
    def invalidate(self, key: Hashable) -> None:
        """Drop one key."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop everything."""
        pass


class InMemoryCache(Cache):
    """Per-instance dictionary cache. Not shared between instances."""

    def __init__(self):
        self._data: Dict[Hashable, Any] = {}

    def get(self, key: Hashable) -> Optional[Any]:
        return self._data.get(key)

    def set(self, key: Hashable, value: Any) -> None:
        self._data[key] = value

    def invalidate(self, key: Hashable) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class NullCache(Cache):
    """Cache that never remembers anything."""

    def get(self, key: Hashable) -> Optional[Any]:
        return None

    def set(self, key: Hashable, value: Any) -> None:
        pass

    def invalidate(self, key: Hashable) -> None:
        pass

    def clear(self) -> None:
        pass
