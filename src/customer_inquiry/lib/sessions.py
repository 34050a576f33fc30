"""
Bounded per-session object registry.

Keeps one object (a controller) per browser session id. The registry is
bounded: once max_sessions is reached the least recently used session is
evicted and handed to the on_evict callback so it can release resources.
"""

from collections import OrderedDict
from threading import Lock
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class SessionRegistry(Generic[T]):
    """
    Thread-safe LRU map of session id to a lazily created object.

    Attributes:
        max_sessions: Maximum number of sessions kept before eviction.
    """

    def __init__(
        self,
        factory: Callable[[], T],
        max_sessions: int = 500,
        on_evict: Callable[[T], None] | None = None,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._factory = factory
        self._on_evict = on_evict
        self._items: OrderedDict[str, T] = OrderedDict()
        self._lock = Lock()

    def get(self, session_id: str) -> T:
        """Return the object for the session, creating it on first use."""
        evicted: list[T] = []
        with self._lock:
            if session_id in self._items:
                self._items.move_to_end(session_id)
                return self._items[session_id]
            item = self._factory()
            self._items[session_id] = item
            while len(self._items) > self.max_sessions:
                _, old = self._items.popitem(last=False)
                evicted.append(old)
        for old in evicted:
            self._evict(old)
        return item

    def clear(self) -> None:
        with self._lock:
            items = list(self._items.values())
            self._items.clear()
        for item in items:
            self._evict(item)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _evict(self, item: T) -> None:
        if self._on_evict is not None:
            self._on_evict(item)
