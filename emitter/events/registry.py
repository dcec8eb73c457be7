"""
Emitter Events — Listener Registry
=====================================
Owns the mapping from event key to its ordered subscription list.

Rules:
- Keys are literal strings, never patterns
- Insertion order of subscriptions is significant
- The mapping is created lazily on first use
- In-memory only, owned by exactly one host instance
- No locking: the registry is not shared across threads

Pattern-vs-literal decisions do NOT live here. See KeyResolver.
"""

from __future__ import annotations

import logging
from typing import Optional

from emitter.events.subscription import Subscription

logger = logging.getLogger("emitter.events")


class ListenerRegistry:
    """
    Storage for event key → list[Subscription].

    Lists handed out are the live lists: callers mutate them in place.
    """

    def __init__(self) -> None:
        self._events: Optional[dict[str, list[Subscription]]] = None

    @property
    def is_initialized(self) -> bool:
        return self._events is not None

    def events(self) -> dict[str, list[Subscription]]:
        """Return the mapping, creating it if required."""
        if self._events is None:
            self._events = {}
        return self._events

    def get(self, key: str) -> Optional[list[Subscription]]:
        """Live list for key, or None. Never creates."""
        if self._events is None:
            return None
        return self._events.get(key)

    def get_or_create(self, key: str) -> list[Subscription]:
        events = self.events()
        if key not in events:
            events[key] = []
            logger.debug(f"Event defined: {key}")
        return events[key]

    def keys(self) -> tuple[str, ...]:
        """Existing keys in creation order (snapshot)."""
        if self._events is None:
            return ()
        return tuple(self._events)

    def delete(self, key: str) -> bool:
        if self._events is None or key not in self._events:
            return False
        del self._events[key]
        logger.debug(f"Event removed: {key}")
        return True

    def clear(self) -> None:
        """Drop every key. The mapping is re-created lazily on next use."""
        self._events = None
        logger.debug("All events removed")

    def listener_count(self, key: str) -> int:
        subscriptions = self.get(key)
        return len(subscriptions) if subscriptions else 0

    def has_listeners(self, key: str) -> bool:
        return self.listener_count(key) > 0
