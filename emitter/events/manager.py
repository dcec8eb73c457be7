"""
Emitter Events — Subscription Manager
=======================================
Add / remove / once / bulk operations over the registry.

All key handling goes through KeyResolver:
- add with a literal key creates the key if absent
- add with a pattern reaches only keys that already exist
- removal never creates keys

Uniqueness: at most one subscription per (key, listener). Re-adding the
same listener to a key is a no-op.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from emitter.events.patterns import EventKey, is_pattern
from emitter.events.resolver import KeyResolver
from emitter.events.subscription import (
    Subscription,
    index_of_listener,
    to_subscription,
    unwrap_listener,
)

logger = logging.getLogger("emitter.events")


def _listener_name(listener: Any) -> str:
    return getattr(listener, "__qualname__", repr(listener))


class SubscriptionManager:
    def __init__(self, resolver: KeyResolver) -> None:
        self._resolver = resolver

    def add(self, key: EventKey, listener: Any) -> None:
        """
        Attach listener to every key resolved from key.

        Raises:
            InvalidListener: listener is not callable, a pattern,
                             or a valid wrapped listener
        """
        subscription = to_subscription(listener)
        resolved = self._resolver.resolve_as_map(key, create=True)

        if not resolved:
            logger.debug(
                f"Listener {_listener_name(subscription.listener)} matched "
                f"no defined events for {key!r}"
            )
            return

        for event_key, subscriptions in resolved.items():
            if index_of_listener(subscriptions, subscription.listener) != -1:
                continue
            subscriptions.append(subscription)
            logger.debug(
                f"Listener registered: {_listener_name(subscription.listener)} "
                f"→ {event_key} (once: {subscription.once})"
            )

    def remove(self, key: EventKey, listener: Any) -> None:
        """Detach listener from every key resolved from key. No-op if absent."""
        listener = unwrap_listener(listener)
        resolved = self._resolver.resolve_as_map(key, create=False)

        for event_key, subscriptions in resolved.items():
            index = index_of_listener(subscriptions, listener)
            if index != -1:
                del subscriptions[index]
                logger.debug(
                    f"Listener removed: {_listener_name(listener)} "
                    f"from {event_key}"
                )

    def discard(self, event_key: str, subscription: Subscription) -> None:
        """
        Remove one exact subscription from one key's live list.
        Idempotent: does nothing if it is already gone.
        """
        subscriptions = self._resolver.registry.get(event_key)
        if not subscriptions:
            return
        for index, existing in enumerate(subscriptions):
            if existing is subscription:
                del subscriptions[index]
                return

    def manipulate(
        self,
        remove: bool,
        spec: Any,
        listeners: Optional[Sequence[Any]] = None,
    ) -> None:
        """
        Bulk add or remove.

        spec as mapping: {key: listener} or {key: [listeners]}, each entry
                         routed to the single or bulk operation.
        spec as key:     listeners is a sequence, applied one at a time.
        """
        single = self.remove if remove else self.add

        if isinstance(spec, Mapping) and not is_pattern(spec):
            for key, value in spec.items():
                if not value:
                    continue
                if isinstance(value, (list, tuple)):
                    self.manipulate(remove, key, value)
                else:
                    single(key, value)
            return

        # Applied last to first.
        for listener in reversed(list(listeners or ())):
            single(spec, listener)
