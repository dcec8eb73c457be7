"""
Emitter Events — Subscriptions
================================
One (listener, once) registration attached to an event key.

Listeners may be passed in three forms:
- a callable (or a pattern value)
- a Subscription wrapping one of these
- a mapping {"listener": ..., "once": bool}

Wrapped forms are validated and unwrapped recursively. The outermost
once flag wins.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from emitter.events.errors import InvalidListener
from emitter.events.patterns import is_pattern


@dataclass(frozen=True, eq=False)
class Subscription:
    """
    Immutable registration of a listener on one event key.

    Compared by identity: two Subscriptions for the same listener are
    distinct objects, and removal targets the exact object.
    """

    listener: Callable[..., Any]
    once: bool = False


def _next_wrapped(listener: object) -> object:
    if isinstance(listener, Subscription):
        return listener.listener
    return listener.get("listener")


def _is_wrapper(listener: object) -> bool:
    if isinstance(listener, Subscription):
        return True
    return isinstance(listener, Mapping) and not callable(listener)


def is_valid_listener(listener: object) -> bool:
    """
    Walk wrappers down to the listener. A wrapper chain that loops back
    on itself is invalid.
    """
    seen: set[int] = set()
    while _is_wrapper(listener):
        if id(listener) in seen:
            return False
        seen.add(id(listener))
        listener = _next_wrapped(listener)
    return callable(listener) or is_pattern(listener)


def unwrap_listener(listener: object) -> Callable[..., Any]:
    """Strip Subscription / mapping wrappers down to the listener itself."""
    seen: set[int] = set()
    while _is_wrapper(listener) and id(listener) not in seen:
        seen.add(id(listener))
        listener = _next_wrapped(listener)
    return listener


def to_subscription(listener: object) -> Subscription:
    """
    Normalize any accepted listener form into a Subscription.

    Raises:
        InvalidListener: listener is not valid in any accepted form
    """
    if not is_valid_listener(listener):
        raise InvalidListener(listener)

    if isinstance(listener, Subscription):
        target = unwrap_listener(listener)
        if target is listener.listener:
            return listener
        return Subscription(target, once=listener.once)

    if isinstance(listener, Mapping) and not callable(listener):
        return Subscription(
            unwrap_listener(listener), once=bool(listener.get("once", False))
        )

    return Subscription(listener)


def same_listener(a: object, b: object) -> bool:
    """
    Listener identity check.

    Bound methods are re-created on every attribute access, so they are
    compared by (instance, function) equality instead of identity.
    """
    if a is b:
        return True
    return inspect.ismethod(a) and inspect.ismethod(b) and a == b


def index_of_listener(subscriptions: list[Subscription], listener: object) -> int:
    """Index of the subscription holding listener, or -1."""
    for index, subscription in enumerate(subscriptions):
        if same_listener(subscription.listener, listener):
            return index
    return -1


def flatten_listeners(subscriptions: Iterable[Subscription]) -> list[Callable[..., Any]]:
    return [subscription.listener for subscription in subscriptions]
