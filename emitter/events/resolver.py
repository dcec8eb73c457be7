"""
Emitter Events — Key Resolver
===============================
Turns a caller-supplied event key into concrete registry keys.

This is the single place where literal and pattern keys are told apart:
- literal key  → exactly that key (created on demand when asked to)
- pattern      → every currently existing key the pattern matches

A pattern never creates keys. Subscribing through a pattern before any
matching key was defined therefore attaches to nothing.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from emitter.events.patterns import EventKey, as_pattern, is_pattern
from emitter.events.registry import ListenerRegistry
from emitter.events.subscription import Subscription

ResolvedMap = dict[str, list[Subscription]]


class KeyResolver:
    def __init__(self, registry: ListenerRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ListenerRegistry:
        return self._registry

    def matching_keys(self, pattern) -> list[str]:
        matcher = as_pattern(pattern)
        return [key for key in self._registry.keys() if matcher.matches(key)]

    def resolve(self, key: EventKey) -> Union[list[Subscription], ResolvedMap]:
        """
        Literal key → its live list (created if absent).
        Pattern     → {matched_key: live list}, possibly empty.
        """
        if is_pattern(key):
            return self._resolve_pattern(key)
        return self._registry.get_or_create(key)

    def resolve_as_map(self, key: EventKey, create: bool = True) -> ResolvedMap:
        """Same as resolve(), but always returns a mapping."""
        if is_pattern(key):
            return self._resolve_pattern(key)

        if create:
            return {key: self._registry.get_or_create(key)}

        subscriptions = self._registry.get(key)
        if subscriptions is None:
            return {}
        return {key: subscriptions}

    def _resolve_pattern(self, pattern) -> ResolvedMap:
        return {
            matched: self._registry.get_or_create(matched)
            for matched in self.matching_keys(pattern)
        }

    def define(self, key: str) -> None:
        self._registry.get_or_create(key)

    def define_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.define(key)

    def remove(self, key: Optional[EventKey] = None) -> None:
        """
        Literal key → delete it.
        Pattern     → delete every matching key.
        None        → clear the whole registry.
        """
        if key is None:
            self._registry.clear()
        elif is_pattern(key):
            for matched in self.matching_keys(key):
                self._registry.delete(matched)
        else:
            self._registry.delete(key)
