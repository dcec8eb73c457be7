"""
Emitter Events — Host Mixin
=============================
The public event interface a host type adopts.

The host gains two lazily created attributes and nothing else:
- _listener_registry: ListenerRegistry (event key → subscriptions)
- _emitter_config:    EmitterConfig (once-return value)

No __init__ is required, so the mixin can sit anywhere in the host's
bases. Every operation delegates to KeyResolver / SubscriptionManager /
dispatch over the one registry. Mutators return the host for chaining.

Usage:
    class Session(EventEmitter):
        ...

    session = Session()
    session.on("message", handle_message).once("closed", handle_closed)
    session.emit("message", payload)
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Sequence, Union

from emitter.config.settings import EmitterConfig
from emitter.events.dispatcher import dispatch
from emitter.events.manager import SubscriptionManager
from emitter.events.patterns import EventKey
from emitter.events.registry import ListenerRegistry
from emitter.events.resolver import KeyResolver, ResolvedMap
from emitter.events.subscription import Subscription
from emitter.events.subscription import flatten_listeners as _flatten


class EventEmitter:
    """
    Listener registry and synchronous dispatch, mixed into a host.

    Keys are literal strings or patterns (EventPattern / re.Pattern).
    Patterns only reach keys that already exist: define_event() the keys
    first when subscribing through a pattern.
    """

    # ── Lazy host state ─────────────────────────────────────

    def _get_registry(self) -> ListenerRegistry:
        registry = getattr(self, "_listener_registry", None)
        if registry is None:
            registry = ListenerRegistry()
            self._listener_registry = registry
        return registry

    def _get_config(self) -> EmitterConfig:
        config = getattr(self, "_emitter_config", None)
        if config is None:
            config = EmitterConfig()
            self._emitter_config = config
        return config

    def _resolver(self) -> KeyResolver:
        return KeyResolver(self._get_registry())

    def _manager(self) -> SubscriptionManager:
        return SubscriptionManager(self._resolver())

    # ── Introspection ───────────────────────────────────────

    def get_listeners(
        self, key: EventKey
    ) -> Union[list[Subscription], ResolvedMap]:
        """
        Literal key → live subscription list (the key is created if absent).
        Pattern     → {matched_key: subscription list} for existing keys.
        """
        return self._resolver().resolve(key)

    def get_listeners_as_object(self, key: EventKey) -> ResolvedMap:
        """Like get_listeners(), but always a mapping."""
        return self._resolver().resolve_as_map(key)

    @staticmethod
    def flatten_listeners(
        subscriptions: Iterable[Subscription],
    ) -> list[Callable[..., Any]]:
        return _flatten(subscriptions)

    def listener_count(self, key: EventKey) -> int:
        """Subscriptions across resolved keys. Never creates keys."""
        resolved = self._resolver().resolve_as_map(key, create=False)
        return sum(len(subscriptions) for subscriptions in resolved.values())

    def event_names(self) -> list[str]:
        return list(self._get_registry().keys())

    # ── Subscription ────────────────────────────────────────

    def add_listener(self, key: EventKey, listener: Any) -> EventEmitter:
        """
        Register a persistent listener.

        Raises:
            InvalidListener: listener is not callable, a pattern,
                             or a valid wrapped listener
        """
        self._manager().add(key, listener)
        return self

    def on(self, key: EventKey, listener: Any) -> EventEmitter:
        return self.add_listener(key, listener)

    def add_once_listener(
        self, key: EventKey, listener: Any
    ) -> EventEmitter:
        """Register a listener removed before its first invocation."""
        return self.add_listener(key, Subscription(listener, once=True))

    def once(self, key: EventKey, listener: Any) -> EventEmitter:
        return self.add_once_listener(key, listener)

    def remove_listener(self, key: EventKey, listener: Any) -> EventEmitter:
        self._manager().remove(key, listener)
        return self

    def off(self, key: EventKey, listener: Any) -> EventEmitter:
        return self.remove_listener(key, listener)

    def add_listeners(
        self, spec: Any, listeners: Optional[Sequence[Any]] = None
    ) -> EventEmitter:
        return self.manipulate_listeners(False, spec, listeners)

    def remove_listeners(
        self, spec: Any, listeners: Optional[Sequence[Any]] = None
    ) -> EventEmitter:
        return self.manipulate_listeners(True, spec, listeners)

    def manipulate_listeners(
        self,
        remove: bool,
        spec: Any,
        listeners: Optional[Sequence[Any]] = None,
    ) -> EventEmitter:
        """
        Bulk add (remove=False) or remove (remove=True).

        spec may be a mapping of key → listener / list of listeners, or a
        key or pattern with listeners given as a sequence.
        """
        self._manager().manipulate(remove, spec, listeners)
        return self

    # ── Events ──────────────────────────────────────────────

    def define_event(self, key: str) -> EventEmitter:
        self._resolver().define(key)
        return self

    def define_events(self, keys: Iterable[str]) -> EventEmitter:
        self._resolver().define_many(keys)
        return self

    def remove_event(self, key: Optional[EventKey] = None) -> EventEmitter:
        """Delete a key, every key matching a pattern, or (no key) everything."""
        self._resolver().remove(key)
        return self

    def remove_all_listeners(
        self, key: Optional[EventKey] = None
    ) -> EventEmitter:
        return self.remove_event(key)

    # ── Dispatch ────────────────────────────────────────────

    def emit_event(
        self, key: EventKey, args: Optional[Sequence[Any]] = None
    ) -> EventEmitter:
        """Invoke every listener resolved from key with args spread positionally."""
        resolver = self._resolver()
        dispatch(
            key,
            args,
            resolver,
            SubscriptionManager(resolver),
            self._get_config,
        )
        return self

    def trigger(
        self, key: EventKey, args: Optional[Sequence[Any]] = None
    ) -> EventEmitter:
        return self.emit_event(key, args)

    def emit(self, key: EventKey, *args: Any) -> EventEmitter:
        return self.emit_event(key, args)

    # ── Once-return value ───────────────────────────────────

    def set_once_return_value(self, value: Any) -> EventEmitter:
        self._emitter_config = self._get_config().with_once_return_value(value)
        return self

    def get_once_return_value(self) -> Any:
        return self._get_config().once_return_value
