"""
Emitter Events — Public API
==============================
Listener registry, key resolution and synchronous dispatch.
"""

from emitter.events.dispatcher import dispatch
from emitter.events.emitter import EventEmitter
from emitter.events.errors import EventEmitterError, InvalidListener
from emitter.events.manager import SubscriptionManager
from emitter.events.patterns import EventKey, EventPattern, is_pattern
from emitter.events.registry import ListenerRegistry
from emitter.events.resolver import KeyResolver
from emitter.events.subscription import Subscription

__all__ = [
    "dispatch",
    "EventEmitter",
    "EventEmitterError",
    "InvalidListener",
    "SubscriptionManager",
    "EventKey",
    "EventPattern",
    "is_pattern",
    "ListenerRegistry",
    "KeyResolver",
    "Subscription",
]
