"""
Emitter
=========
Publish/subscribe listener registry and synchronous dispatch engine,
composed into a host object that needs an event interface.
"""

from emitter.config import EmitterConfig
from emitter.events import (
    EventEmitter,
    EventEmitterError,
    EventPattern,
    InvalidListener,
    Subscription,
)

__all__ = [
    "EmitterConfig",
    "EventEmitter",
    "EventEmitterError",
    "EventPattern",
    "InvalidListener",
    "Subscription",
]
