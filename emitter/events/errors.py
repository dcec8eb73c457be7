"""
Emitter Events — Errors
=========================
Error types for the listener registry and dispatch layer.

Only listener validation can fail. Every other operation is total:
unknown keys are created on read (literal) or resolve to nothing
(pattern, removal, dispatch).
"""


class EventEmitterError(Exception):
    """Base error for event emitter operations."""
    pass


class InvalidListener(EventEmitterError, TypeError):
    """Value passed as a listener is not callable, a pattern, or a wrapped listener."""

    def __init__(self, listener: object):
        self.listener = listener
        super().__init__(
            f"Listener must be callable, a pattern or a wrapped listener, "
            f"got {type(listener).__name__}."
        )
