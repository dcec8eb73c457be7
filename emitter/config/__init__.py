"""
Emitter Config — Public API
==============================
"""

from emitter.config.settings import DEFAULT_ONCE_RETURN_VALUE, EmitterConfig

__all__ = [
    "DEFAULT_ONCE_RETURN_VALUE",
    "EmitterConfig",
]
