"""
Emitter Config — Per-Instance Settings
=========================================
Configuration carried by each host instance.

The once-return value (sentinel) is compared against every listener's
return value. A match removes that listener after the call, whether or
not it was registered as once.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

DEFAULT_ONCE_RETURN_VALUE = True


@dataclass(frozen=True)
class EmitterConfig:
    once_return_value: Any = DEFAULT_ONCE_RETURN_VALUE

    def with_once_return_value(self, value: Any) -> "EmitterConfig":
        return replace(self, once_return_value=value)

    def matches_once_return_value(self, result: Any) -> bool:
        """
        Identity, or equality with booleans kept apart from numbers.
        1 does not match True, 42.0 matches 42.
        """
        sentinel = self.once_return_value
        if result is sentinel:
            return True
        if isinstance(result, bool) is not isinstance(sentinel, bool):
            return False
        return result == sentinel
