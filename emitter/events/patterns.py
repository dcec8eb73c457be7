"""
Emitter Events — Event Key Patterns
=====================================
Explicit matcher values that select a subset of the event keys
currently present in a registry.

A pattern is never stored as a registry key. It is evaluated at the
moment of the call against the keys that already exist, so keys created
afterwards are not matched retroactively.

Matching uses search semantics: an unanchored expression matches
anywhere in the key. Anchor with ^ and $ for whole-key matches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from fnmatch import translate
from typing import Union


@dataclass(frozen=True)
class EventPattern:
    """
    Matcher over literal event keys.

    Usage:
        EventPattern.regex(r"^ba[rz]$").matches("bar")    # True
        EventPattern.glob("inventory.*").matches("inventory.moved")  # True
    """

    compiled: re.Pattern

    @classmethod
    def regex(cls, expression: str, flags: int = 0) -> "EventPattern":
        return cls(re.compile(expression, flags))

    @classmethod
    def glob(cls, expression: str) -> "EventPattern":
        """Shell-style wildcard pattern (*, ?, [seq]) over the whole key."""
        return cls(re.compile(r"\A" + translate(expression)))

    @property
    def source(self) -> str:
        return self.compiled.pattern

    def matches(self, key: str) -> bool:
        return self.compiled.search(key) is not None

    def __repr__(self) -> str:
        return f"EventPattern({self.source!r})"


EventKey = Union[str, EventPattern, re.Pattern]


def is_pattern(value: object) -> bool:
    """True for pattern values (EventPattern or compiled regex), False for literal keys."""
    return isinstance(value, (EventPattern, re.Pattern))


def as_pattern(value: Union[EventPattern, re.Pattern]) -> EventPattern:
    if isinstance(value, EventPattern):
        return value
    if isinstance(value, re.Pattern):
        return EventPattern(value)
    raise TypeError(f"Not a pattern: {value!r}")
