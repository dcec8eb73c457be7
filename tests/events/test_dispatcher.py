"""
Emitter Events — Dispatcher Tests
====================================
Covers:
- Snapshot isolation during a dispatch pass
- Once removal before invocation (re-entrant emit)
- Once-return value auto-removal, strict matching
- Listener exceptions halt the pass
- Dispatch never creates keys
"""

import re

import pytest

from emitter.config.settings import EmitterConfig
from emitter.events.dispatcher import dispatch
from emitter.events.manager import SubscriptionManager
from emitter.events.registry import ListenerRegistry
from emitter.events.resolver import KeyResolver
from emitter.events.subscription import Subscription


class Harness:
    """Registry + components wired the way a host wires them."""

    def __init__(self, config: EmitterConfig = EmitterConfig()):
        self.registry = ListenerRegistry()
        self.resolver = KeyResolver(self.registry)
        self.manager = SubscriptionManager(self.resolver)
        self.config = config

    def emit(self, key, args=None):
        return dispatch(
            key, args, self.resolver, self.manager, lambda: self.config
        )


@pytest.fixture
def harness():
    return Harness()


# ══════════════════════════════════════════════════════════════
# BASIC DISPATCH
# ══════════════════════════════════════════════════════════════

class TestDispatch:
    def test_args_spread_positionally(self, harness):
        calls = []
        harness.manager.add("tick", lambda a, b: calls.append((a, b)))
        assert harness.emit("tick", [1, 2]) == 1
        assert calls == [(1, 2)]

    def test_no_args(self, harness):
        calls = []
        harness.manager.add("tick", lambda: calls.append("called"))
        harness.emit("tick")
        harness.emit("tick", [])
        assert calls == ["called", "called"]

    def test_insertion_order(self, harness):
        calls = []
        harness.manager.add("tick", lambda: calls.append("a"))
        harness.manager.add("tick", lambda: calls.append("b"))
        harness.emit("tick")
        assert calls == ["a", "b"]

    def test_unknown_key_creates_nothing(self, harness):
        assert harness.emit("missing") == 0
        assert harness.registry.keys() == ()

    def test_pattern_dispatches_every_match(self, harness):
        calls = []
        harness.resolver.define_many(["bar", "baz", "foo"])
        for key in ("bar", "baz", "foo"):
            harness.manager.add(key, lambda key=key: calls.append(key))
        harness.emit(re.compile("^ba"))
        assert calls == ["bar", "baz"]

    def test_exception_halts_pass(self, harness):
        calls = []

        def boom():
            raise RuntimeError("listener failed")

        harness.resolver.define_many(["a", "b"])
        harness.manager.add("a", boom)
        harness.manager.add("a", lambda: calls.append("a"))
        harness.manager.add("b", lambda: calls.append("b"))

        with pytest.raises(RuntimeError):
            harness.emit(re.compile("^[ab]$"))
        assert calls == []


# ══════════════════════════════════════════════════════════════
# SNAPSHOT ISOLATION
# ══════════════════════════════════════════════════════════════

class TestSnapshot:
    def test_listener_added_during_pass_runs_next_time(self, harness):
        calls = []

        def late():
            calls.append("late")

        def adder():
            calls.append("adder")
            harness.manager.add("tick", late)

        harness.manager.add("tick", adder)
        harness.emit("tick")
        assert calls == ["adder"]
        harness.emit("tick")
        assert calls == ["adder", "adder", "late"]

    def test_removed_during_pass_still_runs_in_that_pass(self, harness):
        calls = []

        def second():
            calls.append("second")

        def remover():
            calls.append("remover")
            harness.manager.remove("tick", second)

        harness.manager.add("tick", remover)
        harness.manager.add("tick", second)
        harness.emit("tick")
        assert calls == ["remover", "second"]
        harness.emit("tick")
        assert calls == ["remover", "second", "remover"]


# ══════════════════════════════════════════════════════════════
# ONCE
# ══════════════════════════════════════════════════════════════

class TestOnce:
    def test_once_fires_once(self, harness):
        calls = []
        harness.manager.add("tick", Subscription(lambda: calls.append(1), once=True))
        harness.emit("tick")
        harness.emit("tick")
        assert calls == [1]
        assert harness.registry.listener_count("tick") == 0

    def test_once_reentrant_emit_fires_once(self, harness):
        calls = []

        def reentrant():
            calls.append(len(calls))
            harness.emit("tick")

        harness.manager.add("tick", Subscription(reentrant, once=True))
        harness.emit("tick")
        harness.emit("tick")
        assert calls == [0]

    def test_once_removed_even_if_listener_raises(self, harness):
        def boom():
            raise ValueError("nope")

        harness.manager.add("tick", Subscription(boom, once=True))
        with pytest.raises(ValueError):
            harness.emit("tick")
        assert harness.registry.listener_count("tick") == 0


# ══════════════════════════════════════════════════════════════
# ONCE-RETURN VALUE
# ══════════════════════════════════════════════════════════════

class TestOnceReturnValue:
    def test_default_true_removes(self, harness):
        calls = []

        def listener():
            calls.append(1)
            return True

        harness.manager.add("tick", listener)
        harness.emit("tick")
        harness.emit("tick")
        assert calls == [1]

    def test_none_return_keeps_listener(self, harness):
        calls = []
        harness.manager.add("tick", lambda: calls.append(1))
        harness.emit("tick")
        harness.emit("tick")
        assert calls == [1, 1]

    def test_truthy_non_true_keeps_listener(self, harness):
        harness.manager.add("tick", lambda: 1)
        harness.emit("tick")
        assert harness.registry.listener_count("tick") == 1

    def test_custom_sentinel(self):
        harness = Harness(EmitterConfig(once_return_value=42))
        harness.manager.add("a", lambda: True)
        harness.manager.add("b", lambda: 42)
        harness.emit("a")
        harness.emit("b")
        assert harness.registry.listener_count("a") == 1
        assert harness.registry.listener_count("b") == 0

    def test_once_and_sentinel_removal_is_idempotent(self, harness):
        calls = []

        def listener():
            calls.append(1)
            return True

        harness.manager.add("tick", Subscription(listener, once=True))
        harness.manager.add("tick", lambda: calls.append(2))
        harness.emit("tick")
        harness.emit("tick")
        assert calls == [1, 2, 2]

    def test_sentinel_changed_mid_pass_applies_to_later_listeners(self, harness):
        calls = []

        def changer():
            harness.config = harness.config.with_once_return_value("stop")

        def stopper():
            calls.append(1)
            return "stop"

        harness.manager.add("tick", changer)
        harness.manager.add("tick", stopper)
        harness.emit("tick")
        harness.emit("tick")
        assert calls == [1]
        assert harness.registry.listener_count("tick") == 1

    def test_float_return_matches_int_sentinel(self):
        harness = Harness(EmitterConfig(once_return_value=42))
        harness.manager.add("tick", lambda: 42.0)
        harness.emit("tick")
        assert harness.registry.listener_count("tick") == 0
