"""
Emitter Events — Dispatcher
=============================
Synchronously invokes the listeners of an emitted event.

Dispatch behavior, per resolved key:
1. Snapshot the live subscription list
2. Walk the snapshot in insertion order
3. Remove a once subscription from the live list BEFORE calling it
4. Call the listener with the positional arguments
5. Remove the subscription if it returned the once-return value

Listeners added during a pass run from the next emit on. Removals during
a pass do not shorten the snapshot being walked.

Listener exceptions are NOT caught. An exception ends the pass: the
remaining snapshot entries and any remaining resolved keys are skipped.

Dispatch never creates keys.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from emitter.config.settings import EmitterConfig
from emitter.events.manager import SubscriptionManager
from emitter.events.patterns import EventKey
from emitter.events.resolver import KeyResolver

logger = logging.getLogger("emitter.events")


def dispatch(
    key: EventKey,
    args: Optional[Sequence[Any]],
    resolver: KeyResolver,
    manager: SubscriptionManager,
    get_config: Callable[[], EmitterConfig],
) -> int:
    """
    Dispatch an event to every subscription resolved from key.

    Args:
        key:      literal event key or pattern
        args:     positional arguments for each listener (None → none)
        resolver: KeyResolver over the host's registry
        manager:  SubscriptionManager used for once / sentinel removal
        get_config: returns the host configuration currently in effect;
                    read after every call, so a listener changing the
                    once-return value affects the rest of the pass

    Returns:
        Number of listener invocations.
    """
    call_args = tuple(args) if args else ()
    resolved = resolver.resolve_as_map(key, create=False)

    if not resolved:
        logger.debug(f"No events resolved for {key!r}")
        return 0

    invoked = 0
    for event_key, live in resolved.items():
        snapshot = list(live)

        for subscription in snapshot:
            if subscription.once:
                manager.discard(event_key, subscription)

            response = subscription.listener(*call_args)
            invoked += 1

            if get_config().matches_once_return_value(response):
                manager.discard(event_key, subscription)

    logger.debug(
        f"Dispatch complete: {key!r} — {len(resolved)} event(s), "
        f"{invoked} listener(s) invoked"
    )
    return invoked
