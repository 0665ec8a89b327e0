# in-process pub/sub for navigation events
"""
EventBus: deliver NavEvents from the navigation core to observers.

Publishers are the pathfinder wiring (search results) and PathExecutor
(session lifecycle). Observers are path renderers, the JSONL logger and
dev tools; each may restrict itself to a subset of NavEventType.

Delivery is synchronous and in subscription order. A subscriber that
raises is logged and skipped; the remaining subscribers still see the
event.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Callable, FrozenSet, Iterable, List, Optional

from .events import NavEvent, NavEventType


log = logging.getLogger(__name__)

SubscriberFn = Callable[[NavEvent], None]


@dataclass(frozen=True)
class _Subscription:
    fn: SubscriberFn
    event_types: Optional[FrozenSet[NavEventType]]

    def wants(self, event: NavEvent) -> bool:
        return self.event_types is None or event.event_type in self.event_types


class EventBus:
    """
    Thread-safe event bus.

    The subscription list is guarded by a lock; publish() iterates over a
    copy so subscribers may subscribe or unsubscribe while handling an
    event.
    """

    def __init__(self) -> None:
        self._subs: List[_Subscription] = []
        self._lock = Lock()

    def subscribe(
        self,
        fn: SubscriberFn,
        event_types: Optional[Iterable[NavEventType]] = None,
    ) -> None:
        """
        Register `fn`. With `event_types`, only those kinds are delivered.
        """
        kinds = frozenset(event_types) if event_types is not None else None
        with self._lock:
            self._subs.append(_Subscription(fn, kinds))

    def unsubscribe(self, fn: SubscriberFn) -> None:
        """Remove every subscription of `fn`. Unknown functions are ignored."""
        with self._lock:
            self._subs = [s for s in self._subs if s.fn != fn]

    def publish(self, event: NavEvent) -> int:
        """Deliver `event`; returns how many subscribers received it."""
        with self._lock:
            subs = [s for s in self._subs if s.wants(event)]

        delivered = 0
        for sub in subs:
            try:
                sub.fn(event)
            except Exception:
                log.exception(
                    "EventBus subscriber %r failed on %s", sub.fn, event.event_type.name
                )
                continue
            delivered += 1
        return delivered

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._subs)
