# JSONL sink for navigation events
"""
Structured event logging for navigation sessions.

- JsonFileLogger writes every NavEvent it receives from an EventBus as one
  JSON object per line (optionally only selected event types).
- log_event builds a NavEvent and publishes it.

    bus = EventBus()
    with JsonFileLogger(Path("logs/nav/events.jsonl"), bus):
        navigator = NavigatorImpl(world, player, actuator, bus=bus)
        ...
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .bus import EventBus
from .events import NavEvent, NavEventType


log = logging.getLogger(__name__)


class JsonFileLogger:
    """
    Append NavEvents to `path` as JSON lines.

    The parent directory is created on construction. Each line is flushed
    immediately so a crashed host still leaves a readable log.
    """

    def __init__(
        self,
        path: Path,
        bus: EventBus,
        event_types: Optional[Iterable[NavEventType]] = None,
    ) -> None:
        self._path = Path(path)
        self._bus = bus
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self._path.open("a", encoding="utf-8")
        self._written = 0
        bus.subscribe(self._write, event_types)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def written(self) -> int:
        """Number of events written so far."""
        return self._written

    def _write(self, event: NavEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        try:
            self._fh.write(line + "\n")
            self._fh.flush()
        except (OSError, ValueError):
            log.warning("JsonFileLogger dropped event for %s", self._path, exc_info=True)
            return
        self._written += 1

    def close(self) -> None:
        """Stop receiving events and close the file. Safe to call twice."""
        self._bus.unsubscribe(self._write)
        if not self._fh.closed:
            self._fh.close()

    def __enter__(self) -> "JsonFileLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def log_event(
    bus: EventBus,
    module: str,
    event_type: NavEventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> NavEvent:
    """
    Create a NavEvent stamped with the current time, publish it on `bus`
    and return it.

    `correlation_id` groups the events of one path-following session.
    """
    event = NavEvent(
        ts=time.time(),
        module=module,
        event_type=event_type,
        message=message,
        payload=dict(payload) if payload else {},
        correlation_id=correlation_id,
    )
    bus.publish(event)
    return event
