# path: src/monitoring/events.py
"""
Event schema for navigation monitoring.

This module defines:
- NavEventType enum
- NavEvent (structured navigation events)

All events are JSON-serializable via `.to_dict()` and are intended
for use with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
Rendering collaborators (path overlays, dashboards) subscribe to these to
learn when the active path changes.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class NavEventType(Enum):
    """Typed events emitted by the pathfinder and path executor."""

    # A findPath call finished (success or not)
    SEARCH_COMPLETED = auto()

    # Path-following session lifecycle
    PATH_STARTED = auto()
    WAYPOINT_REACHED = auto()
    PATH_COMPLETED = auto()
    PATH_STOPPED = auto()

    # Generic log messages
    LOG = auto()


# ============================================================
# Navigation Event Structure
# ============================================================

@dataclass
class NavEvent:
    """
    Runtime event emitted by the navigation core or its host wiring.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module string ("nav_core.executor", ...)
    event_type: NavEventType    # Enum describing the event class
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (cells, counts, costs)
    correlation_id: Optional[str] = None  # Groups events of one path session

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
