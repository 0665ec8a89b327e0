# src/nav_core/tracing.py
"""
Tracing for pathfinding searches.

This module provides a thin, structured logging layer around find_path
calls so that monitoring tools and tests can inspect how searches went
(expansions, cost, duration) without touching search internals.

It does NOT:
- Make control decisions
- Retry or replan searches
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, List, Optional

from spec.types import Cell

if TYPE_CHECKING:
    from .nav.pathfinder import PathfindingResult


@dataclass
class SearchTraceRecord:
    """
    Structured record of a single pathfinding search.
    """

    timestamp: float           # wall-clock time (time.time())
    duration_s: float          # search duration in seconds

    start: Cell
    goal: Cell

    success: bool
    reason: Optional[str]

    path_length: int
    cost: float
    expanded: int


class SearchTracer:
    """
    In-memory search tracer with logging.

    Responsibilities:
    - Keep a rolling buffer of recent SearchTraceRecord entries.
    - Emit a single structured log line per search (info level).
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        max_records: int = 1_000,
    ) -> None:
        self._logger = logger or logging.getLogger("nav_core.search")
        self._records: Deque[SearchTraceRecord] = deque(maxlen=max_records)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def record(
        self,
        *,
        start: Cell,
        goal: Cell,
        result: "PathfindingResult",
        duration_s: float,
    ) -> None:
        """
        Record a trace for a finished search, successful or not.
        """
        try:
            record = SearchTraceRecord(
                timestamp=time.time(),
                duration_s=duration_s,
                start=start,
                goal=goal,
                success=bool(result.success),
                reason=result.reason,
                path_length=len(result.path),
                cost=float(result.cost),
                expanded=int(result.expanded),
            )
        except Exception:
            # Tracing must never crash the caller.
            self._logger.exception("Failed to build SearchTraceRecord")
            return

        self._records.append(record)

        self._logger.info(
            "path_search start=%s goal=%s success=%s reason=%s nodes=%d "
            "cost=%.3f expanded=%d duration=%.4fs",
            tuple(record.start),
            tuple(record.goal),
            record.success,
            record.reason,
            record.path_length,
            record.cost,
            record.expanded,
            record.duration_s,
        )

    def get_records(self) -> List[SearchTraceRecord]:
        """Return a snapshot of all currently buffered records."""
        return list(self._records)

    def last(self) -> Optional[SearchTraceRecord]:
        return self._records[-1] if self._records else None
