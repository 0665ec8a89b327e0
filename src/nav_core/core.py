# src/nav_core/core.py
"""
Concrete Navigator wiring for voxel-nav.

This module wires together:
- Pathfinder (weighted A* over a WorldQuery)
- PathExecutor (tick-driven path following)
- SearchTracer (logging / metrics for searches)
- EventBus (session events for renderers and loggers)

Public surface (for command / UI layers):
    class NavigatorImpl(Navigator):
        navigate_to(goal) -> PathfindingResult
        stop() -> bool
        tick() -> MovementIntent
        is_executing_path() / get_current_path() / get_current_target()

Design constraints:
- No search or control failure leaks to callers as an exception; an
  unreachable goal is a PathfindingResult with an empty path.
- Host failures (the player accessor raising) raise NavCoreError.
- A new search does not run while another is in flight; searches are
  synchronous and finish within navigate_to().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from env.loader import load_nav_config
from env.schema import NavConfig
from monitoring.bus import EventBus
from monitoring.events import NavEventType
from monitoring.logger import log_event
from spec.nav_core import MovementActuator, Navigator, PlayerState, WorldQuery
from spec.types import Cell, MovementIntent, Position

from .nav import (
    ExecutorConfig,
    PathExecutor,
    Pathfinder,
    PathfindingResult,
    cell_from_position,
)
from .tracing import SearchTracer


log = logging.getLogger(__name__)

MODULE_NAME = "nav_core.navigator"


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


@dataclass
class NavCoreError(RuntimeError):
    """
    Domain-level error raised by NavigatorImpl for host failures.

    Examples:
        - the player state accessor raised
        - navigation requested while the player position is unavailable

    "No path" and "not executing" are NOT errors; they are return values.
    """

    code: str
    details: dict[str, Any]

    def __str__(self) -> str:
        return f"NavCoreError(code={self.code!r}, details={self.details!r})"


# ---------------------------------------------------------------------------
# Implementation
# ---------------------------------------------------------------------------


class NavigatorImpl(Navigator):
    """
    Search-then-follow navigation for one agent.

    Consumers (command layer, host tick loop) see:
        - navigate_to / stop
        - tick (once per host tick)
        - read accessors for rendering
    """

    def __init__(
        self,
        world: WorldQuery,
        player: PlayerState,
        actuator: MovementActuator,
        *,
        config: Optional[NavConfig] = None,
        bus: Optional[EventBus] = None,
        tracer: Optional[SearchTracer] = None,
    ) -> None:
        """
        Build a NavigatorImpl.

        If `config` is None, the active profile of config/nav.yaml is loaded.
        """
        self._config = config if config is not None else load_nav_config()

        self._player = player
        self._bus = bus
        self._tracer: SearchTracer = tracer or SearchTracer()

        pf_cfg = self._config.pathfinder
        self._pathfinder = Pathfinder(
            world,
            variant=pf_cfg.variant,
            max_expansions=pf_cfg.max_expansions,
            tracer=self._tracer,
        )

        ex_cfg = self._config.executor
        self._executor = PathExecutor(
            world,
            config=ExecutorConfig(
                arrival_threshold=ex_cfg.arrival_threshold,
                jump_cooldown_ticks=ex_cfg.jump_cooldown_ticks,
                jump_threshold=ex_cfg.jump_threshold,
                descent_threshold=ex_cfg.descent_threshold,
            ),
            actuator=actuator,
            bus=bus,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> NavConfig:
        return self._config

    @property
    def pathfinder(self) -> Pathfinder:
        return self._pathfinder

    @property
    def executor(self) -> PathExecutor:
        return self._executor

    @property
    def tracer(self) -> SearchTracer:
        return self._tracer

    def is_executing_path(self) -> bool:
        return self._executor.is_executing_path()

    def get_current_path(self) -> Optional[Tuple[Cell, ...]]:
        return self._executor.get_current_path()

    def get_current_target(self) -> Optional[Cell]:
        return self._executor.get_current_target()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def find_path(self, start: Iterable[int], goal: Iterable[int]) -> PathfindingResult:
        """Search without starting execution."""
        return self._pathfinder.search(start, goal)

    def navigate_to(self, goal: Iterable[int]) -> PathfindingResult:
        """
        Search from the player's current cell to `goal` and, on success,
        start following the path (replacing any active session).

        An unreachable goal leaves the current session untouched and
        returns a failed result.

        Raises:
            NavCoreError if the player position cannot be read.
        """
        goal = Cell(*goal)
        position = self._read_position()
        if position is None:
            raise NavCoreError(
                code="player_position_unavailable",
                details={"goal": list(goal)},
            )

        start = cell_from_position(position)
        result = self._pathfinder.search(start, goal)

        self._publish(
            NavEventType.SEARCH_COMPLETED,
            "Path search completed",
            {
                "start": list(start),
                "goal": list(goal),
                "success": result.success,
                "reason": result.reason,
                "nodes": len(result.path),
                "cost": result.cost,
                "expanded": result.expanded,
                "pathfinder": self._pathfinder.describe(),
            },
        )

        if result.success:
            self._executor.start_path(result.path)
        else:
            log.info(
                "NavigatorImpl.navigate_to no path start=%s goal=%s reason=%s",
                tuple(start),
                tuple(goal),
                result.reason,
            )

        return result

    def stop(self) -> bool:
        """Cancel path following. Returns whether a session was active."""
        was_executing = self._executor.is_executing_path()
        self._executor.stop_path()
        return was_executing

    def tick(self) -> MovementIntent:
        """
        Advance path following by one host tick.

        Must be called regularly (once per host tick). Cheap no-op when
        nothing is executing.

        Raises:
            NavCoreError if the player state accessor raises.
        """
        if not self._executor.is_executing_path():
            return MovementIntent.idle()

        position = self._read_position()
        try:
            yaw = float(self._player.yaw())
        except Exception as exc:
            raise NavCoreError(
                code="player_state_failed",
                details={"field": "yaw", "exception": repr(exc)},
            ) from exc

        return self._executor.tick(position, yaw)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_position(self) -> Optional[Position]:
        try:
            return self._player.position()
        except Exception as exc:
            raise NavCoreError(
                code="player_state_failed",
                details={"field": "position", "exception": repr(exc)},
            ) from exc

    def _publish(self, event_type: NavEventType, message: str, payload: dict[str, Any]) -> None:
        if self._bus is None:
            return
        log_event(
            bus=self._bus,
            module=MODULE_NAME,
            event_type=event_type,
            message=message,
            payload=payload,
        )
