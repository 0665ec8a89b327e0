# tick-driven path following
# src/nav_core/nav/executor.py
"""
PathExecutor: drive an agent along a path one host tick at a time.

Each tick it:
- checks arrival at the current waypoint and advances the index,
- turns the vector to the waypoint into a target yaw,
- decides jump (with cooldown) and sneak (edge probe when descending),
- emits a MovementIntent and, if an actuator is attached, applies it.

Horizontal correction is done purely through yaw; strafe and back keys
are never pressed.

It does NOT search for paths or replan when the world changes; a path is
followed to completion or until stop_path() is called.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from monitoring.bus import EventBus
from monitoring.events import NavEventType
from monitoring.logger import log_event
from spec.nav_core import MovementActuator, WorldQuery
from spec.types import Cell, MovementIntent, Position
from .grid import NavGrid
from .mover import cell_center, cell_from_position


log = logging.getLogger(__name__)

MODULE_NAME = "nav_core.executor"


# ---------------------------------------------------------------------------
# Config / state
# ---------------------------------------------------------------------------


@dataclass
class ExecutorConfig:
    """
    Thresholds for path following.

    Defaults match vanilla player movement at 20 ticks per second.
    """

    # Distance to a waypoint's target point that counts as "reached".
    arrival_threshold: float = 0.5

    # Ticks during which no further jump is emitted after a jump.
    jump_cooldown_ticks: int = 10

    # Target higher than the player by more than this -> jump.
    jump_threshold: float = 0.1

    # Target lower than the player by more than this -> descent handling.
    descent_threshold: float = -0.5


@dataclass
class ExecutionState:
    """
    One path-following session.

    Mutated only by its PathExecutor; replaced on every start_path.
    """

    path: Tuple[Cell, ...] = ()
    current_index: int = 0
    is_executing: bool = False
    jump_cooldown: int = 0
    session_id: Optional[str] = None


def wrap_degrees(angle: float) -> float:
    """Normalize an angle in degrees to (-180, 180]."""
    wrapped = math.fmod(angle, 360.0)
    if wrapped > 180.0:
        wrapped -= 360.0
    elif wrapped <= -180.0:
        wrapped += 360.0
    return wrapped


def yaw_towards(position: Position, target: Position) -> float:
    """Facing (Minecraft convention, 0 = +z) from position toward target."""
    dx = target[0] - position[0]
    dz = target[2] - position[2]
    return wrap_degrees(math.degrees(math.atan2(dz, dx)) - 90.0)


def facing_offset(yaw: float) -> Tuple[int, int, int]:
    """Nearest cardinal step for a yaw: south, west, north or east."""
    yaw = wrap_degrees(yaw)
    if -45.0 < yaw <= 45.0:
        return (0, 0, 1)    # south
    if 45.0 < yaw <= 135.0:
        return (-1, 0, 0)   # west
    if yaw > 135.0 or yaw <= -135.0:
        return (0, 0, -1)   # north
    return (1, 0, 0)        # east


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------


class PathExecutor:
    """
    Follow one path at a time.

    Public contract:
      start_path(path), stop_path(), is_executing_path(),
      get_current_path(), get_current_target(),
      tick(position, yaw) -> MovementIntent

    Only the host tick loop should call tick(); other callers limit
    themselves to start_path / stop_path.
    """

    def __init__(
        self,
        world: WorldQuery,
        *,
        config: ExecutorConfig | None = None,
        actuator: MovementActuator | None = None,
        bus: EventBus | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        # Safe query wrappers: a failing probe reads as "no floor".
        self._grid = NavGrid(world=world)
        self._cfg = config if config is not None else ExecutorConfig()
        self._actuator = actuator
        self._bus = bus
        self._log = logger or log
        self._state = ExecutionState()

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    def start_path(self, path: Iterable[Iterable[int]]) -> None:
        """Replace the active session with a new one following `path`."""
        cells = tuple(Cell(*c) for c in path)
        self._state = ExecutionState(
            path=cells,
            current_index=0,
            is_executing=True,
            jump_cooldown=0,
            session_id=uuid.uuid4().hex,
        )
        self._release_all()

        self._log.info("PathExecutor.start_path nodes=%d", len(cells))
        self._publish(
            NavEventType.PATH_STARTED,
            "Path execution started",
            {
                "nodes": len(cells),
                "start": list(cells[0]) if cells else None,
                "goal": list(cells[-1]) if cells else None,
            },
        )

    def stop_path(self) -> None:
        """Stop following and release all movement keys. Idempotent."""
        was_executing = self._state.is_executing
        self._state.is_executing = False
        self._release_all()

        if was_executing:
            self._log.info(
                "PathExecutor.stop_path index=%d/%d",
                self._state.current_index,
                len(self._state.path),
            )
            self._publish(
                NavEventType.PATH_STOPPED,
                "Path execution stopped",
                {"index": self._state.current_index, "nodes": len(self._state.path)},
            )

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> ExecutorConfig:
        return self._cfg

    @property
    def state(self) -> ExecutionState:
        return self._state

    def is_executing_path(self) -> bool:
        return self._state.is_executing

    def get_current_path(self) -> Optional[Tuple[Cell, ...]]:
        """The active path while executing, None otherwise."""
        return self._state.path if self._state.is_executing else None

    def get_current_target(self) -> Optional[Cell]:
        """The waypoint being pursued, None when idle or out of range."""
        state = self._state
        if state.is_executing and state.current_index < len(state.path):
            return state.path[state.current_index]
        return None

    # ------------------------------------------------------------------
    # Per-tick control
    # ------------------------------------------------------------------

    def tick(self, position: Optional[Position], yaw: float | None = None) -> MovementIntent:
        """
        Advance one host tick and return the movement decision.

        Returns the idle intent when not executing, when the path is empty,
        when the player position is unavailable, or when the path has just
        been completed.
        """
        state = self._state
        if not state.is_executing or not state.path or position is None:
            return MovementIntent.idle()

        if state.current_index >= len(state.path):
            self._complete()
            return MovementIntent.idle()

        target = cell_center(state.path[state.current_index])

        if _distance(position, target) < self._cfg.arrival_threshold:
            reached = state.path[state.current_index]
            state.current_index += 1
            state.jump_cooldown = 0
            self._publish(
                NavEventType.WAYPOINT_REACHED,
                "Waypoint reached",
                {"index": state.current_index - 1, "cell": list(reached)},
            )

            if state.current_index >= len(state.path):
                self._complete()
                return MovementIntent.idle()

            target = cell_center(state.path[state.current_index])

        intent = self._steer(position, target)

        self._log.debug(
            "PathExecutor.tick index=%d yaw=%s -> %.1f jump=%s sneak=%s",
            state.current_index,
            "?" if yaw is None else f"{yaw:.1f}",
            intent.yaw,
            intent.jump,
            intent.sneak,
        )

        if state.jump_cooldown > 0:
            state.jump_cooldown -= 1

        if self._actuator is not None:
            self._actuator.apply(intent)

        return intent

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _steer(self, position: Position, target: Position) -> MovementIntent:
        """Build the intent for moving from position toward target."""
        state = self._state
        dy = target[1] - position[1]

        yaw = yaw_towards(position, target)

        jump = False
        if dy > self._cfg.jump_threshold and state.jump_cooldown == 0:
            jump = True
            state.jump_cooldown = self._cfg.jump_cooldown_ticks

        # The host adopts `yaw` this tick, so the edge probe looks that way.
        sneak = dy < self._cfg.descent_threshold and self._is_at_edge(position, yaw)

        return MovementIntent(
            forward=True,
            back=False,
            left=False,
            right=False,
            jump=jump,
            sneak=sneak,
            yaw=yaw,
        )

    def _is_at_edge(self, position: Position, yaw: float) -> bool:
        """
        True if the cell in front of the player (nearest cardinal of `yaw`)
        has nothing solid to stand on.
        """
        standing = cell_from_position((position[0], position[1] - 0.1, position[2]))
        front = standing.offset(*facing_offset(yaw))
        return not self._grid.has_support(front)

    def _complete(self) -> None:
        """Path finished: go idle and announce completion."""
        self._state.is_executing = False
        self._release_all()
        self._log.info("PathExecutor completed path nodes=%d", len(self._state.path))
        self._publish(
            NavEventType.PATH_COMPLETED,
            "Path execution completed",
            {"nodes": len(self._state.path)},
        )

    def _release_all(self) -> None:
        if self._actuator is not None:
            self._actuator.release_all()

    def _publish(self, event_type: NavEventType, message: str, payload: Dict[str, Any]) -> None:
        if self._bus is None:
            return
        log_event(
            bus=self._bus,
            module=MODULE_NAME,
            event_type=event_type,
            message=message,
            payload=payload,
            correlation_id=self._state.session_id,
        )


def _distance(a: Position, b: Position) -> float:
    return math.sqrt(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2
    )
