# src/cli/nav_sim.py
"""
Offline navigation simulator.

Builds a flat in-memory world, searches a path with NavigatorImpl and
follows it with a crude kinematic player model until the goal is reached
or the tick budget runs out. Output is rendered with rich.

    voxel-nav-sim --goal 5 1 5
    voxel-nav-sim --goal 8 1 2 --wall 4 --variant simple -v
"""

from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from env.loader import load_nav_config
from env.schema import NavConfig
from monitoring.bus import EventBus
from monitoring.events import NavEvent
from monitoring.logger import JsonFileLogger
from monitoring.logging_config import configure_logging
from nav_core.core import NavigatorImpl
from nav_core.nav import cell_from_position, format_path
from nav_core.testing.fakes import FakeVoxelWorld
from spec.types import Cell, MovementIntent, Position


WALK_SPEED = 0.25   # world units per tick
SNEAK_SPEED = 0.1
JUMP_WINDOW = 6     # ticks after a jump during which a one-block rise is allowed


# ---------------------------------------------------------------------------
# Kinematic player
# ---------------------------------------------------------------------------


class SimulatedPlayer:
    """
    PlayerState + MovementActuator over a FakeVoxelWorld.

    Movement is instantaneous per tick: walk along the facing, rise one
    block while the jump window is open, fall straight to the next floor.
    """

    def __init__(self, world: FakeVoxelWorld, position: Position) -> None:
        self._world = world
        self._pos = position
        self._yaw = 0.0
        self._intent = MovementIntent.idle()
        self._airborne = 0

    # PlayerState
    def position(self) -> Optional[Position]:
        return self._pos

    def yaw(self) -> float:
        return self._yaw

    # MovementActuator
    def apply(self, intent: MovementIntent) -> None:
        self._intent = intent
        if intent.yaw is not None:
            self._yaw = intent.yaw

    def release_all(self) -> None:
        self._intent = MovementIntent(yaw=self._intent.yaw)

    def step(self) -> None:
        """Advance the body by one tick using the last applied intent."""
        intent = self._intent
        if intent.jump:
            self._airborne = JUMP_WINDOW

        x, y, z = self._pos
        if intent.forward:
            speed = SNEAK_SPEED if intent.sneak else WALK_SPEED
            rad = math.radians(self._yaw)
            nx = x - math.sin(rad) * speed
            nz = z + math.cos(rad) * speed
            body = cell_from_position((nx, y, nz))
            if not self._world.is_open_space(body):
                if self._airborne > 0 and self._world.is_open_space(body.up()):
                    y += 1.0
                    x, z = nx, nz
            else:
                x, z = nx, nz

        # Gravity: drop until something solid is underfoot.
        floor_limit = y - 64
        while y > floor_limit and not self._world.has_solid_support_below(
            cell_from_position((x, y, z))
        ):
            y -= 1.0

        if self._airborne > 0:
            self._airborne -= 1
        self._pos = (x, y, z)


# ---------------------------------------------------------------------------
# Simulation driver
# ---------------------------------------------------------------------------


@dataclass
class SimulationReport:
    """What happened in one simulated navigation."""

    start: Cell
    goal: Cell
    path: List[Cell]
    reason: Optional[str]
    ticks: int = 0
    arrived: bool = False
    jumps: int = 0
    sneaks: int = 0
    final_position: Optional[Position] = None
    events: List[NavEvent] = field(default_factory=list)


def run_simulation(
    world: FakeVoxelWorld,
    start: Cell,
    goal: Cell,
    *,
    config: NavConfig,
    max_ticks: int = 400,
    bus: Optional[EventBus] = None,
) -> SimulationReport:
    """Search from `start` to `goal` and tick until done or out of budget."""
    bus = bus or EventBus()
    events: List[NavEvent] = []
    bus.subscribe(events.append)

    player = SimulatedPlayer(world, (start[0] + 0.5, float(start[1]), start[2] + 0.5))
    navigator = NavigatorImpl(world, player, player, config=config, bus=bus)

    result = navigator.navigate_to(goal)
    report = SimulationReport(
        start=Cell(*start),
        goal=Cell(*goal),
        path=list(result.path),
        reason=result.reason,
        events=events,
    )
    if not result.success:
        report.final_position = player.position()
        return report

    for tick in range(1, max_ticks + 1):
        intent = navigator.tick()
        report.ticks = tick
        report.jumps += int(intent.jump)
        report.sneaks += int(intent.sneak)
        if not navigator.is_executing_path():
            report.arrived = True
            break
        player.step()

    report.final_position = player.position()
    return report


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render(console: Console, report: SimulationReport) -> None:
    table = Table(title="Path", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("z", justify="right")
    for i, cell in enumerate(report.path):
        table.add_row(str(i), str(cell.x), str(cell.y), str(cell.z))

    txt = Text()
    txt.append("Start: ", style="bold")
    txt.append(f"{tuple(report.start)}\n")
    txt.append("Goal: ", style="bold")
    txt.append(f"{tuple(report.goal)}\n")

    if not report.path:
        txt.append("Result: ", style="bold")
        txt.append(f"no path ({report.reason})\n", style="red")
        console.print(Panel(txt, title="Navigation", border_style="red"))
        return

    console.print(table)
    txt.append("Result: ", style="bold")
    if report.arrived:
        txt.append(f"arrived after {report.ticks} ticks\n", style="green")
    else:
        txt.append(f"still walking after {report.ticks} ticks\n", style="yellow")
    txt.append("Jumps / sneaking ticks: ", style="bold")
    txt.append(f"{report.jumps} / {report.sneaks}\n")
    if report.final_position is not None:
        fx, fy, fz = report.final_position
        txt.append("Final position: ", style="bold")
        txt.append(f"({fx:.2f}, {fy:.2f}, {fz:.2f})\n")
    console.print(Panel(txt, title="Navigation", border_style="cyan"))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _build_world(size: int, wall_x: Optional[int]) -> FakeVoxelWorld:
    world = FakeVoxelWorld.flat_floor(size, size, floor_y=0)
    if wall_x is not None:
        # Two-high wall across the floor with a one-cell gap at the far edge.
        for z in range(0, size - 1):
            world.add_column(wall_x, z, 1, 2)
    return world


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Simulate pathfinding and path following on a flat test world."
    )
    parser.add_argument("--goal", nargs=3, type=int, required=True, metavar=("X", "Y", "Z"))
    parser.add_argument(
        "--start", nargs=3, type=int, default=[0, 1, 0], metavar=("X", "Y", "Z")
    )
    parser.add_argument("--size", type=int, default=10, help="Floor edge length")
    parser.add_argument("--wall", type=int, default=None, help="x of a wall to route around")
    parser.add_argument("--profile", default=None, help="Profile name from config/nav.yaml")
    parser.add_argument("--variant", choices=("simple", "enhanced"), default=None)
    parser.add_argument("--max-ticks", type=int, default=400)
    parser.add_argument("--events", type=Path, default=None, help="Write events as JSONL")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    configure_logging(
        logging.DEBUG if args.verbose else logging.WARNING,
        search_level=logging.INFO if args.verbose else logging.WARNING,
    )

    config = load_nav_config(profile=args.profile)
    if args.variant is not None:
        config.pathfinder.variant = args.variant

    bus = EventBus()
    sink = JsonFileLogger(args.events, bus) if args.events is not None else None

    try:
        report = run_simulation(
            _build_world(args.size, args.wall),
            Cell(*args.start),
            Cell(*args.goal),
            config=config,
            max_ticks=args.max_ticks,
            bus=bus,
        )
    finally:
        if sink is not None:
            sink.close()

    console = Console()
    _render(console, report)
    if args.verbose and report.path:
        console.print(format_path(report.path))

    if not report.path:
        return 1
    return 0 if report.arrived else 2


if __name__ == "__main__":
    raise SystemExit(main())
