# src/nav_core/nav/__init__.py
"""
Navigation subsystem for voxel-nav.

Provides:
- NavGrid: walkability queries and neighbor policies over a WorldQuery
- A* pathfinding: find_path / Pathfinder
- PathExecutor: tick-driven path following emitting MovementIntents
- mover helpers: cell_center, cell_from_position, path_cost, format_path
"""

from __future__ import annotations

from .grid import NavGrid, NeighborVariant, heuristic, step_cost
from .pathfinder import (
    Node,
    OpenSet,
    Pathfinder,
    PathfindingResult,
    find_path,
)
from .executor import ExecutionState, ExecutorConfig, PathExecutor
from .mover import (
    are_cells_adjacent,
    cell_center,
    cell_from_position,
    format_path,
    path_cost,
)

__all__ = [
    "NavGrid",
    "NeighborVariant",
    "heuristic",
    "step_cost",
    "Node",
    "OpenSet",
    "Pathfinder",
    "PathfindingResult",
    "find_path",
    "ExecutionState",
    "ExecutorConfig",
    "PathExecutor",
    "are_cells_adjacent",
    "cell_center",
    "cell_from_position",
    "format_path",
    "path_cost",
]
