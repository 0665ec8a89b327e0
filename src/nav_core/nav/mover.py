# cell / world-position helpers shared by search and execution
# src/nav_core/nav/mover.py
"""
Mover helpers: conversions between integer cells and fractional positions.

Owns:
- cell -> waypoint target point (horizontal center, floor height)
- position -> cell (floor on every axis)
- small path utilities for logging and checks

It does NOT press keys or talk to the world; that's PathExecutor's job.
"""

from __future__ import annotations

import math
from typing import Sequence

from spec.types import Cell, Position
from .grid import step_cost


def cell_center(cell: Cell) -> Position:
    """
    Target point for a waypoint: the horizontal center of the cell at its
    floor height, i.e. offset (+0.5, +0, +0.5).
    """
    return (cell[0] + 0.5, float(cell[1]), cell[2] + 0.5)


def cell_from_position(position: Position) -> Cell:
    """
    Helper: derive the integer Cell containing a fractional position.

    Floors each axis, so negative coordinates map to the cell below
    (-0.2 -> -1) rather than truncating toward zero.
    """
    x, y, z = position
    return Cell(math.floor(x), math.floor(y), math.floor(z))


def are_cells_adjacent(a: Cell, b: Cell) -> bool:
    """True if b is one of the 26 cells surrounding a."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    dz = abs(a[2] - b[2])
    return dx <= 1 and dy <= 1 and dz <= 1 and (dx + dy + dz) > 0


def path_cost(path: Sequence[Cell]) -> float:
    """Sum of per-step costs along a path, accumulated start to goal."""
    total = 0.0
    for a, b in zip(path, path[1:]):
        total += step_cost(a, b)
    return total


def format_path(path: Sequence[Cell]) -> str:
    """Format a path for debugging output."""
    if not path:
        return "Empty path"
    return "Path: " + " -> ".join(f"({c[0]}, {c[1]}, {c[2]})" for c in path)
