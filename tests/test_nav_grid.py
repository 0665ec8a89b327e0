# tests/test_nav_grid.py
"""
Unit tests for NavGrid walkability and neighbor policies.
"""

from __future__ import annotations

import math

from nav_core.nav import NavGrid, NeighborVariant, find_path, heuristic, step_cost
from nav_core.testing.fakes import FakeVoxelWorld
from spec.types import Cell, SurfaceKind


def make_grid(world: FakeVoxelWorld, variant: str = "enhanced") -> NavGrid:
    return NavGrid(world=world, variant=variant)


def test_walkable_requires_floor_body_and_head_room() -> None:
    world = FakeVoxelWorld.flat_floor(5, 5)
    grid = make_grid(world)

    assert grid.is_walkable(Cell(1, 1, 1))
    # Body inside the floor.
    assert not grid.is_walkable(Cell(1, 0, 1))
    # Floating one block above the floor.
    assert not grid.is_walkable(Cell(1, 2, 1))

    world.add_solid((1, 2, 1))
    assert not grid.is_walkable(Cell(1, 1, 1))


def test_enhanced_neighbors_on_open_floor() -> None:
    grid = make_grid(FakeVoxelWorld.flat_floor(5, 5))

    neighbors = grid.neighbors(Cell(2, 1, 2))

    assert len(neighbors) == 8
    assert all(c.y == 1 for c in neighbors)
    # Cardinals come before diagonals.
    assert neighbors[:4] == [Cell(3, 1, 2), Cell(1, 1, 2), Cell(2, 1, 3), Cell(2, 1, 1)]


def test_simple_neighbors_on_open_floor() -> None:
    grid = make_grid(FakeVoxelWorld.flat_floor(5, 5), variant="simple")

    neighbors = grid.neighbors(Cell(2, 1, 2))

    assert grid.variant is NeighborVariant.SIMPLE
    assert sorted(neighbors) == sorted(
        [Cell(3, 1, 2), Cell(1, 1, 2), Cell(2, 1, 3), Cell(2, 1, 1)]
    )


def test_diagonal_corner_cutting_rejected() -> None:
    world = FakeVoxelWorld.flat_floor(6, 6)
    # Two-wall corner: both orthogonal cells of the (+1, +1) diagonal are blocked.
    world.add_column(3, 2, 1, 2)
    world.add_column(2, 3, 1, 2)
    grid = make_grid(world)

    current = Cell(2, 1, 2)
    diagonal = Cell(3, 1, 3)

    assert grid.is_walkable(diagonal)
    assert diagonal not in grid.neighbors(current)

    result = find_path(grid, current, diagonal)
    assert result.success
    assert len(result.path) > 2
    for a, b in zip(result.path, result.path[1:]):
        assert not (a == current and b == diagonal)


def test_single_blocked_corner_also_rejects_diagonal() -> None:
    world = FakeVoxelWorld.flat_floor(6, 6)
    world.add_column(3, 2, 1, 2)
    grid = make_grid(world)

    assert Cell(3, 1, 3) not in grid.neighbors(Cell(2, 1, 2))
    # The other side is unaffected.
    assert Cell(1, 1, 3) in grid.neighbors(Cell(2, 1, 2))


def test_step_up_needs_head_room_on_normal_surface() -> None:
    world = FakeVoxelWorld.flat_floor(6, 6)
    world.add_solid((3, 1, 2))
    grid = make_grid(world)

    assert Cell(3, 2, 2) in grid.neighbors(Cell(2, 1, 2))

    # Ceiling two above the current position blocks the jump.
    world.add_solid((2, 3, 2))
    assert Cell(3, 2, 2) not in grid.neighbors(Cell(2, 1, 2))


def test_step_capable_surface_allows_rise() -> None:
    world = FakeVoxelWorld.flat_floor(6, 6)
    world.add_solid((2, 3, 2))  # no room for a full jump
    grid = make_grid(world)

    assert Cell(3, 2, 2) not in grid.neighbors(Cell(2, 1, 2))

    world.step_capable.add(Cell(2, 1, 2))
    assert grid.surface_kind(Cell(2, 1, 2)) is SurfaceKind.STEP_CAPABLE
    assert Cell(3, 2, 2) in grid.neighbors(Cell(2, 1, 2))


def test_step_down_uses_walkable_rule() -> None:
    world = FakeVoxelWorld.flat_floor(6, 6)
    # Raised platform at x <= 2 (top surface y == 2).
    for z in range(6):
        for x in range(3):
            world.add_solid((x, 1, z))
    grid = make_grid(world)

    neighbors = grid.neighbors(Cell(2, 2, 2))

    assert Cell(3, 1, 2) in neighbors
    assert Cell(3, 2, 2) not in neighbors  # nothing to stand on


def test_raising_world_queries_read_as_not_walkable() -> None:
    world = FakeVoxelWorld.flat_floor(6, 6, floor_y=0)
    world.unloaded.add(Cell(3, 1, 2))
    grid = make_grid(world)

    assert not grid.is_open(Cell(3, 1, 2))
    assert not grid.is_walkable(Cell(3, 1, 2))
    assert Cell(3, 1, 2) not in grid.neighbors(Cell(2, 1, 2))
    assert grid.surface_kind(Cell(3, 1, 2)) is SurfaceKind.NORMAL


def test_costs_and_heuristic() -> None:
    assert step_cost(Cell(0, 1, 0), Cell(1, 1, 0)) == 1.0
    assert step_cost(Cell(0, 1, 0), Cell(1, 1, 1)) == math.sqrt(2)
    # Vertical offset adds nothing.
    assert step_cost(Cell(0, 1, 0), Cell(1, 2, 1)) == math.sqrt(2)
    assert step_cost(Cell(0, 1, 0), Cell(0, 2, 0)) == 1.0

    assert heuristic(Cell(0, 0, 0), Cell(3, 4, 0)) == 5.0
    assert heuristic(Cell(1, 2, 3), Cell(1, 2, 3)) == 0.0
