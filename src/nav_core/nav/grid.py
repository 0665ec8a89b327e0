# navigation grid abstraction over world queries
# src/nav_core/nav/grid.py
"""
NavGrid: walkability and neighbor generation over a WorldQuery.

This module does not know block ids or materials. It only:
- Exposes walkability queries built from the three WorldQuery primitives.
- Generates candidate moves for the two neighbor policies (simple / enhanced).
- Defines per-move costs and the search heuristic.

What counts as "open" or "solid" is the WorldQuery implementation's job
(see nav_core.collision for a block-backed one).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from spec.nav_core import WorldQuery
from spec.types import Cell, SurfaceKind


log = logging.getLogger(__name__)

DIAGONAL_COST = math.sqrt(2.0)
STRAIGHT_COST = 1.0


class NeighborVariant(Enum):
    """Selectable neighbor-generation policy."""

    # 6-connected: one cell along each axis, no step logic.
    SIMPLE = "simple"
    # 8 horizontal directions at same level, one up and one down.
    ENHANCED = "enhanced"


# Axis moves for the simple variant: up, down, east, west, south, north.
_SIMPLE_OFFSETS: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 0),
    (0, -1, 0),
    (1, 0, 0),
    (-1, 0, 0),
    (0, 0, 1),
    (0, 0, -1),
)

# Horizontal (dx, dz) directions for the enhanced variant: cardinals first.
_HORIZONTAL_DIRS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)

# Same level, step up, step down.
_VERTICAL_OFFSETS: Tuple[int, ...] = (0, 1, -1)


def step_cost(a: Cell, b: Cell) -> float:
    """
    Cost of one move between adjacent cells.

    sqrt(2) for a horizontal diagonal, 1.0 otherwise. A vertical offset
    adds nothing on top of the horizontal cost.
    """
    if a[0] != b[0] and a[2] != b[2]:
        return DIAGONAL_COST
    return STRAIGHT_COST


def heuristic(a: Cell, b: Cell) -> float:
    """3D Euclidean distance between two cells."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    dz = b[2] - a[2]
    return math.sqrt(dx * dx + dy * dy + dz * dz)


@dataclass
class NavGrid:
    """
    Navigation grid built on top of a WorldQuery.

    Responsibilities:
    - Provide walkability tests (is_walkable).
    - Provide neighbor cells for pathfinding, per the selected variant.

    It does NOT:
    - Interpret block types.
    - Cache or snapshot world state; queries go straight to the world.
    """

    world: WorldQuery
    variant: NeighborVariant = NeighborVariant.ENHANCED

    def __post_init__(self) -> None:
        # Accept plain strings from config files.
        if not isinstance(self.variant, NeighborVariant):
            self.variant = NeighborVariant(self.variant)

    # ------------------------------------------------------------------
    # Core queries
    # ------------------------------------------------------------------

    def is_walkable(self, cell: Cell) -> bool:
        """
        Determine if an agent can stand at `cell`.

        - `cell` itself is open space (body).
        - The cell below provides solid support (floor).
        - The cell above is open space (head).
        """
        return (
            self.is_open(cell)
            and self.has_support(cell)
            and self.is_open(cell.up())
        )

    def neighbors(self, cell: Cell) -> List[Cell]:
        """Candidate moves from `cell` under the configured variant."""
        if self.variant is NeighborVariant.SIMPLE:
            return self.neighbors_simple(cell)
        return self.neighbors_enhanced(cell)

    def neighbors_simple(self, cell: Cell) -> List[Cell]:
        """
        6-connected neighbors.

        A neighbor is valid iff it is open space with solid support below.
        """
        candidates: List[Cell] = []
        for dx, dy, dz in _SIMPLE_OFFSETS:
            target = cell.offset(dx, dy, dz)
            if self.is_open(target) and self.has_support(target):
                candidates.append(target)
        return candidates

    def neighbors_enhanced(self, cell: Cell) -> List[Cell]:
        """
        Horizontal neighbors (with diagonals) at three vertical offsets.

        Diagonals are rejected when either orthogonal corner cell at the
        target's level is not walkable, so solid corners are never cut.
        """
        candidates: List[Cell] = []
        for dx, dz in _HORIZONTAL_DIRS:
            diagonal = dx != 0 and dz != 0
            for dy in _VERTICAL_OFFSETS:
                target = cell.offset(dx, dy, dz)

                if dy == 1:
                    ok = self._can_step_up(cell, target)
                else:
                    # Same-level moves and step-downs share the walkable rule.
                    ok = self.is_walkable(target)

                if not ok:
                    continue

                if diagonal and not self._corners_clear(cell, dx, dy, dz):
                    continue

                candidates.append(target)
        return candidates

    # ------------------------------------------------------------------
    # Safe world access
    # ------------------------------------------------------------------

    def is_open(self, cell: Cell) -> bool:
        """WorldQuery.is_open_space; a raising query counts as blocked."""
        try:
            return bool(self.world.is_open_space(cell))
        except Exception as exc:
            log.debug("is_open_space failed at %s: %r", tuple(cell), exc)
            return False

    def has_support(self, cell: Cell) -> bool:
        """WorldQuery.has_solid_support_below; a raising query counts as no floor."""
        try:
            return bool(self.world.has_solid_support_below(cell))
        except Exception as exc:
            log.debug("has_solid_support_below failed at %s: %r", tuple(cell), exc)
            return False

    def surface_kind(self, cell: Cell) -> SurfaceKind:
        """WorldQuery.surface_kind; a raising query counts as a normal surface."""
        try:
            kind = self.world.surface_kind(cell)
        except Exception as exc:
            log.debug("surface_kind failed at %s: %r", tuple(cell), exc)
            return SurfaceKind.NORMAL
        return kind if isinstance(kind, SurfaceKind) else SurfaceKind.NORMAL

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _can_step_up(self, current: Cell, target: Cell) -> bool:
        """
        Rise by one cell.

        The target must be open, and either the current surface allows a
        half-step, or the target has a floor and there is headroom two
        cells above the current position for a full jump.
        """
        if not self.is_open(target):
            return False
        if self.surface_kind(current) is SurfaceKind.STEP_CAPABLE:
            return True
        return self.has_support(target) and self.is_open(current.up(2))

    def _corners_clear(self, current: Cell, dx: int, dy: int, dz: int) -> bool:
        """Both axis-aligned cells flanking a diagonal move are walkable."""
        return self.is_walkable(current.offset(dx, dy, 0)) and self.is_walkable(
            current.offset(0, dy, dz)
        )
