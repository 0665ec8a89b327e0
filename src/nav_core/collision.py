# src/nav_core/collision.py
"""
Block-backed WorldQuery for voxel-nav.

Hosts that can look up "what block is at (x, y, z)" get the three world
queries the navigation grid needs without writing them by hand:

    world = BlockWorldQuery(block_at=my_lookup)

Block descriptors are interpreted loosely since every host represents
them differently:

    - None, {} or []                         -> air
    - numeric 0                              -> air (old-school ID)
    - str id, or mapping with "id"/"name"    -> matched by id text

Id matching is by substring on the lower-cased id, so both
"minecraft:oak_slab" and "stone_slab" are recognized as slabs.

This module does NOT reason about hazards (lava damage, fall damage);
hazards are simply "not solid".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from spec.types import Cell, SurfaceKind

# Signature for a host block lookup:
#   block_at(x, y, z) -> Any
BlockAtFn = Callable[[int, int, int], Any]

# Partial-height blocks that allow a half-step rise.
STEP_CAPABLE_MARKERS: Tuple[str, ...] = ("slab", "stairs", "step")

# Non-air blocks the agent can move through.
PASSABLE_MARKERS: Tuple[str, ...] = (
    "water",
    "lava",
    "tallgrass",
    "tall_grass",
    "flower",
    "torch",
    "sapling",
    "snow_layer",
    "carpet",
    "vine",
    "sign",
)

_AIR_IDS = ("minecraft:air", "air", "cave_air", "minecraft:cave_air", "void_air")


def _block_id(block: Any) -> Optional[str]:
    """Lower-cased id text for a block descriptor, if it has one."""
    if isinstance(block, str):
        return block.lower()
    if isinstance(block, dict):
        bid = block.get("id") or block.get("name")
        if isinstance(bid, str):
            return bid.lower()
    return None


def _is_air_like(block: Any) -> bool:
    """
    Heuristic to decide if a block is "air-like".

    Anything not recognized as air is treated as a block.
    """
    if block is None:
        return True

    # Empty containers are treated as "no block"
    if block == {} or block == []:
        return True

    # Classic numeric ID for air
    if isinstance(block, (int, float)) and not isinstance(block, bool) and block == 0:
        return True

    bid = _block_id(block)
    return bid is not None and bid in _AIR_IDS


def _matches(block: Any, markers: Tuple[str, ...]) -> bool:
    bid = _block_id(block)
    return bid is not None and any(marker in bid for marker in markers)


@dataclass
class BlockWorldQuery:
    """
    WorldQuery implementation driven by a block lookup.

    Parameters:
        block_at:
            Optional function returning the block descriptor at (x, y, z).
            It may raise (e.g. chunk not loaded); NavGrid treats that as
            "not walkable".

        default_floor_y:
            Y-level treated as "solid floor everywhere" when block_at is not
            available: every cell at or below it is solid. Handy for flat
            test worlds.

    With neither set, every cell is open air and nothing is walkable.
    """

    block_at: Optional[BlockAtFn] = None
    default_floor_y: Optional[int] = None

    # ------------------------------------------------------------------
    # WorldQuery protocol
    # ------------------------------------------------------------------

    def is_open_space(self, cell: Cell) -> bool:
        """No collision: air or a passable block."""
        block = self._lookup(cell)
        if block is _FLOOR:
            return False
        if block is _OPEN:
            return True
        return _is_air_like(block) or _matches(block, PASSABLE_MARKERS)

    def has_solid_support_below(self, cell: Cell) -> bool:
        """The block under `cell` can be stood on (full cube or partial block)."""
        return self._is_support(Cell(cell[0], cell[1] - 1, cell[2]))

    def surface_kind(self, cell: Cell) -> SurfaceKind:
        """
        Step-capable when the agent stands on, or inside, a partial block.
        """
        here = self._lookup(cell)
        below = self._lookup(Cell(cell[0], cell[1] - 1, cell[2]))
        for block in (here, below):
            if block not in (_FLOOR, _OPEN) and _matches(block, STEP_CAPABLE_MARKERS):
                return SurfaceKind.STEP_CAPABLE
        return SurfaceKind.NORMAL

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _is_support(self, cell: Cell) -> bool:
        block = self._lookup(cell)
        if block is _FLOOR:
            return True
        if block is _OPEN:
            return False
        if _is_air_like(block):
            return False
        return not _matches(block, PASSABLE_MARKERS)

    def _lookup(self, cell: Cell) -> Any:
        if self.block_at is not None:
            return self.block_at(cell[0], cell[1], cell[2])
        if self.default_floor_y is not None and cell[1] <= self.default_floor_y:
            return _FLOOR
        return _OPEN


# Sentinels for the flat-floor fallback.
_FLOOR = object()
_OPEN = object()


def flat_world(floor_y: int = 63) -> BlockWorldQuery:
    """
    A BlockWorldQuery for an infinite flat world: solid at or below
    `floor_y`, open above.
    """
    return BlockWorldQuery(block_at=None, default_floor_y=floor_y)
