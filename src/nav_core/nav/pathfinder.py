# A* pathfinding over NavGrid
# src/nav_core/nav/pathfinder.py
"""
Weighted A* pathfinding over NavGrid.

- Euclidean distance heuristic.
- Neighbors from the grid's variant (simple 6-connected or enhanced).
- Node records live in a per-call arena; parents are arena indices.
- OpenSet supports decrease-key as remove + reinsert, one entry per cell.
- Optional max_expansions guard against runaway searches.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict, Iterable, List, Optional, Set, TYPE_CHECKING

from spec.nav_core import WorldQuery
from spec.types import Cell
from .grid import NavGrid, NeighborVariant, heuristic, step_cost

if TYPE_CHECKING:
    from ..tracing import SearchTracer


log = logging.getLogger(__name__)

# Parent index of the root node.
NO_PARENT = -1

# Heap entry layout: [f_cost, seq, node_index, cell, live]
_LIVE = 4


@dataclass
class PathfindingResult:
    """Structured result for a pathfinding attempt."""

    path: List[Cell]
    success: bool
    reason: str | None = None
    cost: float = 0.0     # g_cost of the terminal node
    expanded: int = 0     # nodes moved to the closed set


@dataclass
class Node:
    """Search record for one cell; `parent` indexes the same arena."""

    cell: Cell
    parent: int
    g_cost: float
    h_cost: float

    @property
    def f_cost(self) -> float:
        return self.g_cost + self.h_cost


class OpenSet:
    """
    Min-priority queue of open nodes keyed by f_cost.

    At most one live entry exists per cell. Replacing an entry marks the
    old heap slot dead and pushes a new one; dead slots are skipped on pop.
    Equal f_costs pop in insertion order.
    """

    def __init__(self) -> None:
        self._heap: List[list] = []
        self._entries: Dict[Cell, list] = {}
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __contains__(self, cell: object) -> bool:
        return cell in self._entries

    def push(self, cell: Cell, f_cost: float, node_index: int) -> None:
        if cell in self._entries:
            raise ValueError(f"cell {tuple(cell)} is already open")
        entry = [f_cost, next(self._seq), node_index, cell, True]
        self._entries[cell] = entry
        heapq.heappush(self._heap, entry)

    def get(self, cell: Cell) -> Optional[int]:
        """Arena index of the open node for `cell`, if any."""
        entry = self._entries.get(cell)
        return entry[2] if entry is not None else None

    def remove(self, cell: Cell) -> int:
        """Drop the entry for `cell` and return its arena index."""
        entry = self._entries.pop(cell)
        entry[_LIVE] = False
        return entry[2]

    def pop_min(self) -> int:
        """Remove and return the arena index with the lowest f_cost."""
        while self._heap:
            entry = heapq.heappop(self._heap)
            if entry[_LIVE]:
                del self._entries[entry[3]]
                return entry[2]
        raise KeyError("pop from an empty OpenSet")


def find_path(
    grid: NavGrid,
    start: Iterable[int],
    goal: Iterable[int],
    max_expansions: Optional[int] = None,
) -> PathfindingResult:
    """
    A* search for a path from start to goal on NavGrid.

    Returns a PathfindingResult with:
      - path: possibly empty list of cells including start and goal
      - success: bool
      - reason: if not success, "no_path_found" or "max_expansions_exhausted"

    Unreachable goals are a normal outcome, never an exception. This
    function does not mutate world state.
    """
    start = Cell(*start)
    goal = Cell(*goal)

    if start == goal:
        return PathfindingResult(path=[start], success=True)

    arena: List[Node] = [Node(start, NO_PARENT, 0.0, heuristic(start, goal))]
    open_set = OpenSet()
    open_set.push(start, arena[0].f_cost, 0)
    closed: Set[Cell] = set()

    expanded = 0

    while open_set:
        if max_expansions is not None and expanded >= max_expansions:
            log.debug(
                "find_path %s -> %s hit max_expansions=%d",
                tuple(start),
                tuple(goal),
                max_expansions,
            )
            return PathfindingResult(
                path=[],
                success=False,
                reason="max_expansions_exhausted",
                expanded=expanded,
            )

        current_index = open_set.pop_min()
        current = arena[current_index]

        if current.cell == goal:
            return PathfindingResult(
                path=_reconstruct_path(arena, current_index),
                success=True,
                cost=current.g_cost,
                expanded=expanded,
            )

        closed.add(current.cell)
        expanded += 1

        for neighbor in grid.neighbors(current.cell):
            if neighbor in closed:
                continue

            tentative_g = current.g_cost + step_cost(current.cell, neighbor)

            existing = open_set.get(neighbor)
            if existing is not None:
                if tentative_g >= arena[existing].g_cost:
                    continue
                # Cheaper route to an open cell: decrease-key.
                open_set.remove(neighbor)

            arena.append(
                Node(neighbor, current_index, tentative_g, heuristic(neighbor, goal))
            )
            open_set.push(neighbor, arena[-1].f_cost, len(arena) - 1)

    return PathfindingResult(
        path=[],
        success=False,
        reason="no_path_found",
        expanded=expanded,
    )


def _reconstruct_path(arena: List[Node], index: int) -> List[Cell]:
    """Walk parent indices back to the root, then reverse."""
    path: List[Cell] = []
    while index != NO_PARENT:
        node = arena[index]
        path.append(node.cell)
        index = node.parent
    path.reverse()
    return path


class Pathfinder:
    """
    Public search component bound to one world and neighbor policy.

    Every call builds its own arena and sets, so a Pathfinder may be
    shared between callers searching distinct start/goal pairs.
    """

    def __init__(
        self,
        world: WorldQuery,
        *,
        variant: NeighborVariant | str = NeighborVariant.ENHANCED,
        max_expansions: Optional[int] = None,
        tracer: Optional["SearchTracer"] = None,
    ) -> None:
        self._grid = NavGrid(world=world, variant=variant)
        self._max_expansions = max_expansions
        self._tracer = tracer

    @property
    def grid(self) -> NavGrid:
        return self._grid

    @property
    def variant(self) -> NeighborVariant:
        return self._grid.variant

    def find_path(self, start: Iterable[int], goal: Iterable[int]) -> List[Cell]:
        """Return the path from start to goal, or [] when none exists."""
        return self.search(start, goal).path

    def search(self, start: Iterable[int], goal: Iterable[int]) -> PathfindingResult:
        """Run one search and return the full result with bookkeeping."""
        start = Cell(*start)
        goal = Cell(*goal)

        t0 = perf_counter()
        result = find_path(
            self._grid,
            start=start,
            goal=goal,
            max_expansions=self._max_expansions,
        )
        duration = perf_counter() - t0

        if self._tracer is not None:
            self._tracer.record(
                start=start,
                goal=goal,
                result=result,
                duration_s=duration,
            )
        return result

    def describe(self) -> Dict[str, Any]:
        """Settings summary, e.g. for event payloads."""
        return {
            "variant": self._grid.variant.value,
            "max_expansions": self._max_expansions,
        }
