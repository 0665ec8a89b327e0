# core shared types: Cell, Path, SurfaceKind, MovementIntent
# src/spec/types.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple


# ---------------------------------------------------------------------------
# Grid primitives
# ---------------------------------------------------------------------------

class Cell(NamedTuple):
    """Integer grid position of one voxel.

    Equality and hashing are exact tuple semantics, so a Cell compares equal
    to the plain tuple ``(x, y, z)``.
    """
    x: int
    y: int
    z: int

    def offset(self, dx: int, dy: int, dz: int) -> "Cell":
        return Cell(self.x + dx, self.y + dy, self.z + dz)

    def up(self, n: int = 1) -> "Cell":
        return Cell(self.x, self.y + n, self.z)

    def down(self, n: int = 1) -> "Cell":
        return Cell(self.x, self.y - n, self.z)


# Ordered waypoints from start (inclusive) to goal (inclusive).
# An empty list means "no path found".
Path = List[Cell]

# Fractional world coordinates of the agent: (x, y, z)
Position = Tuple[float, float, float]


class SurfaceKind(Enum):
    """What kind of surface a cell presents to an agent stepping off it."""

    NORMAL = "normal"
    # Partial-height surfaces (slabs, stairs) allow a half-step rise.
    STEP_CAPABLE = "step_capable"


# ---------------------------------------------------------------------------
# Control output
# ---------------------------------------------------------------------------

@dataclass
class MovementIntent:
    """Discrete movement decision for one host tick.

    Hosts sample these flags once per tick and translate them into key
    states. ``yaw`` is the facing the agent should adopt (degrees, Minecraft
    convention: 0 = +z, 90 = -x); ``None`` means "leave facing alone".
    """
    forward: bool = False
    back: bool = False
    left: bool = False
    right: bool = False
    jump: bool = False
    sneak: bool = False
    yaw: Optional[float] = None

    @staticmethod
    def idle() -> "MovementIntent":
        """The all-keys-released intent."""
        return MovementIntent()

    @property
    def is_idle(self) -> bool:
        return not (
            self.forward
            or self.back
            or self.left
            or self.right
            or self.jump
            or self.sneak
        ) and self.yaw is None
