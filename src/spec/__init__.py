# src/spec/__init__.py

from __future__ import annotations

"""
Public spec surface for voxel-nav.

This module re-exports *interfaces and data types* shared by the core and
its host integration:
  - Grid / movement value types (Cell, MovementIntent, SurfaceKind)
  - Collaborator protocols (WorldQuery, PlayerState, MovementActuator)
  - The Navigator surface consumed by command / UI layers

Deliberately does NOT export a concrete navigator to avoid circular imports
and keep runtime wiring in src/nav_core/.
"""

# Core value types
from .types import (
    Cell,
    Path,
    Position,
    SurfaceKind,
    MovementIntent,
)

# Collaborator protocols
from .nav_core import (
    WorldQuery,
    PlayerState,
    MovementActuator,
    Navigator,
)

__all__ = [
    # Value types
    "Cell",
    "Path",
    "Position",
    "SurfaceKind",
    "MovementIntent",
    # Protocols
    "WorldQuery",
    "PlayerState",
    "MovementActuator",
    "Navigator",
]
