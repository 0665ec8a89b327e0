# NavConfig, PathfinderConfig, ExecutorSettings dataclasses
# src/env/schema.py

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PathfinderConfig:
    """Search settings for one profile."""
    variant: str = "enhanced"              # "simple" or "enhanced"
    max_expansions: Optional[int] = 50_000 # None disables the cap


@dataclass
class ExecutorSettings:
    """Path-following thresholds for one profile."""
    arrival_threshold: float = 0.5   # world units to a waypoint center
    jump_cooldown_ticks: int = 10    # ticks between jump intents
    jump_threshold: float = 0.1      # dy above which we jump
    descent_threshold: float = -0.5  # dy below which we probe for edges


@dataclass
class NavConfig:
    """Resolved navigation config for one active profile."""
    name: str
    pathfinder: PathfinderConfig = field(default_factory=PathfinderConfig)
    executor: ExecutorSettings = field(default_factory=ExecutorSettings)
