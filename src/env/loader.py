# src/env/loader.py
"""
Load navigation profiles from config/nav.yaml.

The file holds a `profile` key naming the active entry and a `profiles`
mapping; see config/nav.yaml for the shape. Keys missing from a profile
fall back to the dataclass defaults in env.schema.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .schema import ExecutorSettings, NavConfig, PathfinderConfig


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "nav.yaml"

# Overrides the `profile` key of nav.yaml when set.
PROFILE_ENV_VAR = "NAV_PROFILE"

VALID_VARIANTS = ("simple", "enhanced")


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML config file that must contain a mapping."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _select_profile(
    nav_cfg: Dict[str, Any],
    requested: Optional[str],
) -> Tuple[str, Dict[str, Any]]:
    """Return (active_profile_name, active_profile_mapping)."""
    profile_name = requested or os.getenv(PROFILE_ENV_VAR) or nav_cfg.get("profile")
    if not profile_name:
        raise ValueError("nav.yaml must define a 'profile' key.")
    profiles = nav_cfg.get("profiles")
    if not isinstance(profiles, dict):
        raise ValueError("nav.yaml must define a 'profiles' mapping.")
    if profile_name not in profiles:
        raise KeyError(f"Profile '{profile_name}' not found in nav.yaml profiles.")
    return profile_name, profiles[profile_name] or {}


def _section(profile: Dict[str, Any], key: str) -> Dict[str, Any]:
    raw = profile.get(key) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Profile section '{key}' must be a mapping, got {type(raw)}")
    return raw


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_nav_config(
    profile: Optional[str] = None,
    path: Optional[Path] = None,
) -> NavConfig:
    """Main entry point: returns the fully resolved NavConfig."""
    nav_cfg = _load_yaml(path or DEFAULT_CONFIG_PATH)
    active_name, active = _select_profile(nav_cfg, profile)

    pf_raw = _section(active, "pathfinder")
    ex_raw = _section(active, "executor")

    pf_defaults = PathfinderConfig()
    pathfinder = PathfinderConfig(
        variant=str(pf_raw.get("variant", pf_defaults.variant)),
        max_expansions=pf_raw.get("max_expansions", pf_defaults.max_expansions),
    )

    ex_defaults = ExecutorSettings()
    executor = ExecutorSettings(
        arrival_threshold=float(
            ex_raw.get("arrival_threshold", ex_defaults.arrival_threshold)
        ),
        jump_cooldown_ticks=int(
            ex_raw.get("jump_cooldown_ticks", ex_defaults.jump_cooldown_ticks)
        ),
        jump_threshold=float(ex_raw.get("jump_threshold", ex_defaults.jump_threshold)),
        descent_threshold=float(
            ex_raw.get("descent_threshold", ex_defaults.descent_threshold)
        ),
    )

    _validate(pathfinder, executor)

    return NavConfig(name=active_name, pathfinder=pathfinder, executor=executor)


def _validate(pathfinder: PathfinderConfig, executor: ExecutorSettings) -> None:
    """Minimal sanity checks for a resolved profile."""
    if pathfinder.variant not in VALID_VARIANTS:
        raise ValueError(f"Invalid pathfinder variant: {pathfinder.variant}")

    cap = pathfinder.max_expansions
    if cap is not None:
        if isinstance(cap, bool) or not isinstance(cap, int) or cap <= 0:
            raise ValueError(f"max_expansions must be a positive int or null, got {cap!r}")

    if executor.arrival_threshold <= 0:
        raise ValueError(
            f"arrival_threshold must be positive, got {executor.arrival_threshold}"
        )
    if executor.jump_cooldown_ticks < 0:
        raise ValueError(
            f"jump_cooldown_ticks must be >= 0, got {executor.jump_cooldown_ticks}"
        )
