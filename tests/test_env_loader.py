# tests/test_env_loader.py
"""
Tests for env.loader.load_nav_config.

Covers:
- the shipped config/nav.yaml
- profile selection precedence (argument > NAV_PROFILE > file)
- defaults for missing keys
- validation errors
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from env.loader import DEFAULT_CONFIG_PATH, PROFILE_ENV_VAR, load_nav_config


def write_yaml(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "nav.yaml"
    path.write_text(text, encoding="utf-8")
    return path


TWO_PROFILES = """
profile: fast
profiles:
  fast:
    pathfinder:
      variant: simple
      max_expansions: 100
  careful:
    pathfinder:
      variant: enhanced
      max_expansions: null
    executor:
      arrival_threshold: 0.25
      jump_cooldown_ticks: 4
"""


def test_shipped_config_loads(monkeypatch: Any) -> None:
    monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)

    cfg = load_nav_config()

    assert DEFAULT_CONFIG_PATH.exists()
    assert cfg.name == "default"
    assert cfg.pathfinder.variant == "enhanced"
    assert cfg.pathfinder.max_expansions == 50_000
    assert cfg.executor.arrival_threshold == 0.5
    assert cfg.executor.jump_cooldown_ticks == 10


def test_profile_from_file(tmp_path: Path, monkeypatch: Any) -> None:
    monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
    path = write_yaml(tmp_path, TWO_PROFILES)

    cfg = load_nav_config(path=path)

    assert cfg.name == "fast"
    assert cfg.pathfinder.variant == "simple"
    assert cfg.pathfinder.max_expansions == 100
    # Missing executor section falls back to defaults.
    assert cfg.executor.arrival_threshold == 0.5
    assert cfg.executor.descent_threshold == -0.5


def test_profile_precedence(tmp_path: Path, monkeypatch: Any) -> None:
    path = write_yaml(tmp_path, TWO_PROFILES)

    monkeypatch.setenv(PROFILE_ENV_VAR, "careful")
    cfg = load_nav_config(path=path)
    assert cfg.name == "careful"
    assert cfg.pathfinder.max_expansions is None
    assert cfg.executor.arrival_threshold == 0.25
    assert cfg.executor.jump_cooldown_ticks == 4

    assert load_nav_config(profile="fast", path=path).name == "fast"


def test_unknown_profile_raises(tmp_path: Path, monkeypatch: Any) -> None:
    monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
    path = write_yaml(tmp_path, TWO_PROFILES)

    with pytest.raises(KeyError):
        load_nav_config(profile="missing", path=path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_nav_config(path=tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "profiles:\n  default: {}\n",
        "profile: default\nprofiles: [1, 2]\n",
        "profile: default\nprofiles:\n  default:\n    pathfinder: [1]\n",
        "profile: default\nprofiles:\n  default:\n    pathfinder:\n      variant: diagonal\n",
        "profile: default\nprofiles:\n  default:\n    pathfinder:\n      max_expansions: 0\n",
        "profile: default\nprofiles:\n  default:\n    pathfinder:\n      max_expansions: true\n",
        "profile: default\nprofiles:\n  default:\n    executor:\n      arrival_threshold: 0\n",
        "profile: default\nprofiles:\n  default:\n    executor:\n      jump_cooldown_ticks: -1\n",
    ],
)
def test_invalid_configs_raise(tmp_path: Path, monkeypatch: Any, text: str) -> None:
    monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
    path = write_yaml(tmp_path, text)

    with pytest.raises(ValueError):
        load_nav_config(path=path)
