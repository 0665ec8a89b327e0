# src/nav_core/testing/__init__.py
"""In-memory fakes for exercising the navigation core without a game."""

from __future__ import annotations

from .fakes import ChunkNotLoadedError, FakePlayer, FakeVoxelWorld, RecordingActuator

__all__ = [
    "ChunkNotLoadedError",
    "FakePlayer",
    "FakeVoxelWorld",
    "RecordingActuator",
]
