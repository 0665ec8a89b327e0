# nav_core package
# src/nav_core/__init__.py
"""
voxel-nav core package.

Exports:
    - NavigatorImpl: search-then-follow navigation for one agent
    - NavCoreError: domain-level error type for host failures
    - NavCommandHandler / CommandResult: text command layer
"""

from __future__ import annotations

from .core import NavigatorImpl, NavCoreError
from .commands import CommandResult, NavCommandHandler

__all__ = [
    "NavigatorImpl",
    "NavCoreError",
    "CommandResult",
    "NavCommandHandler",
]
