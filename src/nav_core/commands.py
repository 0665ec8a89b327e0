# src/nav_core/commands.py
"""
Text command layer for navigation.

Hosts deliver submitted chat / console text to NavCommandHandler.handle();
it returns a CommandResult whose `code` lets the UI show distinct messages
for "navigating", "no path found", "navigation stopped" and "invalid
coordinates". Text without the command prefix is ignored (None).

Commands (default prefix "*"):
    *goto <x> <y> <z>   navigate to integer coordinates
    *stop               stop navigation
    *help               list commands
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from spec.nav_core import Navigator
from spec.types import Cell

from .core import NavCoreError


log = logging.getLogger(__name__)

HELP_LINES = (
    "=== Navigation Commands ===",
    "{p}goto <x> <y> <z> - Navigate to coordinates",
    "{p}stop - Stop navigation",
    "{p}help - Show this help",
)


@dataclass
class CommandResult:
    """Outcome of one command, ready for display."""

    ok: bool
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


class NavCommandHandler:
    """Parse and dispatch navigation commands against a Navigator."""

    def __init__(self, navigator: Navigator, *, prefix: str = "*") -> None:
        self._nav = navigator
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def handle(self, text: str) -> Optional[CommandResult]:
        """
        Handle one line of submitted text.

        Returns None when the text is not a command.
        """
        if not text.startswith(self._prefix):
            return None

        parts = text[len(self._prefix):].split()
        if not parts:
            return None

        command = parts[0].lower()
        args = parts[1:]

        if command == "goto":
            return self._goto(args)
        if command == "stop":
            return self._stop()
        if command == "help":
            return self._help()

        return CommandResult(
            ok=False,
            code="unknown_command",
            message=f"Unknown command. Try {self._prefix}help",
            details={"command": command},
        )

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------

    def _goto(self, args: List[str]) -> CommandResult:
        if len(args) != 3:
            return CommandResult(
                ok=False,
                code="usage",
                message=f"Usage: {self._prefix}goto <x> <y> <z>",
            )

        try:
            goal = Cell(int(args[0]), int(args[1]), int(args[2]))
        except ValueError:
            return CommandResult(
                ok=False,
                code="invalid_coordinates",
                message="Invalid coordinates! Use numbers.",
                details={"args": list(args)},
            )

        log.info("goto %s", tuple(goal))

        try:
            result = self._nav.navigate_to(goal)
        except NavCoreError as exc:
            return CommandResult(
                ok=False,
                code=exc.code,
                message="Cannot navigate right now.",
                details=dict(exc.details),
            )

        if not result.success:
            return CommandResult(
                ok=False,
                code="no_path",
                message="No path found to destination!",
                details={"goal": list(goal), "reason": result.reason},
            )

        return CommandResult(
            ok=True,
            code="navigating",
            message=f"Found path with {len(result.path)} nodes",
            details={"goal": list(goal), "nodes": len(result.path), "cost": result.cost},
        )

    def _stop(self) -> CommandResult:
        if self._nav.stop():
            return CommandResult(ok=True, code="stopped", message="Navigation stopped")
        return CommandResult(
            ok=True,
            code="not_navigating",
            message="No navigation in progress",
        )

    def _help(self) -> CommandResult:
        lines = [line.format(p=self._prefix) for line in HELP_LINES]
        return CommandResult(
            ok=True,
            code="help",
            message="\n".join(lines),
            details={"lines": lines},
        )
