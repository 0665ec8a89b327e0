# src/monitoring/logging_config.py
"""
Logging setup for voxel-nav entrypoints.

    from monitoring.logging_config import configure_logging
    configure_logging(logging.INFO, search_level=logging.WARNING)

Loggers used by the core:
    nav_core.search          one line per finished search (SearchTracer)
    nav_core.nav.executor    session transitions (info), per-tick steering (debug)
    nav_core.nav.grid        failed world queries (debug)
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

SEARCH_LOGGER = "nav_core.search"


def configure_logging(
    level: int = logging.INFO,
    *,
    search_level: Optional[int] = None,
) -> None:
    """
    Attach a stdout handler to the root logger unless one is already there.

    `search_level` sets the per-search trace logger separately, so busy
    hosts can keep session logs while muting search lines.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(level)

    if search_level is not None:
        logging.getLogger(SEARCH_LOGGER).setLevel(search_level)
