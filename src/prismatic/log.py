"""Logging defaults for the viewer entry points.

Library modules only call ``logging.getLogger(__name__)``; configuring
handlers is left to the application.  :func:`setup_default_logging`
provides a sane configuration for scripts that have none.
"""

from __future__ import annotations

import logging


def setup_default_logging(level: int | str = "INFO") -> None:
    """Configure the root logger once.

    No-op if the root logger already has handlers.
    """
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), logging.INFO)
    else:
        lvl = int(level)

    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
