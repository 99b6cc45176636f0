# SPDX-License-Identifier: Apache-2.0
"""Logging setup shared by the command-line entry points."""

from __future__ import annotations

import logging
import os
from typing import Any

VERBOSITY_ENV = "ARCGLOBE_VERBOSITY"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "quiet": logging.ERROR,
}


def verbosity_from_namespace(ns: Any) -> None:
    """Export ``--verbose`` / ``--quiet`` flags to the environment."""

    if getattr(ns, "verbose", False):
        os.environ[VERBOSITY_ENV] = "debug"
    elif getattr(ns, "quiet", False):
        os.environ[VERBOSITY_ENV] = "quiet"


def configure_logging_from_env(default: str = "info") -> int:
    """Configure root logging from ``ARCGLOBE_VERBOSITY``; return the level."""

    name = (os.environ.get(VERBOSITY_ENV) or default).strip().lower()
    level = _LEVELS.get(name, _LEVELS[default])
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)
    return level
