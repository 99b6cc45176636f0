# SPDX-License-Identifier: Apache-2.0
"""Globe renderer registry and bundle-emitting renderers."""

from __future__ import annotations

from . import json_snapshot as _json_snapshot  # noqa: F401
from . import three_globe as _three_globe  # noqa: F401
from .base import GlobeBinding, InteractiveBundle, InteractiveRenderer
from .registry import available, create, get, register, slugs

__all__ = [
    "GlobeBinding",
    "InteractiveBundle",
    "InteractiveRenderer",
    "available",
    "create",
    "get",
    "register",
    "slugs",
]
