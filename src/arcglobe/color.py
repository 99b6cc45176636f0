# SPDX-License-Identifier: Apache-2.0
"""Hex color parsing and fade colors for animated globe points."""

from __future__ import annotations

import re
from dataclasses import dataclass

import numpy as np

from arcglobe.errors import InvalidColorFormat

_SHORTHAND_RE = re.compile(r"#?([0-9a-f])([0-9a-f])([0-9a-f])", re.IGNORECASE)
_HEX_RE = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class RGB:
    r: int
    g: int
    b: int

    def to_dict(self) -> dict[str, int]:
        return {"r": self.r, "g": self.g, "b": self.b}


def hex_to_rgb(value: object) -> RGB | None:
    """Parse ``#rrggbb`` or ``#rgb`` (``#`` optional) into an :class:`RGB`.

    Returns ``None`` when ``value`` matches neither form.
    """

    if not isinstance(value, str):
        return None
    short = _SHORTHAND_RE.fullmatch(value)
    if short:
        value = "".join(nibble * 2 for nibble in short.groups())
    match = _HEX_RE.fullmatch(value)
    if not match:
        return None
    r, g, b = (int(part, 16) for part in match.groups())
    return RGB(r, g, b)


def _format_alpha(alpha: float) -> str:
    # shortest round-trip digits, like `${1 - t}` in the browser
    return np.format_float_positional(alpha, trim="-")


@dataclass(frozen=True, slots=True)
class FadeColor:
    """Progress-to-color mapping: constant RGB, alpha ``1 - t``.

    ``t`` is clamped to ``[0, 1]`` so the alpha never leaves the CSS range.
    """

    rgb: RGB

    def __call__(self, t: float) -> str:
        t = min(max(float(t), 0.0), 1.0)
        rgb = self.rgb
        return f"rgba({rgb.r},{rgb.g},{rgb.b},{_format_alpha(1 - t)})"

    def to_dict(self) -> dict[str, int]:
        return self.rgb.to_dict()


def make_fade_color(rgb: RGB) -> FadeColor:
    return FadeColor(rgb)


def fade_color_for(value: str) -> FadeColor:
    """Return the fade color for hex ``value`` or raise :class:`InvalidColorFormat`."""

    rgb = hex_to_rgb(value)
    if rgb is None:
        raise InvalidColorFormat(value)
    return make_fade_color(rgb)
