# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import pytest

from arcglobe.color import RGB, FadeColor, fade_color_for, hex_to_rgb, make_fade_color
from arcglobe.errors import InvalidColorFormat


def test_shorthand_and_full_hex_agree() -> None:
    assert hex_to_rgb("#fff") == hex_to_rgb("#ffffff") == RGB(255, 255, 255)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("#1d072e", RGB(29, 7, 46)),
        ("1D072E", RGB(29, 7, 46)),
        ("#AbC", RGB(0xAA, 0xBB, 0xCC)),
        ("abc", RGB(0xAA, 0xBB, 0xCC)),
    ],
)
def test_hex_to_rgb_accepts_optional_hash_and_any_case(value, expected) -> None:
    assert hex_to_rgb(value) == expected


@pytest.mark.parametrize(
    "value", ["not-a-color", "", "#12345", "#ggg", "##fff", "#ffffff ", None, 0xFFF]
)
def test_hex_to_rgb_rejects_malformed(value) -> None:
    assert hex_to_rgb(value) is None


def test_fade_color_endpoints() -> None:
    fade = make_fade_color(RGB(10, 20, 30))
    assert fade(0) == "rgba(10,20,30,1)"
    assert fade(1) == "rgba(10,20,30,0)"
    assert fade(0.25) == "rgba(10,20,30,0.75)"


def test_fade_color_clamps_progress() -> None:
    fade = make_fade_color(RGB(1, 2, 3))
    assert fade(-0.5) == fade(0)
    assert fade(3) == fade(1)


def test_fade_color_is_a_value() -> None:
    assert make_fade_color(RGB(1, 2, 3)) == FadeColor(RGB(1, 2, 3))
    assert fade_color_for("#010203").to_dict() == {"r": 1, "g": 2, "b": 3}


def test_fade_color_for_raises_on_bad_hex() -> None:
    with pytest.raises(InvalidColorFormat) as excinfo:
        fade_color_for("teal")
    assert excinfo.value.color == "teal"
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("t", [0.1234567, 0.1, 1 / 3, 0.999999999])
def test_fade_alpha_keeps_full_precision(t) -> None:
    rendered = make_fade_color(RGB(1, 2, 3))(t)
    alpha = rendered[len("rgba(1,2,3,") : -1]
    assert float(alpha) == 1 - t
    assert "e" not in alpha
