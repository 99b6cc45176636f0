# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from arcglobe.config import GlobeConfig, load_globe_config, resolve_config
from arcglobe.errors import GlobeConfigError

DOCUMENTED_DEFAULTS = {
    "pointSize": 1,
    "atmosphereColor": "#ffffff",
    "showAtmosphere": True,
    "atmosphereAltitude": 0.1,
    "polygonColor": "rgba(255,255,255,0.7)",
    "globeColor": "#1d072e",
    "emissive": "#000000",
    "emissiveIntensity": 0.1,
    "shininess": 0.9,
    "arcTime": 2000,
    "arcLength": 0.9,
    "rings": 1,
    "maxRings": 3,
    "autoRotate": True,
    "autoRotateSpeed": 1,
}


def test_defaults_match_documented_values() -> None:
    resolved = resolve_config(None).to_camel_dict()
    for key, value in DOCUMENTED_DEFAULTS.items():
        assert resolved[key] == value, key
    assert resolved["ambientLight"] == "#ffffff"
    assert resolved["initialPosition"] is None


def test_partial_camel_case_overrides_keep_other_defaults() -> None:
    cfg = resolve_config({"pointSize": 4, "globeColor": "#062056", "arcTime": None})
    assert cfg.point_size == 4
    assert cfg.globe_color == "#062056"
    assert cfg.arc_time == 2000
    assert cfg.max_rings == 3


def test_snake_case_and_nested_position() -> None:
    cfg = resolve_config(
        {"auto_rotate": False, "initialPosition": {"lat": 22.3, "lng": 114.2}}
    )
    assert cfg.auto_rotate is False
    assert cfg.initial_position is not None
    assert cfg.initial_position.lng == 114.2


def test_resolve_config_passes_models_through() -> None:
    cfg = GlobeConfig(shininess=0.5)
    assert resolve_config(cfg) is cfg


@pytest.mark.parametrize("override", [{"rings": 0}, {"pointSize": -1}, {"arcTime": -5}])
def test_invalid_values_raise(override) -> None:
    with pytest.raises(ValidationError):
        resolve_config(override)


def test_load_globe_config_json_and_yaml(tmp_path) -> None:
    json_path = tmp_path / "globe.json"
    json_path.write_text(json.dumps({"pointSize": 2}), encoding="utf-8")
    assert load_globe_config(json_path).point_size == 2

    yaml_path = tmp_path / "globe.yaml"
    yaml_path.write_text("showAtmosphere: false\nmaxRings: 5\n", encoding="utf-8")
    cfg = load_globe_config(yaml_path)
    assert cfg.show_atmosphere is False
    assert cfg.max_rings == 5

    empty = tmp_path / "empty.yml"
    empty.write_text("", encoding="utf-8")
    assert load_globe_config(empty) == GlobeConfig()


def test_load_globe_config_errors(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_globe_config(tmp_path / "missing.json")
    listy = tmp_path / "list.json"
    listy.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_globe_config(listy)


@pytest.mark.parametrize(
    ("name", "text"),
    [
        ("bad.json", "{not json"),
        ("bad.yaml", "pointSize: [1, 2\n"),
        ("list.yml", "- 1\n"),
    ],
)
def test_load_config_wraps_parse_errors(tmp_path, name, text) -> None:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    with pytest.raises(GlobeConfigError) as excinfo:
        load_globe_config(path)
    assert str(path) in str(excinfo.value)
