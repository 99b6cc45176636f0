# SPDX-License-Identifier: Apache-2.0
"""Globe appearance configuration.

Keys follow the camelCase names used by the browser component
(``pointSize``, ``arcTime`` ...); snake_case names are accepted too.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from arcglobe.errors import GlobeConfigError

DEFAULT_LIGHT = "#ffffff"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class InitialPosition(_CamelModel):
    lat: float
    lng: float


class GlobeConfig(_CamelModel):
    point_size: float = Field(default=1, ge=0)
    globe_color: str = "#1d072e"
    show_atmosphere: bool = True
    atmosphere_color: str = "#ffffff"
    atmosphere_altitude: float = 0.1
    emissive: str = "#000000"
    emissive_intensity: float = 0.1
    shininess: float = 0.9
    polygon_color: str = "rgba(255,255,255,0.7)"
    ambient_light: str = DEFAULT_LIGHT
    directional_left_light: str = DEFAULT_LIGHT
    directional_top_light: str = DEFAULT_LIGHT
    point_light: str = DEFAULT_LIGHT
    arc_time: float = Field(default=2000, ge=0, description="Arc dash animation (ms)")
    arc_length: float = 0.9
    rings: int = Field(default=1, ge=1)
    max_rings: int = Field(default=3, ge=0)
    initial_position: InitialPosition | None = None
    auto_rotate: bool = True
    auto_rotate_speed: float = 1

    def to_camel_dict(self) -> dict[str, Any]:
        """Return the config keyed by camelCase names, ready for JSON."""

        return self.model_dump(by_alias=True, mode="json")


def resolve_config(
    globe_config: GlobeConfig | Mapping[str, Any] | None = None,
) -> GlobeConfig:
    """Apply defaults to a partial config mapping (``None`` → all defaults)."""

    if globe_config is None:
        return GlobeConfig()
    if isinstance(globe_config, GlobeConfig):
        return globe_config
    # None values mean "not provided", like an undefined key in the browser
    provided = {k: v for k, v in dict(globe_config).items() if v is not None}
    return GlobeConfig.model_validate(provided)


def load_globe_config(path: str | Path) -> GlobeConfig:
    """Load a config file (``.json``, ``.yml`` or ``.yaml``)."""

    cfg_path = Path(path).expanduser()
    if not cfg_path.is_file():
        raise FileNotFoundError(f"Globe config not found: {cfg_path}")
    text = cfg_path.read_text(encoding="utf-8")
    try:
        if cfg_path.suffix.lower() in {".yml", ".yaml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise GlobeConfigError(f"Invalid globe config {cfg_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise GlobeConfigError(f"Globe config must be a mapping: {cfg_path}")
    return resolve_config(data)
