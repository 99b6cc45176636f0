# SPDX-License-Identifier: Apache-2.0
"""Country-boundary GeoJSON passed through to the hex-polygon layer."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from arcglobe.errors import CountryDatasetError, MissingCollaboratorData


@dataclass(frozen=True, slots=True)
class CountryDataset:
    """A FeatureCollection of country polygons, or the not-yet-loaded state."""

    loaded: bool
    _features: tuple[dict[str, Any], ...] = field(default=(), repr=False)
    source: Path | None = None

    @classmethod
    def pending(cls) -> CountryDataset:
        return cls(loaded=False)

    @classmethod
    def from_geojson(
        cls, payload: Any, *, source: Path | None = None
    ) -> CountryDataset:
        if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
            raise CountryDatasetError("Country data must be a GeoJSON FeatureCollection")
        features = payload.get("features")
        if not isinstance(features, list):
            raise CountryDatasetError("FeatureCollection has no 'features' list")
        for idx, feature in enumerate(features):
            if not isinstance(feature, dict) or feature.get("type") != "Feature":
                raise CountryDatasetError(f"Entry {idx} is not a GeoJSON Feature")
        return cls(loaded=True, _features=tuple(features), source=source)

    @property
    def features(self) -> tuple[dict[str, Any], ...]:
        if not self.loaded:
            raise MissingCollaboratorData("Country dataset has not been loaded yet")
        return self._features

    def to_geojson(self) -> dict[str, Any]:
        return {"type": "FeatureCollection", "features": list(self.features)}


def load_countries(path: str | Path) -> CountryDataset:
    """Read a GeoJSON FeatureCollection of country boundaries."""

    geo_path = Path(path).expanduser()
    if not geo_path.is_file():
        raise FileNotFoundError(f"Country dataset not found: {geo_path}")
    try:
        payload = json.loads(geo_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CountryDatasetError(f"Invalid GeoJSON in {geo_path}: {exc}") from exc
    return CountryDataset.from_geojson(payload, source=geo_path)
