# SPDX-License-Identifier: Apache-2.0
"""Layer payloads handed from the pipeline to a rendering binding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from arcglobe.points import Arc, DerivedPoint

HEX_POLYGON_RESOLUTION = 3
HEX_POLYGON_MARGIN = 0.7
ARC_STROKES = (0.32, 0.28, 0.3)
ARC_DASH_GAP = 15
POINT_RADIUS = 2
POINT_ALTITUDE = 0.0
RING_PROPAGATION_SPEED = 3


@dataclass(frozen=True, slots=True)
class HexPolygonLayer:
    features: tuple[dict[str, Any], ...]
    color: str
    show_atmosphere: bool
    atmosphere_color: str
    atmosphere_altitude: float
    resolution: int = HEX_POLYGON_RESOLUTION
    margin: float = HEX_POLYGON_MARGIN

    def to_dict(self, *, include_features: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "resolution": self.resolution,
            "margin": self.margin,
            "color": self.color,
            "showAtmosphere": self.show_atmosphere,
            "atmosphereColor": self.atmosphere_color,
            "atmosphereAltitude": self.atmosphere_altitude,
            "featureCount": len(self.features),
        }
        if include_features:
            data["features"] = list(self.features)
        return data


@dataclass(frozen=True, slots=True)
class ArcLayer:
    """Arcs plus per-arc stroke and dash parameters (aligned by position)."""

    arcs: tuple[Arc, ...]
    strokes: tuple[float, ...]
    dash_initial_gaps: tuple[float, ...]
    dash_length: float
    dash_animate_time: float
    dash_gap: float = ARC_DASH_GAP

    def to_dict(self) -> dict[str, Any]:
        return {
            "arcs": [
                {**arc.to_camel_dict(), "stroke": stroke, "dashInitialGap": gap}
                for arc, stroke, gap in zip(
                    self.arcs, self.strokes, self.dash_initial_gaps
                )
            ],
            "dashLength": self.dash_length,
            "dashGap": self.dash_gap,
            "dashAnimateTime": self.dash_animate_time,
        }


@dataclass(frozen=True, slots=True)
class PointLayer:
    points: tuple[DerivedPoint, ...]
    ring_max_radius: float
    ring_repeat_period: float
    ring_propagation_speed: float = RING_PROPAGATION_SPEED
    merge: bool = True
    altitude: float = POINT_ALTITUDE
    radius: float = POINT_RADIUS

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "merge": self.merge,
            "altitude": self.altitude,
            "radius": self.radius,
            "ringMaxRadius": self.ring_max_radius,
            "ringPropagationSpeed": self.ring_propagation_speed,
            "ringRepeatPeriod": self.ring_repeat_period,
        }


@dataclass(frozen=True, slots=True)
class GlobeMaterial:
    color: str
    emissive: str
    emissive_intensity: float
    shininess: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "color": self.color,
            "emissive": self.emissive,
            "emissiveIntensity": self.emissive_intensity,
            "shininess": self.shininess,
        }
