# SPDX-License-Identifier: Apache-2.0
"""Arc input model and endpoint point derivation."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from arcglobe.color import FadeColor, fade_color_for
from arcglobe.errors import ArcDataError, InvalidColorFormat
from arcglobe.utils.io_utils import open_input

LOGGER = logging.getLogger(__name__)


class Arc(BaseModel):
    """One directed start → end connection drawn on the globe."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    order: int = Field(ge=0)
    start_lat: float = Field(allow_inf_nan=False)
    start_lng: float = Field(allow_inf_nan=False)
    end_lat: float = Field(allow_inf_nan=False)
    end_lng: float = Field(allow_inf_nan=False)
    arc_alt: float = Field(ge=0)
    # any JSON value; validated by the deriver so a bad color only drops its own arc
    color: Any

    def to_camel_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


_ARC_LIST = TypeAdapter(list[Arc])


@dataclass(frozen=True, slots=True)
class DerivedPoint:
    size: float
    order: int
    color: FadeColor
    lat: float
    lng: float

    @property
    def key(self) -> tuple[float, float]:
        return (self.lat, self.lng)

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "order": self.order,
            "color": self.color.to_dict(),
            "lat": self.lat,
            "lng": self.lng,
        }


def parse_arcs(payload: Any) -> list[Arc]:
    """Validate a decoded JSON payload (list, or ``{"arcs": [...]}``) into arcs."""

    if isinstance(payload, dict) and "arcs" in payload:
        payload = payload["arcs"]
    if not isinstance(payload, list):
        raise ArcDataError("Arc data must be a JSON array of arc objects")
    try:
        return _ARC_LIST.validate_python(payload)
    except ValidationError as exc:
        raise ArcDataError(f"Invalid arc data: {exc}") from exc


def load_arcs(path_or_dash: str) -> list[Arc]:
    """Read arcs from a JSON file path or ``-`` for stdin."""

    with open_input(path_or_dash) as fh:
        raw = fh.read()
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ArcDataError(f"Arc data is not valid JSON: {exc}") from exc
    return parse_arcs(payload)


def expand_endpoints(
    arcs: Iterable[Arc],
    point_size: float,
    *,
    strict: bool = False,
    rejected: list[InvalidColorFormat] | None = None,
) -> list[DerivedPoint]:
    """Emit the start then end point of every arc, in input order.

    Arcs whose color does not parse are skipped and logged, or raise
    :class:`InvalidColorFormat` when ``strict`` is set.
    """

    points: list[DerivedPoint] = []
    for index, arc in enumerate(arcs):
        try:
            color = fade_color_for(arc.color)
        except InvalidColorFormat:
            err = InvalidColorFormat(arc.color, index=index, order=arc.order)
            if strict:
                raise err from None
            LOGGER.warning("Skipping arc: %s", err)
            if rejected is not None:
                rejected.append(err)
            continue
        points.append(
            DerivedPoint(point_size, arc.order, color, arc.start_lat, arc.start_lng)
        )
        points.append(
            DerivedPoint(point_size, arc.order, color, arc.end_lat, arc.end_lng)
        )
    return points


def dedupe_points(points: Sequence[DerivedPoint]) -> list[DerivedPoint]:
    """Keep the first point seen at each exact ``(lat, lng)``."""

    seen: set[tuple[float, float]] = set()
    unique: list[DerivedPoint] = []
    for point in points:
        if point.key in seen:
            continue
        seen.add(point.key)
        unique.append(point)
    return unique


def derive_points(
    arcs: Iterable[Arc],
    point_size: float = 1,
    *,
    strict: bool = False,
    rejected: list[InvalidColorFormat] | None = None,
) -> list[DerivedPoint]:
    points = expand_endpoints(arcs, point_size, strict=strict, rejected=rejected)
    unique = dedupe_points(points)
    LOGGER.debug(
        "Derived %d points (%d before dedupe)", len(unique), len(points)
    )
    return unique
