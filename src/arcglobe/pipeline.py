# SPDX-License-Identifier: Apache-2.0
"""Orchestration of point derivation, layer building, and ring scheduling.

The pipeline owns the derived points and the current ring selection and
publishes both to a :class:`~arcglobe.renderers.base.GlobeBinding`. It runs on
a single asyncio event loop; only the ring timer suspends.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Sequence

import numpy as np

from arcglobe.config import GlobeConfig, resolve_config
from arcglobe.countries import CountryDataset
from arcglobe.errors import InvalidColorFormat
from arcglobe.layers import (
    ARC_STROKES,
    ArcLayer,
    GlobeMaterial,
    HexPolygonLayer,
    PointLayer,
)
from arcglobe.points import Arc, DerivedPoint, derive_points
from arcglobe.renderers.base import GlobeBinding
from arcglobe.rings import (
    RING_INTERVAL_SECONDS,
    RingScheduler,
    RingSelection,
    select_rings,
)

LOGGER = logging.getLogger(__name__)


def _pick_stroke(rng: np.random.Generator) -> float:
    # round(random * 2) favours the middle stroke, like Math.round in the browser
    return ARC_STROKES[int(rng.random() * 2 + 0.5)]


class GlobeDataPipeline:
    """Turn arcs into globe layers and keep the pulse rings fresh."""

    def __init__(
        self,
        globe_config: GlobeConfig | Mapping[str, Any] | None = None,
        *,
        countries: CountryDataset | None = None,
        binding: GlobeBinding | None = None,
        interval: float = RING_INTERVAL_SECONDS,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._rng = rng or np.random.default_rng(seed)
        self.config = resolve_config(globe_config)
        self.countries = countries or CountryDataset.pending()
        self.binding = binding
        self._arcs: Sequence[Arc] | None = None
        self._valid_arcs: tuple[Arc, ...] = ()
        self._points: tuple[DerivedPoint, ...] = ()
        self._arc_layer: ArcLayer | None = None
        self.rejected: list[InvalidColorFormat] = []
        self.ring_selection: RingSelection | None = None
        self._ring_listeners: list[Callable[[RingSelection], None]] = []
        self._scheduler = RingScheduler(
            self._publish_rings, interval=interval, rng=self._rng, sleep=sleep
        )

    # -- configuration -------------------------------------------------------

    def configure(
        self, globe_config: GlobeConfig | Mapping[str, Any] | None
    ) -> GlobeConfig:
        """Resolve ``globe_config`` against the defaults and adopt it."""

        resolved = resolve_config(globe_config)
        size_changed = resolved.point_size != self.config.point_size
        self.config = resolved
        if size_changed and self._arcs is not None:
            arcs, self._arcs = self._arcs, None
            self.on_arcs_changed(arcs)
        elif self._arcs is not None:
            self._arc_layer = self._build_arc_layer()
        return resolved

    def attach(self, binding: GlobeBinding | None) -> None:
        self.binding = binding

    def set_countries(self, dataset: CountryDataset) -> None:
        self.countries = dataset

    # -- data ----------------------------------------------------------------

    @property
    def arcs(self) -> tuple[Arc, ...]:
        """Arcs that survived color validation."""

        return self._valid_arcs

    @property
    def points(self) -> tuple[DerivedPoint, ...]:
        return self._points

    def on_arcs_changed(self, arcs: Sequence[Arc]) -> tuple[DerivedPoint, ...]:
        """Recompute points for a new arcs sequence (same object → cached)."""

        if arcs is self._arcs:
            return self._points
        rejected: list[InvalidColorFormat] = []
        points = derive_points(arcs, self.config.point_size, rejected=rejected)
        bad = {err.index for err in rejected}
        self._arcs = arcs
        self._valid_arcs = tuple(a for i, a in enumerate(arcs) if i not in bad)
        self._points = tuple(points)
        self.rejected = rejected
        self._arc_layer = self._build_arc_layer()
        if rejected:
            LOGGER.warning(
                "%d of %d arcs rejected for invalid colors", len(rejected), len(arcs)
            )
        self._scheduler.update(self._points, len(self._valid_arcs))
        return self._points

    # -- layers --------------------------------------------------------------

    @property
    def hex_polygon_layer(self) -> HexPolygonLayer:
        cfg = self.config
        return HexPolygonLayer(
            features=self.countries.features,
            color=cfg.polygon_color,
            show_atmosphere=cfg.show_atmosphere,
            atmosphere_color=cfg.atmosphere_color,
            atmosphere_altitude=cfg.atmosphere_altitude,
        )

    def _build_arc_layer(self) -> ArcLayer:
        arcs = self._valid_arcs
        return ArcLayer(
            arcs=arcs,
            strokes=tuple(_pick_stroke(self._rng) for _ in arcs),
            dash_initial_gaps=tuple(float(a.order) for a in arcs),
            dash_length=self.config.arc_length,
            dash_animate_time=self.config.arc_time,
        )

    @property
    def arc_layer(self) -> ArcLayer:
        if self._arc_layer is None:
            self._arc_layer = self._build_arc_layer()
        return self._arc_layer

    @property
    def point_layer(self) -> PointLayer:
        cfg = self.config
        return PointLayer(
            points=self._points,
            ring_max_radius=cfg.max_rings,
            ring_repeat_period=cfg.arc_time * cfg.arc_length / cfg.rings,
        )

    @property
    def material(self) -> GlobeMaterial:
        cfg = self.config
        return GlobeMaterial(
            color=cfg.globe_color,
            emissive=cfg.emissive,
            emissive_intensity=cfg.emissive_intensity,
            shininess=cfg.shininess,
        )

    # -- publishing ----------------------------------------------------------

    @property
    def ready(self) -> bool:
        return (
            self.binding is not None
            and self.countries.loaded
            and self._arcs is not None
        )

    def initialize(self) -> bool:
        """Push the static layers to the binding once every input is present."""

        if not self.ready:
            LOGGER.debug(
                "Deferring globe initialization (binding=%s, countries=%s, arcs=%s)",
                self.binding is not None,
                self.countries.loaded,
                self._arcs is not None,
            )
            return False
        binding = self.binding
        binding.set_hex_polygons(self.hex_polygon_layer)
        binding.set_arcs(self.arc_layer)
        binding.set_points(self.point_layer)
        binding.set_material(self.material)
        LOGGER.info(
            "Initialized globe with %d arcs, %d points, %d country features",
            len(self._valid_arcs),
            len(self._points),
            len(self.countries.features),
        )
        return True

    def sample_rings(self, *, tick: int | None = None) -> RingSelection:
        """Draw a ring selection for the current points without publishing it."""

        return select_rings(
            self._points,
            len(self._valid_arcs),
            tick=self._scheduler.ticks if tick is None else tick,
            rng=self._rng,
        )

    def add_ring_listener(self, listener: Callable[[RingSelection], None]) -> None:
        """Call ``listener`` with every published selection, after the binding."""

        self._ring_listeners.append(listener)

    def _publish_rings(self, selection: RingSelection) -> None:
        self.ring_selection = selection
        if self.binding is not None:
            self.binding.set_rings(selection)
        for listener in self._ring_listeners:
            listener(selection)

    # -- lifecycle -----------------------------------------------------------

    @property
    def active(self) -> bool:
        return self._scheduler.active

    @property
    def ticks(self) -> int:
        return self._scheduler.ticks

    def start(
        self,
        points: Sequence[DerivedPoint] | None = None,
        arcs: Sequence[Arc] | None = None,
    ) -> None:
        """Start (or restart) the ring timer; needs a running event loop."""

        if arcs is not None:
            derived = self.on_arcs_changed(arcs)
            points = derived if points is None else points
        if points is None:
            points = self._points
        self._scheduler.start(points, len(self._valid_arcs))

    def stop(self) -> None:
        self._scheduler.stop()

    def tick(self) -> RingSelection:
        """Sample and publish one ring selection immediately."""

        return self._scheduler.tick()

    async def __aenter__(self) -> GlobeDataPipeline:
        self.initialize()
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.stop()
