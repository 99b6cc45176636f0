# SPDX-License-Identifier: Apache-2.0
"""Base interfaces for globe bindings and bundle-emitting renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from arcglobe.layers import ArcLayer, GlobeMaterial, HexPolygonLayer, PointLayer
    from arcglobe.rings import RingSelection


@dataclass(slots=True)
class InteractiveBundle:
    """Describes the output artifacts produced by a renderer."""

    output_dir: Path
    entry_point: Path
    assets: Sequence[Path] = field(default_factory=tuple)


class GlobeBinding(ABC):
    """Setter-style contract a rendering engine exposes to the pipeline."""

    @abstractmethod
    def set_hex_polygons(self, layer: HexPolygonLayer) -> None: ...

    @abstractmethod
    def set_arcs(self, layer: ArcLayer) -> None: ...

    @abstractmethod
    def set_points(self, layer: PointLayer) -> None: ...

    @abstractmethod
    def set_rings(self, selection: RingSelection) -> None: ...

    @abstractmethod
    def set_material(self, material: GlobeMaterial) -> None: ...


class InteractiveRenderer(GlobeBinding):
    """Binding that keeps the latest publication per channel and emits a bundle.

    Ring publications overwrite each other; only the newest selection is kept.
    """

    slug: str = "interactive"
    description: str = ""

    def __init__(self, **options: Any) -> None:
        self._options: dict[str, Any] = dict(options)
        self.hex_polygons: HexPolygonLayer | None = None
        self.arcs: ArcLayer | None = None
        self.points: PointLayer | None = None
        self.rings: RingSelection | None = None
        self.material: GlobeMaterial | None = None
        self.ring_publications = 0

    def configure(self, **options: Any) -> None:
        """Update renderer options prior to bundle generation."""

        self._options.update(options)

    def set_hex_polygons(self, layer: HexPolygonLayer) -> None:
        self.hex_polygons = layer

    def set_arcs(self, layer: ArcLayer) -> None:
        self.arcs = layer

    def set_points(self, layer: PointLayer) -> None:
        self.points = layer

    def set_rings(self, selection: RingSelection) -> None:
        self.rings = selection
        self.ring_publications += 1

    def set_material(self, material: GlobeMaterial) -> None:
        self.material = material

    @property
    def initialized(self) -> bool:
        return None not in (self.hex_polygons, self.arcs, self.points, self.material)

    @abstractmethod
    def build(self, *, output_dir: Path) -> InteractiveBundle:
        """Generate the bundle inside ``output_dir``."""

    def describe(self) -> dict[str, Any]:
        """Return metadata about the renderer for CLI help text."""

        return {"slug": self.slug, "description": self.description}
