# SPDX-License-Identifier: Apache-2.0
"""Renderer that records pipeline publications and writes them as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from arcglobe.config import resolve_config

from .base import InteractiveBundle, InteractiveRenderer
from .registry import register


@register
class JsonSnapshotRenderer(InteractiveRenderer):
    slug = "json-snapshot"
    description = "Writes the published globe layers to snapshot.json."

    def snapshot(self) -> dict[str, Any]:
        """Return the latest publication of every channel."""

        include_features = bool(self._options.get("include_features", True))
        return {
            "config": resolve_config(
                self._options.get("globe_config")
            ).to_camel_dict(),
            "hexPolygons": (
                self.hex_polygons.to_dict(include_features=include_features)
                if self.hex_polygons
                else None
            ),
            "arcs": self.arcs.to_dict() if self.arcs else None,
            "points": self.points.to_dict() if self.points else None,
            "material": self.material.to_dict() if self.material else None,
            "rings": self.rings.to_dict() if self.rings else None,
            "ringPublications": self.ring_publications,
        }

    def build(self, *, output_dir: Path) -> InteractiveBundle:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        snapshot_path = output_dir / "snapshot.json"
        indent = self._options.get("indent", 2)
        snapshot_path.write_text(
            json.dumps(self.snapshot(), indent=indent) + "\n", encoding="utf-8"
        )
        return InteractiveBundle(output_dir=output_dir, entry_point=snapshot_path)
