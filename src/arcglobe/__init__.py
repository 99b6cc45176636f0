# SPDX-License-Identifier: Apache-2.0
"""Geospatial arc → globe layer pipeline with animated pulse rings."""

from __future__ import annotations

from arcglobe.color import RGB, FadeColor, fade_color_for, hex_to_rgb, make_fade_color
from arcglobe.config import GlobeConfig, load_globe_config, resolve_config
from arcglobe.countries import CountryDataset, load_countries
from arcglobe.errors import (
    ArcDataError,
    ArcGlobeError,
    CountryDatasetError,
    GlobeConfigError,
    InvalidColorFormat,
    MissingCollaboratorData,
)
from arcglobe.pipeline import GlobeDataPipeline
from arcglobe.points import (
    Arc,
    DerivedPoint,
    dedupe_points,
    derive_points,
    expand_endpoints,
    load_arcs,
    parse_arcs,
)
from arcglobe.rings import (
    RingScheduler,
    RingSelection,
    gen_random_indices,
    ring_count,
    select_rings,
)

__version__ = "0.1.0"

__all__ = [
    "RGB",
    "Arc",
    "ArcDataError",
    "ArcGlobeError",
    "CountryDataset",
    "CountryDatasetError",
    "DerivedPoint",
    "FadeColor",
    "GlobeConfig",
    "GlobeConfigError",
    "GlobeDataPipeline",
    "InvalidColorFormat",
    "MissingCollaboratorData",
    "RingScheduler",
    "RingSelection",
    "dedupe_points",
    "derive_points",
    "expand_endpoints",
    "fade_color_for",
    "gen_random_indices",
    "hex_to_rgb",
    "load_arcs",
    "load_countries",
    "load_globe_config",
    "make_fade_color",
    "parse_arcs",
    "resolve_config",
    "ring_count",
    "select_rings",
]
