# SPDX-License-Identifier: Apache-2.0
"""Command-line entry point: ``arcglobe points|rings|build``."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Callable, Sequence

from pydantic import ValidationError

from arcglobe.config import GlobeConfig, load_globe_config
from arcglobe.countries import load_countries
from arcglobe.errors import ArcGlobeError
from arcglobe.pipeline import GlobeDataPipeline
from arcglobe.points import derive_points, load_arcs
from arcglobe.renderers import create, slugs
from arcglobe.rings import RING_INTERVAL_SECONDS, RingSelection
from arcglobe.utils.cli_helpers import (
    configure_logging_from_env,
    verbosity_from_namespace,
)
from arcglobe.utils.io_utils import open_output


def _setup(ns: argparse.Namespace) -> GlobeConfig:
    verbosity_from_namespace(ns)
    configure_logging_from_env()
    if getattr(ns, "config", None):
        return load_globe_config(ns.config)
    return GlobeConfig()


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if not parsed > 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return parsed


def _write_json(path_or_dash: str, payload: Any) -> None:
    with open_output(path_or_dash) as fh:
        fh.write((json.dumps(payload, indent=2) + "\n").encode("utf-8"))


def cmd_points(ns: argparse.Namespace) -> int:
    """CLI: derive deduplicated endpoint points and write them as JSON."""

    config = _setup(ns)
    arcs = load_arcs(ns.arcs)
    rejected: list = []
    points = derive_points(
        arcs, config.point_size, strict=ns.strict, rejected=rejected
    )
    _write_json(
        ns.output,
        {
            "points": [p.to_dict() for p in points],
            "rejected": [
                {"index": err.index, "order": err.order, "color": err.color}
                for err in rejected
            ],
        },
    )
    return 0


async def _run_rings(
    pipeline: GlobeDataPipeline,
    *,
    count: int,
    emit: Callable[[RingSelection], None],
) -> None:
    done = asyncio.Event()

    def on_rings(selection: RingSelection) -> None:
        emit(selection)
        if pipeline.ticks >= count:
            done.set()

    pipeline.add_ring_listener(on_rings)
    async with pipeline:
        await done.wait()


def cmd_rings(ns: argparse.Namespace) -> int:
    """CLI: run the ring scheduler for ``--count`` ticks, one JSON line each."""

    config = _setup(ns)
    arcs = load_arcs(ns.arcs)
    pipeline = GlobeDataPipeline(config, interval=ns.interval, seed=ns.seed)
    pipeline.on_arcs_changed(arcs)
    if ns.count <= 0:
        return 0

    with open_output(ns.output) as fh:

        def emit(selection: RingSelection) -> None:
            line = json.dumps(selection.to_dict()) + "\n"
            fh.write(line.encode("utf-8"))
            fh.flush()

        asyncio.run(_run_rings(pipeline, count=ns.count, emit=emit))
    return 0


def cmd_build(ns: argparse.Namespace) -> int:
    """CLI: build a renderer bundle from arcs and a country dataset."""

    config = _setup(ns)
    if ns.target not in slugs():
        raise SystemExit(
            f"Unknown globe renderer '{ns.target}'. Available: {', '.join(slugs())}"
        )
    options: dict[str, Any] = {"globe_config": config}
    if ns.width is not None:
        options["width"] = ns.width
    if ns.height is not None:
        options["height"] = ns.height
    if ns.title:
        options["title"] = ns.title
    renderer = create(ns.target, **options)

    pipeline = GlobeDataPipeline(
        config,
        countries=load_countries(ns.countries),
        binding=renderer,
        seed=ns.seed,
    )
    pipeline.on_arcs_changed(load_arcs(ns.arcs))
    if not pipeline.initialize():
        raise SystemExit("Globe inputs incomplete; nothing to build")
    frames = [pipeline.sample_rings(tick=i) for i in range(max(ns.ring_frames, 0))]
    if frames:
        renderer.configure(ring_frames=frames)
    pipeline.tick()

    bundle = renderer.build(output_dir=Path(ns.output))
    logging.info("Generated globe bundle at %s", bundle.entry_point)
    if bundle.assets:
        logging.debug(
            "Bundle assets: %s",
            ", ".join(
                str(path.relative_to(bundle.output_dir)) for path in bundle.assets
            ),
        )
    return 0


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("arcs", help="Arc JSON file ('-' for stdin)")
    parser.add_argument("--config", help="Globe config (.json, .yml, .yaml)")
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose logging for this command"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Quiet logging for this command"
    )


def register_cli(subparsers: Any) -> None:
    """Register arcglobe subcommands under a provided subparsers object."""

    p_points = subparsers.add_parser(
        "points",
        help="Derive deduplicated endpoint points",
        description="Expand arcs into start/end points, dropping repeated coordinates.",
    )
    _add_common(p_points)
    p_points.add_argument("-o", "--output", default="-", help="Output path or '-'")
    p_points.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first arc with an invalid color instead of skipping it",
    )
    p_points.set_defaults(func=cmd_points)

    p_rings = subparsers.add_parser(
        "rings",
        help="Emit pulse-ring selections on a timer",
        description="Run the ring scheduler and write one JSON line per tick.",
    )
    _add_common(p_rings)
    p_rings.add_argument("-o", "--output", default="-", help="Output path or '-'")
    p_rings.add_argument(
        "--interval",
        type=_positive_float,
        default=RING_INTERVAL_SECONDS,
        help="Seconds between ticks (default: %(default)s)",
    )
    p_rings.add_argument(
        "--count", type=int, default=1, help="Number of ticks to emit"
    )
    p_rings.add_argument("--seed", type=int, help="Random seed for sampling")
    p_rings.set_defaults(func=cmd_rings)

    p_build = subparsers.add_parser(
        "build",
        help="Build a globe bundle",
        description="Publish the pipeline layers to a renderer and write its bundle.",
    )
    _add_common(p_build)
    p_build.add_argument(
        "--countries", required=True, help="Country-boundary GeoJSON file"
    )
    p_build.add_argument("--output", required=True, help="Bundle output directory")
    p_build.add_argument(
        "--target",
        default="three-globe",
        help="Renderer slug (default: %(default)s)",
    )
    p_build.add_argument(
        "--ring-frames",
        type=int,
        default=30,
        dest="ring_frames",
        help="Pre-sampled ring selections to cycle in the bundle",
    )
    p_build.add_argument("--seed", type=int, help="Random seed for sampling")
    p_build.add_argument("--width", type=int)
    p_build.add_argument("--height", type=int)
    p_build.add_argument("--title")
    p_build.set_defaults(func=cmd_build)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="arcglobe", description="Arc globe data pipeline"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    register_cli(subparsers)
    ns = parser.parse_args(argv)
    try:
        return int(ns.func(ns) or 0)
    except (ArcGlobeError, ValidationError, FileNotFoundError) as exc:
        raise SystemExit(f"arcglobe {ns.command}: {exc}") from exc


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
