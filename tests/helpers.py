from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from arcglobe.points import Arc


def project_root(start: Path | None = None) -> Path:
    """Return the repository root by walking up to find pyproject.toml."""
    here = (start or Path(__file__)).resolve()
    for anc in [here, *here.parents]:
        if (anc / "pyproject.toml").exists():
            return anc
    return here.parents[-1] if here.parents else here


def make_arc(
    order: int,
    start: tuple[float, float],
    end: tuple[float, float],
    *,
    color: str = "#ff0000",
    alt: float = 0.2,
) -> Arc:
    return Arc(
        order=order,
        start_lat=start[0],
        start_lng=start[1],
        end_lat=end[0],
        end_lng=end[1],
        arc_alt=alt,
        color=color,
    )


SAMPLE_ARCS: list[dict[str, Any]] = [
    {
        "order": 0,
        "startLat": 0,
        "startLng": 0,
        "endLat": 10,
        "endLng": 10,
        "arcAlt": 0.2,
        "color": "#ff0000",
    },
    {
        "order": 1,
        "startLat": 0,
        "startLng": 0,
        "endLat": 20,
        "endLng": 20,
        "arcAlt": 0.3,
        "color": "#00ff00",
    },
]


def write_arcs(path: Path, arcs: list[dict[str, Any]] | None = None) -> Path:
    path.write_text(json.dumps(SAMPLE_ARCS if arcs is None else arcs), encoding="utf-8")
    return path


def write_countries(path: Path) -> Path:
    payload = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Square"},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]],
                },
            }
        ],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class ManualClock:
    """Stand-in for ``asyncio.sleep`` whose sleeps end only on :meth:`advance`."""

    def __init__(self) -> None:
        self._waiters: list[asyncio.Future[None]] = []
        self.delays: list[float] = []

    async def sleep(self, delay: float) -> None:
        self.delays.append(delay)
        fut = asyncio.get_running_loop().create_future()
        self._waiters.append(fut)
        await fut

    def release(self) -> None:
        waiters, self._waiters = self._waiters, []
        for fut in waiters:
            if not fut.done():
                fut.set_result(None)

    async def settle(self) -> None:
        await asyncio.sleep(0)

    async def advance(self, periods: int = 1) -> None:
        for _ in range(periods):
            await self.settle()
            self.release()
            await self.settle()
