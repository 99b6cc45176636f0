# SPDX-License-Identifier: Apache-2.0
"""Pulse-ring sampling and the periodic scheduler that republishes it.

Sampling (:func:`select_rings`) is pure; :class:`RingScheduler` only owns the
timer and hands each new :class:`RingSelection` to a publish callback.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

import numpy as np

from arcglobe.points import DerivedPoint

LOGGER = logging.getLogger(__name__)

RING_INTERVAL_SECONDS = 2.0
RING_FRACTION_NUMERATOR = 4
RING_FRACTION_DENOMINATOR = 5


@dataclass(frozen=True, slots=True)
class RingSelection:
    tick: int
    indices: tuple[int, ...]
    points: tuple[DerivedPoint, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "tick": self.tick,
            "indices": list(self.indices),
            "points": [p.to_dict() for p in self.points],
        }


def gen_random_indices(
    min_value: int,
    max_value: int,
    count: int,
    rng: np.random.Generator | None = None,
) -> list[int]:
    """Draw ``count`` distinct ints from ``[min_value, max_value)``.

    Values are drawn one at a time and duplicates rejected. ``count`` is
    clamped to the size of the range.
    """

    available = max(0, max_value - min_value)
    if count > available:
        LOGGER.debug(
            "Clamping ring sample of %d to %d available indices", count, available
        )
        count = available
    if count <= 0:
        return []
    rng = rng or np.random.default_rng()
    picked: list[int] = []
    seen: set[int] = set()
    while len(picked) < count:
        value = int(rng.integers(min_value, max_value))
        if value in seen:
            continue
        seen.add(value)
        picked.append(value)
    return picked


def ring_count(arc_count: int) -> int:
    return (arc_count * RING_FRACTION_NUMERATOR) // RING_FRACTION_DENOMINATOR


def select_rings(
    points: Sequence[DerivedPoint],
    arc_count: int,
    *,
    tick: int = 0,
    rng: np.random.Generator | None = None,
) -> RingSelection:
    """Pick the points that pulse on this tick.

    The sample size and the index range both come from the arc count; the
    indices are then used as positions in ``points``.
    """

    indices = gen_random_indices(0, arc_count, ring_count(arc_count), rng)
    wanted = set(indices)
    chosen = tuple(p for i, p in enumerate(points) if i in wanted)
    return RingSelection(tick=tick, indices=tuple(indices), points=chosen)


class RingScheduler:
    """Re-sample the ring selection every ``interval`` seconds.

    Idle until :meth:`start`; :meth:`stop` cancels the timer. Requires a
    running asyncio event loop.
    """

    def __init__(
        self,
        publish: Callable[[RingSelection], None],
        *,
        interval: float = RING_INTERVAL_SECONDS,
        rng: np.random.Generator | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError("ring interval must be positive")
        self._publish = publish
        self.interval = float(interval)
        self._rng = rng or np.random.default_rng()
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None
        self._generation = 0
        self._points: tuple[DerivedPoint, ...] = ()
        self._arc_count = 0
        self.ticks = 0
        self.latest: RingSelection | None = None

    @property
    def active(self) -> bool:
        return self._task is not None

    def start(self, points: Sequence[DerivedPoint], arc_count: int) -> None:
        """Begin ticking over ``points``; replaces any running timer."""

        loop = asyncio.get_running_loop()
        self.stop()
        self.update(points, arc_count)
        self._generation += 1
        self._task = loop.create_task(self._run(self._generation))
        self._task.add_done_callback(self._on_task_done)
        LOGGER.debug(
            "Ring scheduler started (%d points, %d arcs, every %.3gs)",
            len(self._points),
            self._arc_count,
            self.interval,
        )

    def update(self, points: Sequence[DerivedPoint], arc_count: int) -> None:
        """Swap the sampled points; a running timer uses them from its next tick."""

        self._points = tuple(points)
        self._arc_count = int(arc_count)

    def stop(self) -> None:
        if self._task is None:
            return
        self._generation += 1
        self._task.cancel()
        self._task = None
        LOGGER.debug("Ring scheduler stopped after %d ticks", self.ticks)

    def tick(self) -> RingSelection:
        """Sample a fresh selection and publish it."""

        selection = select_rings(
            self._points, self._arc_count, tick=self.ticks, rng=self._rng
        )
        self.ticks += 1
        self.latest = selection
        self._publish(selection)
        return selection

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        if self._task is task:
            self._task = None
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.error("Ring scheduler stopped unexpectedly", exc_info=exc)

    async def _run(self, generation: int) -> None:
        while True:
            await self._sleep(self.interval)
            if generation != self._generation:
                return
            try:
                self.tick()
            except Exception:
                # a failing consumer must not stop later ticks
                LOGGER.exception("Ring tick %d failed to publish", self.ticks - 1)
