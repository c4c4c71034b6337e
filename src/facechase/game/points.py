"""Collectible point spawning."""

from dataclasses import replace
import logging
import random
from typing import Optional

from facechase.game.models import Point, Vec2, Viewport

logger = logging.getLogger(__name__)


class PointSpawner:
    """
    Spawns collectibles at random positions inside an inset of the viewport.

    Every spawn bumps a counter that only goes up within a run. The spawn
    whose counter is a multiple of ``mega_every`` is a mega point.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        point_size: int = 30,
        inset: int = 50,
        mega_every: int = 10,
    ) -> None:
        self._rng = rng or random.Random()
        self.point_size = point_size
        self.inset = inset
        self.mega_every = mega_every
        self._counter = 0

    @property
    def counter(self) -> int:
        return self._counter

    def reset(self) -> None:
        self._counter = 0

    def is_mega(self, counter: int) -> bool:
        return counter > 0 and counter % self.mega_every == 0

    def spawn(self, viewport: Viewport) -> Point:
        self._counter += 1
        x = self._uniform(self.inset, viewport.width - self.inset - self.point_size)
        y = self._uniform(self.inset, viewport.height - self.inset - self.point_size)
        point = Point(pos=Vec2(x, y), counter=self._counter, mega=self.is_mega(self._counter))
        if point.mega:
            logger.debug(f"Mega point spawned (#{point.counter}) at ({x:.0f}, {y:.0f})")
        return point

    def fit(self, point: Point, viewport: Viewport) -> Point:
        """Pull ``point`` back inside the spawn range of a resized viewport.

        The point keeps its counter and mega flag; nothing is respawned.
        """
        x = self._clamp(point.pos.x, self.inset, viewport.width - self.inset - self.point_size)
        y = self._clamp(point.pos.y, self.inset, viewport.height - self.inset - self.point_size)
        if (x, y) == (point.pos.x, point.pos.y):
            return point
        logger.debug(f"Point #{point.counter} moved into view at ({x:.0f}, {y:.0f})")
        return replace(point, pos=Vec2(x, y))

    @staticmethod
    def _clamp(value: float, low: float, high: float) -> float:
        # Same collapse rule as _uniform: an empty range means the lower bound
        if high <= low:
            return float(low)
        return max(low, min(value, high))

    def _uniform(self, low: float, high: float) -> float:
        # Tiny viewports leave no room for the inset
        if high <= low:
            return float(low)
        return self._rng.uniform(low, high)
