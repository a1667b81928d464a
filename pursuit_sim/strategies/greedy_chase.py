import math
from typing import Optional, Tuple

import numpy as np

from ..envs.world import WorldPoint, ORIGIN
from .base import ActorStrategy

EPS = 1e-12


class GreedyChaseStrategy(ActorStrategy):
    """
    Pursuer. Each step it intersects a capture circle of radius R = s*iteration
    around the reference origin with a circle of radius s around the evader,
    then takes one step toward the intersection point farther from itself.
    Falls back to a straight chase when the circles do not cross.
    """

    def __init__(self, x: float, y: float, step_length: float = 1.0,
                 origin: Optional[WorldPoint] = None):
        super().__init__(x, y, step_length)
        self.origin = origin if origin is not None else ORIGIN

    def candidates(self, other: WorldPoint, iteration: int) -> Optional[Tuple[WorldPoint, WorldPoint]]:
        """Both circle intersections, or None when the circles are disjoint/nested/concentric."""
        return self._intersections(*self._circles(other, iteration))

    def next(self, other: WorldPoint, iteration: int) -> WorldPoint:
        R, o, rel, d = self._circles(other, iteration)
        if d < EPS:
            return self._move_toward(WorldPoint(self.origin.x + R, self.origin.y))

        cands = self._intersections(R, o, rel, d)
        if cands is None:
            return self._move_toward(other)

        here = self.point.as_array()
        c1, c2 = cands
        d1 = float(np.sum((c1.as_array() - here)**2))
        d2 = float(np.sum((c2.as_array() - here)**2))
        # farther candidate wins, ties to the first
        return self._move_toward(c1 if d1 >= d2 else c2)

    def _circles(self, other: WorldPoint, iteration: int):
        R = self.step_length * max(1, iteration)
        o = self.origin.as_array()
        rel = other.as_array() - o
        return R, o, rel, float(np.linalg.norm(rel))

    def _intersections(self, R: float, o: np.ndarray, rel: np.ndarray, d: float):
        r = self.step_length
        if d < EPS or d > R + r or d < abs(R - r):
            return None

        a = (R*R - r*r + d*d) / (2.0*d)
        h = math.sqrt(max(0.0, R*R - a*a))
        u = rel / d
        n = np.array([-u[1], u[0]])
        p = o + a*u
        return WorldPoint.from_array(p + h*n), WorldPoint.from_array(p - h*n)

    def _move_toward(self, target: WorldPoint) -> WorldPoint:
        delta = target.as_array() - self.point.as_array()
        length = float(np.linalg.norm(delta))
        if length < EPS:
            return self.point
        self.point = WorldPoint.from_array(self.point.as_array() + delta * (self.step_length / length))
        return self.point
