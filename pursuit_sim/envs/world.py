import math
from typing import NamedTuple

import numpy as np


class WorldPoint(NamedTuple):
    x: float
    y: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @classmethod
    def from_array(cls, v) -> "WorldPoint":
        return cls(float(v[0]), float(v[1]))


class Circle(NamedTuple):
    """Static obstacle: center and radius. Stored by the simulation, not used for motion."""
    x: float
    y: float
    r: float


ORIGIN = WorldPoint(0.0, 0.0)


def distance(a: WorldPoint, b: WorldPoint) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def rotate(v: np.ndarray, angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([c*v[0] - s*v[1], s*v[0] + c*v[1]], dtype=float)


def point_at_unit_distance(p: WorldPoint, rng: np.random.Generator) -> WorldPoint:
    # uniform heading around p
    a = 2.0 * np.pi * rng.random()
    return WorldPoint(p.x + math.cos(a), p.y + math.sin(a))
