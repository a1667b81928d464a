import math
from typing import Optional

import numpy as np

from ..envs.world import WorldPoint, rotate, point_at_unit_distance
from .base import ActorStrategy

EPS = 1e-12
ALIGN_TOL = 1e-3          # pursuer heading vs escape direction, 1 - cos
MAX_DEVIATION = 1.0       # world units off the escape line before a move is rejected
INT32_MAX = 2**31 - 1

RETARGET_MODES = ("direction", "countdown")


class RunAwayStrategy(ActorStrategy):
    """
    Evader.
    Commits to an escape direction pointing away from the pursuer and walks
    along it, rotated by a tiny offset angle. Each accepted move is snapped onto
    the escape line through the pursuer; a move that would drift more than
    MAX_DEVIATION off that line is rejected.

    retarget selects when the committed direction is recomputed:
      "direction" -- whenever the pursuer's own heading stops matching it
      "countdown" -- after a step budget derived from the current separation runs out
    """

    def __init__(self, x: float, y: float, step_length: float = 1.0,
                 rng: Optional[np.random.Generator] = None, retarget: str = "direction"):
        super().__init__(x, y, step_length)
        if retarget not in RETARGET_MODES:
            raise ValueError(f"retarget must be one of {RETARGET_MODES}, got {retarget!r}")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.retarget = retarget

        self._dir: Optional[np.ndarray] = None
        self._offset_dir: Optional[np.ndarray] = None
        self._steps_left = 0
        self._last_other: Optional[WorldPoint] = None

    @property
    def escape_direction(self) -> Optional[WorldPoint]:
        if self._dir is None:
            return None
        return WorldPoint.from_array(self._dir)

    def next(self, other: WorldPoint, iteration: int) -> WorldPoint:
        if iteration <= 1:
            return self._bootstrap(other, other)

        v = self.point.as_array() - other.as_array()
        length = float(np.linalg.norm(v))
        if length < EPS:
            # caught exactly; jump clear of the pursuer
            return self._bootstrap(self.point, other)

        if self._should_retarget(other):
            self._commit(v, length)

        prev = self.point
        cand = prev.as_array() + self._offset_dir * self.step_length
        proj, dev = self._project(cand, other)
        if dev <= MAX_DEVIATION:
            self.point = WorldPoint.from_array(proj)
        elif self.deviation(prev, other) > MAX_DEVIATION:
            # the line moved away from us too; snap onto it
            self.point = WorldPoint.from_array(proj)
        else:
            self.point = prev

        self._steps_left -= 1
        self._last_other = other
        return self.point

    def deviation(self, p: WorldPoint, other: WorldPoint) -> float:
        """Perpendicular distance of p from the escape line through other."""
        if self._dir is None:
            return 0.0
        return self._project(p.as_array(), other)[1]

    def _bootstrap(self, around: WorldPoint, other: WorldPoint) -> WorldPoint:
        self.point = point_at_unit_distance(around, self.rng)
        self._dir = None
        self._offset_dir = None
        self._steps_left = 0
        self._last_other = other
        return self.point

    def _should_retarget(self, other: WorldPoint) -> bool:
        if self._dir is None:
            return True
        if self.retarget == "countdown":
            return self._steps_left <= 0

        if self._last_other is None:
            return True
        motion = other.as_array() - self._last_other.as_array()
        m = float(np.linalg.norm(motion))
        if m < EPS:
            return True
        return float(np.dot(motion / m, self._dir)) < 1.0 - ALIGN_TOL

    def _commit(self, v: np.ndarray, length: float):
        self._dir = v / length
        # keeps len + add positive and bounded for any separation
        add = max(1, INT32_MAX - math.floor(length))
        delta = math.sin(1.0 / (length + add))
        self._offset_dir = rotate(self._dir, delta)
        self._steps_left = max(1, math.floor(length) + add)

    def _project(self, p: np.ndarray, other: WorldPoint):
        o = other.as_array()
        s = float(np.dot(p - o, self._dir))
        proj = o + self._dir * s
        return proj, float(np.linalg.norm(p - proj))
