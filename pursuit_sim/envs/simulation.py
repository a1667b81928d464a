import math
from dataclasses import dataclass
from typing import Optional, List, Dict, Any, Tuple

import numpy as np

from .world import WorldPoint, Circle, ORIGIN, distance
from ..strategies.base import ActorStrategy
from ..strategies.greedy_chase import GreedyChaseStrategy
from ..strategies.run_away import RunAwayStrategy, RETARGET_MODES


@dataclass
class SimulationConfig:
    step_length: float = 1.0
    pursuer_step_length: Optional[float] = None
    iterations_per_tick: int = 1
    trail_stride: int = 1
    retarget: str = "direction"
    seed: Optional[int] = None
    pursuer_start: Tuple[float, float] = (0.0, 0.0)
    evader_start: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        if self.step_length <= 0.0:
            raise ValueError(f"step_length must be positive, got {self.step_length}")
        if self.pursuer_step_length is not None and self.pursuer_step_length <= 0.0:
            raise ValueError(f"pursuer_step_length must be positive, got {self.pursuer_step_length}")
        if self.iterations_per_tick < 1:
            raise ValueError(f"iterations_per_tick must be >= 1, got {self.iterations_per_tick}")
        if self.trail_stride < 1:
            raise ValueError(f"trail_stride must be >= 1, got {self.trail_stride}")
        if self.retarget not in RETARGET_MODES:
            raise ValueError(f"retarget must be one of {RETARGET_MODES}, got {self.retarget!r}")
        self.pursuer_start = tuple(float(c) for c in self.pursuer_start)
        self.evader_start = tuple(float(c) for c in self.evader_start)


class Simulation:
    """
    Pursuer/evader stepping loop.
    The pursuer moves first; the evader then reacts to the pursuer's new position.
    Tracks current and minimum separation and samples both trails every
    `trail_stride` iterations. A frame loop is expected to call tick() once per frame.
    """

    def __init__(self, cfg: Optional[SimulationConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        self.cfg = cfg if cfg is not None else SimulationConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.cfg.seed)
        self._iterations_per_tick = self.cfg.iterations_per_tick
        self._trail_stride = self.cfg.trail_stride

        self.obstacles: List[Circle] = []
        self.pursuer_trail: List[WorldPoint] = []
        self.evader_trail: List[WorldPoint] = []

        self.reset_all(WorldPoint(*self.cfg.pursuer_start), WorldPoint(*self.cfg.evader_start))

    # --- read-only state -------------------------------------------------

    @property
    def iteration(self) -> int:
        return self._iteration

    @property
    def running(self) -> bool:
        return self._running

    @property
    def stop_at_iteration(self) -> Optional[int]:
        return self._stop_at

    @property
    def current_distance(self) -> float:
        return self._current_distance

    @property
    def min_distance(self) -> float:
        return self._min_distance

    @property
    def pursuer(self) -> ActorStrategy:
        return self._pursuer

    @property
    def evader(self) -> ActorStrategy:
        return self._evader

    @property
    def pursuer_position(self) -> WorldPoint:
        return self._pursuer.point

    @property
    def evader_position(self) -> WorldPoint:
        return self._evader.point

    # --- tunables ----------------------------------------------------------

    @property
    def iterations_per_tick(self) -> int:
        return self._iterations_per_tick

    @iterations_per_tick.setter
    def iterations_per_tick(self, n: int):
        if n < 1:
            raise ValueError(f"iterations_per_tick must be >= 1, got {n}")
        self._iterations_per_tick = int(n)

    @property
    def trail_stride(self) -> int:
        return self._trail_stride

    @trail_stride.setter
    def trail_stride(self, n: int):
        if n < 1:
            raise ValueError(f"trail_stride must be >= 1, got {n}")
        self._trail_stride = int(n)

    # --- run control -------------------------------------------------------

    def start(self):
        self._running = True

    def pause(self):
        self._running = False

    def run_until(self, target: int):
        if target <= self._iteration:
            raise ValueError(f"run_until target {target} must be > current iteration {self._iteration}")
        self._stop_at = int(target)
        self._running = True

    def cancel_until(self):
        self._stop_at = None

    def step(self):
        self._iteration += 1
        it = self._iteration

        p = self._pursuer.next(self._evader.point, it)
        self._evader.next(p, it)

        self._current_distance = distance(self._pursuer.point, self._evader.point)
        if self._current_distance < self._min_distance:
            self._min_distance = self._current_distance

        if self._trail_stride <= 1 or it % self._trail_stride == 0:
            self._add_trail_point()

    def tick(self):
        if not self._running:
            return
        for _ in range(self._iterations_per_tick):
            if self._stop_at is not None and self._iteration >= self._stop_at:
                self._running = False
                break
            self.step()
            if self._stop_at is not None and self._iteration >= self._stop_at:
                self._running = False
                break

    def run_steps(self, n: int):
        if n < 0:
            raise ValueError(f"run_steps needs n >= 0, got {n}")
        for _ in range(n):
            self.step()

    # --- actors & world ----------------------------------------------------

    def set_pursuer_position(self, x: float, y: float):
        self._pursuer = self._make_pursuer(WorldPoint(x, y))
        self._add_trail_point()

    def set_evader_position(self, x: float, y: float):
        self._evader = self._make_evader(WorldPoint(x, y))
        self._add_trail_point()

    def add_obstacle(self, x: float, y: float, r: float):
        self.obstacles.append(Circle(float(x), float(y), float(r)))

    def clear_obstacles(self):
        self.obstacles.clear()

    def reset_trails(self):
        self.pursuer_trail.clear()
        self.evader_trail.clear()
        self._add_trail_point()

    def reset_all(self, pursuer_seed: Optional[WorldPoint] = None,
                  evader_seed: Optional[WorldPoint] = None):
        self._running = False
        self._iteration = 0
        self._stop_at = None
        self._min_distance = math.inf

        self._pursuer = self._make_pursuer(pursuer_seed if pursuer_seed is not None else ORIGIN)
        self._evader = self._make_evader(evader_seed if evader_seed is not None else ORIGIN)

        self.pursuer_trail.clear()
        self.evader_trail.clear()
        self._current_distance = distance(self._pursuer.point, self._evader.point)
        self._add_trail_point()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "iteration": self._iteration,
            "running": self._running,
            "stop_at_iteration": self._stop_at,
            "pursuer": tuple(self._pursuer.point),
            "evader": tuple(self._evader.point),
            "current_distance": self._current_distance,
            "min_distance": self._min_distance,
            "trail_length": len(self.pursuer_trail),
            "obstacles": len(self.obstacles),
        }

    def __repr__(self):
        return (f"Simulation(pursuer={self._pursuer!r}, evader={self._evader!r}, "
                f"iteration={self._iteration}, retarget={self.cfg.retarget!r})")

    def _make_pursuer(self, p: WorldPoint) -> ActorStrategy:
        step = self.cfg.pursuer_step_length
        return GreedyChaseStrategy(p.x, p.y, step_length=step if step is not None else self.cfg.step_length)

    def _make_evader(self, p: WorldPoint) -> ActorStrategy:
        return RunAwayStrategy(p.x, p.y, step_length=self.cfg.step_length,
                               rng=self.rng, retarget=self.cfg.retarget)

    def _add_trail_point(self):
        self.pursuer_trail.append(self._pursuer.point)
        self.evader_trail.append(self._evader.point)
