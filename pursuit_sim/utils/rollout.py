from dataclasses import dataclass, asdict
from typing import Callable, List, Optional

from ..envs.simulation import Simulation


@dataclass
class TickRecord:
    iteration: int
    pursuer_x: float
    pursuer_y: float
    evader_x: float
    evader_y: float
    distance: float
    min_distance: float

    def to_dict(self):
        return asdict(self)


class RunLog:
    def __init__(self):
        self.records: List[TickRecord] = []

    def add(self, rec: TickRecord):
        self.records.append(rec)

    def length(self):
        return len(self.records)

    def distances(self) -> List[float]:
        return [r.distance for r in self.records]


def record_of(sim: Simulation) -> TickRecord:
    p, e = sim.pursuer_position, sim.evader_position
    return TickRecord(iteration=sim.iteration,
                      pursuer_x=p.x, pursuer_y=p.y,
                      evader_x=e.x, evader_y=e.y,
                      distance=sim.current_distance,
                      min_distance=sim.min_distance)


def collect_run(sim: Simulation, target: int, on_tick: Optional[Callable[[TickRecord], None]] = None,
                max_ticks: Optional[int] = None) -> RunLog:
    """
    Drive sim with tick() until it reaches `target`, one record per tick.
    on_tick(record) is called after every tick.
    """
    log = RunLog()
    sim.run_until(target)
    ticks = 0
    while sim.running:
        sim.tick()
        rec = record_of(sim)
        log.add(rec)
        if on_tick is not None:
            on_tick(rec)
        ticks += 1
        if max_ticks is not None and ticks >= max_ticks:
            sim.pause()
    return log
