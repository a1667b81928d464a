import math
from pursuit_sim.envs.simulation import Simulation, SimulationConfig

def test_sim_runs():
    sim = Simulation(SimulationConfig(seed=0, iterations_per_tick=5, evader_start=(5.0, 0.0)))
    sim.start()
    for _ in range(10):
        sim.tick()
    assert sim.iteration == 50
    assert math.isfinite(sim.current_distance)
    assert len(sim.pursuer_trail) == len(sim.evader_trail) == 51
