import os, yaml, argparse, json
import numpy as np

from pursuit_sim.envs.simulation import Simulation, SimulationConfig
from pursuit_sim.utils.rollout import collect_run
from pursuit_sim.vis.plotting import plot_trails

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--until", type=int, default=None, help="override run.target_iteration")
    parser.add_argument("--retarget", type=str, choices=["direction", "countdown"], default=None)
    parser.add_argument("--run_dir", type=str, default="runs/sim")
    parser.add_argument("--render", action="store_true")
    args = parser.parse_args()

    with open(args.config, "r") as f:
        cfg = yaml.safe_load(f)

    sim_cfg = dict(cfg["sim"])
    sim_cfg["seed"] = cfg["seed"]
    if args.retarget is not None:
        sim_cfg["retarget"] = args.retarget
    sim = Simulation(SimulationConfig(**sim_cfg))
    for x, y, r in cfg.get("obstacles") or []:
        sim.add_obstacle(x, y, r)

    run_cfg = cfg["run"]
    target = args.until if args.until is not None else run_cfg["target_iteration"]
    log_every = max(1, int(run_cfg.get("log_every", 1)))

    os.makedirs(args.run_dir, exist_ok=True)
    log_path = os.path.join(args.run_dir, "log.jsonl")

    print(f"Running {sim!r} to iteration {target} ({sim.iterations_per_tick} per tick) ...")
    with open(log_path, "w") as logf:
        counter = {"ticks": 0}
        def on_tick(rec):
            counter["ticks"] += 1
            if counter["ticks"] % log_every == 0 or not sim.running:
                d = rec.to_dict()
                print(d)
                logf.write(json.dumps(d) + "\n"); logf.flush()
        log = collect_run(sim, target, on_tick=on_tick)

    print(f"iterations: {sim.iteration}  ticks: {log.length()}")
    print(f"final_distance: {sim.current_distance:.3f}  min_distance: {sim.min_distance:.3f}")
    print(f"median_tick_distance: {np.median(log.distances()):.3f}")
    print("Log saved:", log_path)

    if args.render:
        save = (cfg.get("plot") or {}).get("save")
        plot_trails(sim, path=os.path.join(args.run_dir, save) if save else None)

if __name__ == "__main__":
    main()
