import numpy as np
import matplotlib.pyplot as plt


def plot_trails(sim, show=True, path=None):
    """
    Pursuer/evader trails of a Simulation, obstacles as circles.
    Saves to `path` when given.
    """
    fig = plt.figure()
    ax = plt.gca()
    ax.set_aspect('equal', adjustable='datalim')
    p = np.array(sim.pursuer_trail, dtype=float).reshape(-1, 2)
    e = np.array(sim.evader_trail, dtype=float).reshape(-1, 2)
    ax.plot(p[:,0], p[:,1], label='pursuer')
    ax.plot(e[:,0], e[:,1], label='evader', linestyle='--')
    ax.plot([p[0,0]], [p[0,1]], marker='o')
    ax.plot([e[0,0]], [e[0,1]], marker='x')
    for c in sim.obstacles:
        ax.add_patch(plt.Circle((c.x, c.y), c.r, fill=False, linestyle=':'))
    ax.legend()
    plt.title(f"Pursuit–Evasion Trails (iter={sim.iteration}, min d={sim.min_distance:.3f})")
    if path is not None:
        fig.savefig(path)
    if show:
        plt.show()
    return fig
