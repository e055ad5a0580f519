"""
Energy landscape: random terrain, a handful of balls dropped at random points,
run until every ball is stuck (or a frame limit), then plot.
"""

import logging
import sys
from pathlib import Path

import numpy as np

# Add repository root to path
ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from phaselab.config import LandscapeConfig
from phaselab.simulation import LandscapeSketch, plot_phase_portrait


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = LandscapeConfig(width=300, height=300, seed=11)
    sketch = LandscapeSketch(config)
    field = sketch.create_landscape()

    rng = np.random.default_rng(0)
    for _ in range(8):
        sketch.add_ball(rng.uniform(0, field.width), rng.uniform(0, field.height))

    snapshot = sketch.snapshot()
    for _ in range(2000):
        snapshot = sketch.tick()
        if snapshot.extra["stuck"] == len(snapshot.bodies):
            break
    print(
        f"Frames: {snapshot.frame}, stuck: {snapshot.extra['stuck']}/{len(snapshot.bodies)}, "
        f"max radial distance: {snapshot.extra['max_radial_distance']:.1f}"
    )

    try:
        import matplotlib.pyplot as plt

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
        ax1.imshow(field.brightness().T, cmap="gray", origin="upper")
        for body in snapshot.bodies:
            ax1.plot(body.trajectory[:, 0], body.trajectory[:, 1], ".", markersize=1)
        ax1.set_title("Terrain")
        plot_phase_portrait(snapshot, ax=ax2, xlabel="radial distance", ylabel="speed")
        fig.tight_layout()
        plt.show()
    except ImportError:
        print("matplotlib not available, skip plots")


if __name__ == "__main__":
    main()
