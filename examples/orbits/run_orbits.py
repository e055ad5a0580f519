"""
Two-body orbits: one circular and a few elliptical launches around the sun,
with the sketch configuration loaded from / saved to JSON.
"""

import logging
import sys
from pathlib import Path

# Add repository root to path
ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from phaselab.config import OrbitalConfig
from phaselab.io import load_sketch_config, save_config
from phaselab.simulation import OrbitalSketch, plot_phase_portrait, plot_trajectories

CONFIG_PATH = Path(__file__).with_name("orbital_config.json")


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    if CONFIG_PATH.exists():
        config = load_sketch_config(CONFIG_PATH, OrbitalConfig)
    else:
        config = OrbitalConfig(seed=5)
        save_config(config, CONFIG_PATH)

    sketch = OrbitalSketch(config)
    sketch.add_body((100.0, 0.0), circular=True)
    for r in (60.0, 140.0, 180.0):
        sketch.add_body((0.0, r), circular=False)

    snapshot = None
    for _ in range(1500):
        snapshot = sketch.tick()
    for body in snapshot.bodies:
        r, v = body.phase_samples[-1]
        print(f"Body #{body.id}: r={r:.1f}, speed={v:.3f}")

    try:
        import matplotlib.pyplot as plt

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
        plot_trajectories(snapshot, ax=ax1, title="Orbits")
        plot_phase_portrait(snapshot, ax=ax2, xlabel="distance", ylabel="speed")
        fig.tight_layout()
        plt.show()
    except ImportError:
        print("matplotlib not available, skip plots")


if __name__ == "__main__":
    main()
