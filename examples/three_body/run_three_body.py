"""
Three-body chaos: several random batches, each archived when the next starts,
then mean separation vs mean speed for all of them.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add repository root to path
ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from phaselab.config import ThreeBodyConfig
from phaselab.simulation import ThreeBodySketch, plot_phase_portrait, plot_trajectories


def main() -> None:
    parser = argparse.ArgumentParser(description="Three-body phase space")
    parser.add_argument("--runs", type=int, default=4, help="number of batches")
    parser.add_argument("--frames", type=int, default=600, help="frames per batch")
    parser.add_argument("--substeps", type=int, default=2, help="updates per frame")
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--save", type=str, default="", help="save figure instead of showing it")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    sketch = ThreeBodySketch(ThreeBodyConfig(seed=args.seed, substeps=args.substeps))
    snapshot = None
    for _ in range(args.runs):
        sketch.restart_batch()
        for _ in range(args.frames):
            snapshot = sketch.tick()
    print(f"Frames: {snapshot.frame}, archived runs: {len(sketch.history)}")

    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib not available, skip plots")
        return
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
    plot_trajectories(snapshot, ax=ax1, title="Bodies")
    plot_phase_portrait(snapshot, ax=ax2, xlabel="mean separation", ylabel="mean speed", title="Phase space")
    fig.tight_layout()
    if args.save:
        fig.savefig(args.save, dpi=120)
        print(f"Saved {args.save}")
    else:
        plt.show()


if __name__ == "__main__":
    main()
