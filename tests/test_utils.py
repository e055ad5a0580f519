"""Tests for the plotting helpers (skipped without matplotlib)."""

import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from phaselab.config import OrbitalConfig, ThreeBodyConfig
from phaselab.simulation import (
    OrbitalSketch,
    ThreeBodySketch,
    hsb_to_rgb,
    plot_phase_portrait,
    plot_trajectories,
)


def test_hsb_to_rgb() -> None:
    assert hsb_to_rgb((0.0, 100.0, 100.0)) == pytest.approx((1.0, 0.0, 0.0))
    assert hsb_to_rgb((120.0, 100.0, 50.0)) == pytest.approx((0.0, 0.5, 0.0))
    assert hsb_to_rgb((360.0, 0.0, 100.0)) == pytest.approx((1.0, 1.0, 1.0))


def test_plot_orbital_snapshot() -> None:
    import matplotlib.pyplot as plt

    sketch = OrbitalSketch(OrbitalConfig(seed=0))
    sketch.add_body((100.0, 0.0))
    for _ in range(20):
        snapshot = sketch.tick()
    fig, (ax1, ax2) = plt.subplots(1, 2)
    assert plot_trajectories(snapshot, ax=ax1) is ax1
    assert plot_phase_portrait(snapshot, ax=ax2, mapped=True) is ax2
    # One trajectory line per body plus the sun
    assert len(ax1.lines) >= 3
    plt.close(fig)


def test_plot_three_body_runs() -> None:
    import matplotlib.pyplot as plt

    sketch = ThreeBodySketch(ThreeBodyConfig(seed=0))
    sketch.restart_batch()
    for _ in range(5):
        sketch.tick()
    sketch.restart_batch()
    snapshot = sketch.tick()
    ax = plot_phase_portrait(snapshot, title="runs")
    assert ax.get_title() == "runs"
    plt.close(ax.figure)
