"""
Simulation: the four interactive sketches.

Each submodule (_oscillators, _landscape, _orbital, _three_body) provides one
sketch built on ``phaselab.core.system.Sketch``. Use _utils for visualization
(phase portrait, trajectories).
"""

from phaselab.simulation._landscape import LandscapeSketch
from phaselab.simulation._orbital import OrbitalSketch
from phaselab.simulation._oscillators import OscillatorSketch
from phaselab.simulation._three_body import (
    PhaseRun,
    ThreeBodySketch,
    pairwise_separations,
    population_statistics,
)
from phaselab.simulation._utils import (
    hsb_to_rgb,
    plot_phase_portrait,
    plot_trajectories,
)

__all__ = [
    "OscillatorSketch",
    "LandscapeSketch",
    "OrbitalSketch",
    "ThreeBodySketch",
    "PhaseRun",
    "pairwise_separations",
    "population_statistics",
    "hsb_to_rgb",
    "plot_phase_portrait",
    "plot_trajectories",
]
