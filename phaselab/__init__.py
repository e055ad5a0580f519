"""
phaselab: 2D physics sketches with real-time phase-space projection.
"""

__version__ = "0.1.0"

from phaselab.core.system import FrameSnapshot, Sketch
from phaselab.core.history import TrajectoryBuffer
from phaselab.mapping import PhaseSpaceMapper
from phaselab.simulation import LandscapeSketch, OrbitalSketch, OscillatorSketch, ThreeBodySketch

__all__ = [
    "__version__",
    "Sketch",
    "FrameSnapshot",
    "TrajectoryBuffer",
    "PhaseSpaceMapper",
    "OscillatorSketch",
    "LandscapeSketch",
    "OrbitalSketch",
    "ThreeBodySketch",
]
