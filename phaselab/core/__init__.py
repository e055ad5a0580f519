"""Core: sketch orchestrator, entities, stores and trajectory buffers."""

from phaselab.core.component import Integrator, StepContext
from phaselab.core.entities import Ball, Oscillator, SimulatedBody, random_color
from phaselab.core.history import TrajectoryBuffer
from phaselab.core.signals import EntityRemoved, ParameterChanged
from phaselab.core.store import StateStore
from phaselab.core.system import BodySnapshot, FrameSnapshot, RunSnapshot, Sketch

__all__ = [
    "Integrator",
    "StepContext",
    "SimulatedBody",
    "Oscillator",
    "Ball",
    "random_color",
    "TrajectoryBuffer",
    "EntityRemoved",
    "ParameterChanged",
    "StateStore",
    "Sketch",
    "FrameSnapshot",
    "BodySnapshot",
    "RunSnapshot",
]
