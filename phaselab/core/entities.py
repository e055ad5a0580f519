"""Entity records shared by every sketch: bodies, oscillators, rolling balls."""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from phaselab.core.history import TrajectoryBuffer

# HSB triple: hue in [0, 360), saturation and brightness in [0, 100]
Color = Tuple[float, float, float]

DEFAULT_TRAJECTORY_CAPACITY = 200


def random_color(rng: np.random.Generator) -> Color:
    """Saturated, mid-brightness HSB colour, as used for every sketch's entities."""
    return (
        float(rng.uniform(0, 360)),
        float(rng.uniform(70, 100)),
        float(rng.uniform(30, 80)),
    )


def as_vector(value, name: str = "vector") -> np.ndarray:
    """Coerce a 2-element sequence to a float array of shape (2,)."""
    arr = np.asarray(value, dtype=float).reshape(-1)
    if arr.shape != (2,):
        raise ValueError(f"{name} must have 2 components, got shape {arr.shape}")
    return arr.copy()


@dataclass(eq=False)
class SimulatedBody:
    """
    A simulated entity with kinematic state and two trajectory buffers.

    ``trajectory`` holds positions (primary space), ``phase_trajectory`` holds
    the raw phase-space quantities; both advance one sample per tick.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    mass: float = 1.0
    size: float = 10.0
    color: Color = (0.0, 0.0, 100.0)
    fixed: bool = False
    trajectory: TrajectoryBuffer = field(
        default_factory=lambda: TrajectoryBuffer(DEFAULT_TRAJECTORY_CAPACITY)
    )
    phase_trajectory: TrajectoryBuffer = field(
        default_factory=lambda: TrajectoryBuffer(DEFAULT_TRAJECTORY_CAPACITY)
    )
    id: int = -1

    def __post_init__(self) -> None:
        self.position = as_vector(self.position, "position")
        self.velocity = as_vector(self.velocity, "velocity")
        if not self.mass > 0:
            raise ValueError(f"mass must be positive, got {self.mass}")
        if not self.size > 0:
            raise ValueError(f"size must be positive, got {self.size}")
        self.mass = float(self.mass)
        self.size = float(self.size)

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    def record(self, phase_sample: Tuple[float, float]) -> None:
        """Push the current position and one phase sample in lockstep."""
        self.trajectory.push(self.position.copy())
        self.phase_trajectory.push((float(phase_sample[0]), float(phase_sample[1])))

    def reset_trajectories(self) -> None:
        self.trajectory.clear()
        self.phase_trajectory.clear()


@dataclass(eq=False)
class Oscillator(SimulatedBody):
    """
    Harmonic oscillator moving along a line through the origin.

    Displacement and velocity are analytic functions of elapsed time; the
    ``position``/``velocity`` vectors are their projections on ``direction``.
    """

    amplitude: float = 100.0
    frequency: float = 0.5
    angle: float = 0.0
    phase: float = 0.0
    displacement: float = 0.0
    axial_velocity: float = 0.0

    @property
    def angular_frequency(self) -> float:
        return 2.0 * math.pi * self.frequency

    @property
    def direction(self) -> np.ndarray:
        return np.array([math.cos(self.angle), math.sin(self.angle)])


@dataclass(eq=False)
class Ball(SimulatedBody):
    """Ball rolling downhill on a toroidal height field."""

    start_position: Optional[np.ndarray] = None
    radial_distance: float = 0.0
    stuck: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.start_position is None:
            self.start_position = self.position.copy()
        else:
            self.start_position = as_vector(self.start_position, "start_position")

    def freeze(self) -> None:
        """Latch the terminal stuck state; there is no way back."""
        self.stuck = True
