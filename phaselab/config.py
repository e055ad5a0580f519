"""
Sketch configurations.

One dataclass per sketch; defaults reproduce the constants of the interactive
sketches. Axis scaling values were calibrated by eye and are meant to be
tuned. ``to_dict``/``from_dict`` pair with ``phaselab.io.save_config`` /
``load_config`` for JSON files.
"""

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

C = TypeVar("C", bound="SketchConfig")


@dataclass
class SketchConfig:
    """Options shared by every sketch."""

    seed: Optional[int] = None
    trajectory_capacity: int = 200

    def validate(self) -> None:
        if self.trajectory_capacity <= 0:
            raise ValueError("trajectory_capacity must be positive")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls: Type[C], data: Dict[str, Any]) -> C:
        """Build from a dict, ignoring unknown keys; lists become tuples where a tuple is expected."""
        known = {f.name: f for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                continue
            if isinstance(value, list):
                value = tuple(value)
            kwargs[key] = value
        config = cls(**kwargs)
        config.validate()
        return config


def _check_bounds(name: str, bounds: Tuple[float, float]) -> None:
    lo, hi = bounds
    if not lo < hi:
        raise ValueError(f"{name} must satisfy min < max, got {bounds}")


@dataclass
class OscillatorConfig(SketchConfig):
    """
    Harmonic oscillators.

    ``*_bounds`` are the accepted ranges for live edits; ``random_*`` the
    ranges new oscillators are drawn from. The phase plot bounds derive from
    the edit bounds (see ``phase_bounds``).
    """

    trajectory_capacity: int = 500
    amplitude_bounds: Tuple[float, float] = (10.0, 200.0)
    frequency_bounds: Tuple[float, float] = (0.1, 1.0)
    angle_bounds: Tuple[float, float] = (0.0, 2 * math.pi)
    random_amplitude: Tuple[float, float] = (50.0, 150.0)
    random_frequency: Tuple[float, float] = (0.1, 1.0)
    dt: float = 1.0 / 60.0
    size: float = 10.0

    def validate(self) -> None:
        super().validate()
        for name in ("amplitude_bounds", "frequency_bounds", "angle_bounds",
                     "random_amplitude", "random_frequency"):
            _check_bounds(name, getattr(self, name))
        if self.amplitude_bounds[0] <= 0 or self.frequency_bounds[0] <= 0:
            raise ValueError("amplitude and frequency bounds must be positive")
        for random_name, bounds_name in (("random_amplitude", "amplitude_bounds"),
                                         ("random_frequency", "frequency_bounds")):
            lo, hi = getattr(self, random_name)
            b_lo, b_hi = getattr(self, bounds_name)
            if lo < b_lo or hi > b_hi:
                raise ValueError(f"{random_name} {(lo, hi)} must lie within {bounds_name} {(b_lo, b_hi)}")
        if self.dt <= 0:
            raise ValueError("dt must be positive")

    def phase_bounds(self) -> Tuple[float, float]:
        """(max |displacement|, max |velocity|) reachable within the edit bounds."""
        max_amplitude = self.amplitude_bounds[1]
        max_omega = 2 * math.pi * self.frequency_bounds[1]
        return max_amplitude, max_amplitude * max_omega


@dataclass
class LandscapeConfig(SketchConfig):
    """Energy landscape: terrain generation and the stuck threshold."""

    width: int = 400
    height: int = 400
    critical_velocity: float = 0.1
    n_high: int = 3
    n_low: int = 2
    high_value: float = 5.0
    low_value: float = -5.0
    base_height: float = 0.5
    spot_radius: Tuple[float, float] = (20.0, 40.0)
    exponent: float = 2.0
    initial_max_distance: float = 1.0
    phase_speed_max: float = 10.0
    ball_size: float = 10.0

    def validate(self) -> None:
        super().validate()
        if self.width < 3 or self.height < 3:
            raise ValueError("landscape must be at least 3x3")
        if self.critical_velocity < 0:
            raise ValueError("critical_velocity must be >= 0")
        _check_bounds("spot_radius", self.spot_radius)
        if self.spot_radius[0] <= 0:
            raise ValueError("spot_radius must be positive")


@dataclass
class OrbitalConfig(SketchConfig):
    """Bodies orbiting a fixed sun."""

    G: float = 6.0
    sun_position: Tuple[float, float] = (0.0, 0.0)
    sun_mass: float = 1000.0
    sun_size: float = 40.0
    body_mass: float = 5.0
    body_size: float = 8.0
    circular: bool = True
    speed_factor_range: Tuple[float, float] = (0.5, 1.5)
    angle_offset_range: Tuple[float, float] = (-math.pi / 6, math.pi / 6)
    distance_clamp: Tuple[float, float] = (100.0, 50000.0)
    dt: float = 1.0
    phase_distance_max: float = 400.0
    phase_speed_max: float = 10.0

    def validate(self) -> None:
        super().validate()
        if self.sun_mass <= 0 or self.body_mass <= 0:
            raise ValueError("masses must be positive")
        _check_bounds("distance_clamp", self.distance_clamp)
        if self.distance_clamp[0] <= 0:
            raise ValueError("distance_clamp lower bound must be positive")
        _check_bounds("speed_factor_range", self.speed_factor_range)


@dataclass
class ThreeBodyConfig(SketchConfig):
    """
    Three mutually attracting bodies.

    ``time_step`` scales every velocity/position update; ``substeps`` is the
    number of updates per tick.
    """

    G: float = 1.0
    n_bodies: int = 3
    spawn_box: Tuple[float, float, float, float] = (50.0, 50.0, 350.0, 550.0)
    speed_range: Tuple[float, float] = (-1.0, 1.0)
    mass_range: Tuple[float, float] = (5.0, 15.0)
    distance_clamp: Tuple[float, float] = (25.0, 50000.0)
    time_step: float = 1.0
    substeps: int = 1
    run_capacity: int = 500
    max_archived_runs: Optional[int] = None
    phase_distance_max: float = 400.0
    phase_speed_max: float = 5.0

    def validate(self) -> None:
        super().validate()
        if self.n_bodies < 2:
            raise ValueError("n_bodies must be >= 2")
        x0, y0, x1, y1 = self.spawn_box
        _check_bounds("spawn_box x", (x0, x1))
        _check_bounds("spawn_box y", (y0, y1))
        _check_bounds("mass_range", self.mass_range)
        if self.mass_range[0] <= 0:
            raise ValueError("mass_range must be positive")
        if self.time_step <= 0 or self.substeps < 1:
            raise ValueError("time_step must be positive and substeps >= 1")
        if self.run_capacity <= 0:
            raise ValueError("run_capacity must be positive")
