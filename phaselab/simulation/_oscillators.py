"""
Harmonic oscillators: independent 1D oscillators along lines through the origin.

Displacement and velocity are closed-form functions of the sketch's logical
clock, so the phase portrait is the exact ellipse x^2/A^2 + (v/(wA))^2 = 1.
Parameters can be edited live; an edit clears the trajectories but keeps the
phase offset.
"""

import logging
import math
from typing import Any, Optional

from phaselab.config import OscillatorConfig
from phaselab.core.entities import Color, Oscillator, random_color
from phaselab.core.history import TrajectoryBuffer
from phaselab.core.signals import ParameterChanged
from phaselab.core.system import Sketch
from phaselab.mapping import PhaseSpaceMapper, symmetric_range
from phaselab.physics.library import AnalyticOscillatorIntegrator

logger = logging.getLogger(__name__)

EDITABLE_PARAMETERS = ("amplitude", "frequency", "angle")


class OscillatorSketch(Sketch):
    """
    Collection of analytic oscillators.

    Phase plot: displacement on x, velocity on y, with static bounds derived
    from the largest amplitude and frequency the edit bounds allow.
    """

    default_dt = 1.0 / 60.0

    def __init__(self, config: Optional[OscillatorConfig] = None) -> None:
        config = config or OscillatorConfig()
        config.validate()
        max_displacement, max_velocity = config.phase_bounds()
        mapper = PhaseSpaceMapper(symmetric_range(max_displacement), symmetric_range(max_velocity))
        super().__init__(AnalyticOscillatorIntegrator(), mapper, config)
        self.default_dt = config.dt

    def add_oscillator(
        self,
        amplitude: Optional[float] = None,
        frequency: Optional[float] = None,
        angle: Optional[float] = None,
        phase: Optional[float] = None,
        color: Optional[Color] = None,
    ) -> int:
        """
        Add an oscillator; omitted parameters are drawn at random.

        Returns:
            The new oscillator's id (use it with set_parameter / remove_entity).
        """
        cfg: OscillatorConfig = self.config
        with self.lock:
            rng = self.rng
            values = {
                "angle": float(rng.uniform(*cfg.angle_bounds)) if angle is None else angle,
                "amplitude": float(rng.uniform(*cfg.random_amplitude)) if amplitude is None else amplitude,
                "frequency": float(rng.uniform(*cfg.random_frequency)) if frequency is None else frequency,
            }
            for name, value in values.items():
                self._check_parameter(name, value)
            oscillator = Oscillator(
                size=cfg.size,
                color=color if color is not None else random_color(rng),
                amplitude=float(values["amplitude"]),
                frequency=float(values["frequency"]),
                angle=float(values["angle"]),
                phase=float(rng.uniform(0, 2 * math.pi)) if phase is None else float(phase),
                trajectory=TrajectoryBuffer(cfg.trajectory_capacity),
                phase_trajectory=TrajectoryBuffer(cfg.trajectory_capacity),
            )
            entity_id = self._add(oscillator)
        logger.debug(
            "Oscillator #%d: A=%.1f f=%.2fHz angle=%.2f",
            entity_id, oscillator.amplitude, oscillator.frequency, oscillator.angle,
        )
        return entity_id

    def add_entity(self, **params: Any) -> int:
        return self.add_oscillator(**params)

    def _check_parameter(self, name: str, value: float) -> None:
        if name not in EDITABLE_PARAMETERS:
            raise ValueError(f"Unknown oscillator parameter {name!r}; expected one of {EDITABLE_PARAMETERS}")
        lo, hi = getattr(self.config, f"{name}_bounds")
        if not lo <= value <= hi:
            raise ValueError(f"{name}={value} outside [{lo}, {hi}]")

    def set_parameter(self, entity_id: int, name: str, value: float) -> None:
        """
        Live-edit ``amplitude``, ``frequency`` or ``angle``.

        The change applies immediately (angular frequency and direction are
        derived on every step), both trajectories restart empty and the phase
        offset is kept.
        """
        value = float(value)
        with self.lock:
            self._check_parameter(name, value)
            oscillator: Oscillator = self.store.get(entity_id)
            setattr(oscillator, name, value)
            oscillator.reset_trajectories()
            self.store.emit(ParameterChanged(entity_id, name, value))
        logger.debug("Oscillator #%d: %s -> %s", entity_id, name, value)

    def remove_entity(self, entity_id: int) -> None:
        """Remove one oscillator (listeners get EntityRemoved to drop its controls)."""
        with self.lock:
            self.store.remove(entity_id)


if __name__ == "__main__":
    # Three oscillators for a few seconds, then their phase portrait.
    from phaselab.simulation._utils import plot_phase_portrait

    logging.basicConfig(level=logging.DEBUG)
    sketch = OscillatorSketch(OscillatorConfig(seed=3))
    for _ in range(3):
        sketch.add_oscillator()
    snapshot = None
    for _ in range(300):
        snapshot = sketch.tick()

    try:
        import matplotlib.pyplot as plt

        plot_phase_portrait(snapshot, xlabel="displacement", ylabel="velocity", title="Oscillators")
        plt.tight_layout()
        plt.show()
    except ImportError:
        print("matplotlib not available, skip plots")
