"""
Energy landscape: balls rolling downhill on a random toroidal height field.

Phase plot: radial distance from the drop point (x) against speed (y). The
distance axis grows with the farthest distance any ball has reached since the
landscape was created.
"""

import logging
from typing import Any, Dict, Optional

import numpy as np

from phaselab.config import LandscapeConfig
from phaselab.core.component import StepContext
from phaselab.core.entities import Ball, Color, random_color
from phaselab.core.history import TrajectoryBuffer
from phaselab.core.system import Sketch
from phaselab.mapping import DynamicRange, PhaseSpaceMapper, StaticRange
from phaselab.physics.library import GradientDescentIntegrator
from phaselab.physics.terrain import HeightField, generate_landscape

logger = logging.getLogger(__name__)


class LandscapeSketch(Sketch):
    """
    Gradient-descent balls on a height field.

    ``create_landscape`` must run before balls can be added; recreating the
    landscape discards every ball and resets the distance axis.
    """

    def __init__(
        self,
        config: Optional[LandscapeConfig] = None,
        height_field: Optional[HeightField] = None,
    ) -> None:
        """
        Args:
            config: landscape configuration
            height_field: use this terrain instead of generating one later
        """
        config = config or LandscapeConfig()
        config.validate()
        self.distance_range = DynamicRange(0.0, config.initial_max_distance)
        mapper = PhaseSpaceMapper(self.distance_range, StaticRange(0.0, config.phase_speed_max))
        integrator = GradientDescentIntegrator(config.critical_velocity, self.distance_range)
        super().__init__(integrator, mapper, config)
        self.height_field: Optional[HeightField] = height_field

    @property
    def ready(self) -> bool:
        return self.height_field is not None

    def create_landscape(self) -> HeightField:
        """Generate fresh terrain, dropping every ball and resetting the distance axis."""
        cfg: LandscapeConfig = self.config
        with self.lock:
            self.store.clear()
            self.distance_range.reset()
            self.height_field = generate_landscape(
                cfg.width,
                cfg.height,
                rng=self.rng,
                n_high=cfg.n_high,
                n_low=cfg.n_low,
                high_value=cfg.high_value,
                low_value=cfg.low_value,
                base=cfg.base_height,
                radius_range=cfg.spot_radius,
                exponent=cfg.exponent,
            )
            return self.height_field

    def use_landscape(self, height_field: HeightField) -> None:
        """Install a prepared terrain, with the same resets as create_landscape."""
        with self.lock:
            self.store.clear()
            self.distance_range.reset()
            self.height_field = height_field

    def add_ball(self, x: float, y: float, color: Optional[Color] = None) -> int:
        """Drop a ball at rest at (x, y) in field coordinates."""
        cfg: LandscapeConfig = self.config
        with self.lock:
            field = self.height_field
            if field is None:
                raise RuntimeError("No landscape: call create_landscape() before add_ball().")
            if not field.contains(x, y):
                raise ValueError(f"({x}, {y}) is outside the {field.width}x{field.height} field")
            ball = Ball(
                position=np.array([x, y], dtype=float),
                size=cfg.ball_size,
                color=color if color is not None else random_color(self.rng),
                trajectory=TrajectoryBuffer(cfg.trajectory_capacity),
                phase_trajectory=TrajectoryBuffer(cfg.trajectory_capacity),
            )
            entity_id = self._add(ball)
        logger.debug("Ball #%d dropped at (%.1f, %.1f)", entity_id, x, y)
        return entity_id

    def add_entity(self, **params: Any) -> int:
        return self.add_ball(**params)

    def _make_context(self, time: float, dt: float, bodies: list) -> StepContext:
        return StepContext(time=time, dt=dt, bodies=bodies, height_field=self.height_field)

    def _advance(self, dt: float) -> None:
        if self.height_field is None:
            return
        super()._advance(dt)

    def _on_clear(self) -> None:
        self.distance_range.reset()

    def stuck_count(self) -> int:
        return sum(1 for ball in self.store if ball.stuck)

    def _snapshot_extra(self) -> Dict[str, Any]:
        return {
            "max_radial_distance": self.distance_range.hi,
            "stuck": self.stuck_count(),
        }
