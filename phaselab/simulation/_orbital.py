"""
Two-body orbits: light bodies around a fixed, non-moving sun.

Phase plot: distance to the sun (x) against speed (y), with fixed axis bounds
calibrated by eye (distance 0..phase_distance_max, speed 0..phase_speed_max).
"""

import logging
from typing import Any, Dict, Optional, Sequence

import numpy as np

from phaselab.config import OrbitalConfig
from phaselab.core.component import StepContext
from phaselab.core.entities import Color, SimulatedBody, as_vector, random_color
from phaselab.core.history import TrajectoryBuffer
from phaselab.core.system import Sketch
from phaselab.mapping import PhaseSpaceMapper, StaticRange
from phaselab.physics.gravity import circular_speed, orbital_velocity
from phaselab.physics.library import CentralGravityIntegrator

logger = logging.getLogger(__name__)


class OrbitalSketch(Sketch):
    """Bodies launched around a fixed attractor, one semi-implicit Euler step per tick."""

    def __init__(self, config: Optional[OrbitalConfig] = None) -> None:
        config = config or OrbitalConfig()
        config.validate()
        mapper = PhaseSpaceMapper(
            StaticRange(0.0, config.phase_distance_max),
            StaticRange(0.0, config.phase_speed_max),
        )
        integrator = CentralGravityIntegrator(config.G, tuple(config.distance_clamp))
        super().__init__(integrator, mapper, config)
        self.default_dt = config.dt
        self.sun = SimulatedBody(
            position=np.asarray(config.sun_position, dtype=float),
            mass=config.sun_mass,
            size=config.sun_size,
            color=(50.0, 100.0, 100.0),
            fixed=True,
        )

    def add_body(
        self,
        position: Sequence[float],
        circular: Optional[bool] = None,
        velocity: Optional[Sequence[float]] = None,
        color: Optional[Color] = None,
    ) -> int:
        """
        Launch a body from ``position``.

        Args:
            position: launch point in simulation coordinates
            circular: circular orbit (True) or randomized ellipse (False);
                default from config
            velocity: explicit launch velocity, overrides ``circular``
            color: HSB colour (random if omitted)

        Returns:
            The body's id.
        """
        cfg: OrbitalConfig = self.config
        pos = as_vector(position, "position")
        if np.allclose(pos, self.sun.position):
            raise ValueError("Cannot launch a body from the sun's position")
        circular = cfg.circular if circular is None else circular
        with self.lock:
            if velocity is not None:
                vel = as_vector(velocity, "velocity")
            elif circular:
                vel = orbital_velocity(pos, self.sun.position, cfg.G, self.sun.mass)
            else:
                vel = orbital_velocity(
                    pos,
                    self.sun.position,
                    cfg.G,
                    self.sun.mass,
                    speed_factor=float(self.rng.uniform(*cfg.speed_factor_range)),
                    angle_offset=float(self.rng.uniform(*cfg.angle_offset_range)),
                )
            body = SimulatedBody(
                position=pos,
                velocity=vel,
                mass=cfg.body_mass,
                size=cfg.body_size,
                color=color if color is not None else random_color(self.rng),
                trajectory=TrajectoryBuffer(cfg.trajectory_capacity),
                phase_trajectory=TrajectoryBuffer(cfg.trajectory_capacity),
            )
            entity_id = self._add(body)
        logger.debug(
            "Body #%d at r=%.1f, speed %.3f (circular speed %.3f)",
            entity_id,
            float(np.linalg.norm(pos - self.sun.position)),
            float(np.linalg.norm(vel)),
            circular_speed(cfg.G, self.sun.mass, float(np.linalg.norm(pos - self.sun.position))),
        )
        return entity_id

    def add_entity(self, **params: Any) -> int:
        return self.add_body(**params)

    def _make_context(self, time: float, dt: float, bodies: list) -> StepContext:
        return StepContext(time=time, dt=dt, bodies=bodies, attractor=self.sun)

    def _snapshot_extra(self) -> Dict[str, Any]:
        return {"sun": self._body_snapshot(self.sun)}
