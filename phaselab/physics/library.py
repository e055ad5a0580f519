"""
Ready-made step laws, one per sketch.

Subclasses of Integrator with step() already implemented; sketches only pick
the parameters. Every law appends one position and one raw phase sample per
call.
"""

import math
from typing import Any, Dict, Optional

import numpy as np

from phaselab.core.component import Integrator, StepContext
from phaselab.core.entities import Ball, Oscillator, SimulatedBody
from phaselab.mapping.ranges import StaticRange
from phaselab.physics.gravity import (
    ORBITAL_CLAMP,
    THREE_BODY_CLAMP,
    DistanceClamp,
    gravitational_acceleration,
    net_acceleration,
)
from phaselab.physics.integrators import semi_implicit_euler_step
from phaselab.physics.terrain import HeightField, toroidal_distance


class AnalyticOscillatorIntegrator(Integrator):
    """
    Closed-form harmonic motion: nothing is integrated.

    displacement = A cos(wt + phi), velocity = -wA sin(wt + phi), both computed
    from the absolute elapsed time in ``context.time``. Phase samples are
    (displacement, velocity).
    """

    def step(self, entity: SimulatedBody, context: StepContext) -> None:
        if not isinstance(entity, Oscillator):
            raise TypeError(f"expected Oscillator, got {type(entity).__name__}")
        w = entity.angular_frequency
        arg = w * context.time + entity.phase
        entity.displacement = entity.amplitude * math.cos(arg)
        entity.axial_velocity = -w * entity.amplitude * math.sin(arg)
        direction = entity.direction
        entity.position = direction * entity.displacement
        entity.velocity = direction * entity.axial_velocity
        entity.record((entity.displacement, entity.axial_velocity))


class GradientDescentIntegrator(Integrator):
    """
    Ball rolling downhill: a = -grad h, v += a, x += v, then wrap.

    Once the speed after an update falls below ``critical_velocity`` the ball
    is stuck and every later call is a no-op.
    """

    def __init__(
        self,
        critical_velocity: float = 0.1,
        distance_range: Optional[StaticRange] = None,
    ) -> None:
        """
        Args:
            critical_velocity: speed threshold for the stuck latch.
            distance_range: range fed with every radial distance (e.g. a DynamicRange).
        """
        self.critical_velocity = float(critical_velocity)
        self.distance_range = distance_range

    def step(self, entity: SimulatedBody, context: StepContext) -> None:
        if not isinstance(entity, Ball):
            raise TypeError(f"expected Ball, got {type(entity).__name__}")
        if entity.stuck:
            return
        terrain = context.height_field
        if not isinstance(terrain, HeightField):
            raise RuntimeError("GradientDescentIntegrator needs context.height_field")

        acceleration = -terrain.gradient(entity.position[0], entity.position[1])
        position, velocity = semi_implicit_euler_step(entity.position, entity.velocity, acceleration)
        entity.position = terrain.wrap(position)
        entity.velocity = velocity

        entity.radial_distance = toroidal_distance(entity.position, entity.start_position, terrain.shape)
        if self.distance_range is not None:
            self.distance_range.observe(entity.radial_distance)

        speed = entity.speed
        if speed < self.critical_velocity:
            entity.freeze()
        entity.record((entity.radial_distance, speed))

    def state_dict(self) -> Dict[str, Any]:
        return {"critical_velocity": self.critical_velocity}


class CentralGravityIntegrator(Integrator):
    """
    Two-body gravity around a fixed attractor (the "sun").

    a = G M / clamp(d^2) towards the attractor, semi-implicit Euler.
    Phase samples are (distance to attractor, speed).
    """

    def __init__(self, G: float = 6.0, clamp: DistanceClamp = ORBITAL_CLAMP) -> None:
        self.G = float(G)
        self.clamp = clamp

    def step(self, entity: SimulatedBody, context: StepContext) -> None:
        sun = context.attractor
        if sun is None:
            raise RuntimeError("CentralGravityIntegrator needs context.attractor")
        if entity.fixed:
            return
        acceleration = gravitational_acceleration(
            entity.position, sun.position, sun.mass, self.G, self.clamp
        )
        entity.position, entity.velocity = semi_implicit_euler_step(
            entity.position, entity.velocity, acceleration, context.dt
        )
        r = float(np.linalg.norm(entity.position - sun.position))
        entity.record((r, entity.speed))

    def state_dict(self) -> Dict[str, Any]:
        return {"G": self.G, "clamp": self.clamp}


class NBodyGravityIntegrator(Integrator):
    """
    Mutual gravity between every body in ``context.bodies``.

    Bodies move one after another: each one sums the pulls of the others at
    their current positions, so a body updated later in the sub-step sees the
    bodies already moved before it. Updates are v += a*ts, x += v*ts with ts
    the ``context.time_step``. Phase samples are (distance to the centre of
    mass, speed); the sketch tracks population statistics separately.
    """

    def __init__(self, G: float = 1.0, clamp: DistanceClamp = THREE_BODY_CLAMP) -> None:
        self.G = float(G)
        self.clamp = clamp

    def step(self, entity: SimulatedBody, context: StepContext) -> None:
        others = [b for b in context.bodies if b is not entity]
        acceleration = net_acceleration(
            entity.position,
            [b.position for b in others],
            [b.mass for b in others],
            self.G,
            self.clamp,
        )
        entity.position, entity.velocity = semi_implicit_euler_step(
            entity.position, entity.velocity, acceleration, context.time_step
        )
        population = others + [entity]
        masses = np.array([b.mass for b in population])
        center = masses @ np.array([b.position for b in population]) / masses.sum()
        r = float(np.linalg.norm(entity.position - center))
        entity.record((r, entity.speed))

    def state_dict(self) -> Dict[str, Any]:
        return {"G": self.G, "clamp": self.clamp}
