"""
Physics for the sketches.

Hierarchy:
  - integrators: numerical primitive (semi-implicit Euler)
  - gravity: clamped inverse-square accelerations, orbital launch velocities
  - terrain: toroidal height field, gradient estimation, landscape generation
  - library: ready-made step laws (oscillator, gradient descent, two-body, N-body)
"""

# --- Integrators (numerical level) ---
from phaselab.physics.integrators import semi_implicit_euler_step

# --- Force laws and fields ---
from phaselab.physics.gravity import (
    ORBITAL_CLAMP,
    THREE_BODY_CLAMP,
    circular_speed,
    clamp_distance_sq,
    gravitational_acceleration,
    net_acceleration,
    orbital_velocity,
)
from phaselab.physics.terrain import (
    HeightField,
    generate_landscape,
    paint_spots,
    toroidal_delta,
    toroidal_distance,
    wrap_coordinate,
    wrap_index,
)

# --- Library (step laws) ---
from phaselab.physics.library import (
    AnalyticOscillatorIntegrator,
    CentralGravityIntegrator,
    GradientDescentIntegrator,
    NBodyGravityIntegrator,
)

__all__ = [
    # Integrators
    "semi_implicit_euler_step",
    # Gravity
    "ORBITAL_CLAMP",
    "THREE_BODY_CLAMP",
    "circular_speed",
    "clamp_distance_sq",
    "gravitational_acceleration",
    "net_acceleration",
    "orbital_velocity",
    # Terrain
    "HeightField",
    "generate_landscape",
    "paint_spots",
    "toroidal_delta",
    "toroidal_distance",
    "wrap_coordinate",
    "wrap_index",
    # Library
    "AnalyticOscillatorIntegrator",
    "GradientDescentIntegrator",
    "CentralGravityIntegrator",
    "NBodyGravityIntegrator",
]
