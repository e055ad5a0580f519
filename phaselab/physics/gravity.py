"""
Clamped inverse-square gravity.

The squared distance is clamped to [min_d2, max_d2] before dividing, which
bounds the force at close approach (no singularity when bodies coincide) and
keeps a minimum pull far away. This is an approximation, not Newtonian
accuracy.
"""

import math
from typing import Tuple

import numpy as np

# (min, max) bounds on the squared separation
DistanceClamp = Tuple[float, float]

ORBITAL_CLAMP: DistanceClamp = (100.0, 50000.0)
THREE_BODY_CLAMP: DistanceClamp = (25.0, 50000.0)


def clamp_distance_sq(d2: float, clamp: DistanceClamp) -> float:
    lo, hi = clamp
    return max(lo, min(hi, d2))


def gravitational_acceleration(
    position: np.ndarray,
    source_position: np.ndarray,
    source_mass: float,
    G: float,
    clamp: DistanceClamp,
) -> np.ndarray:
    """
    Acceleration of a body at ``position`` towards a source mass.

    |a| = G * M / clamp(d^2). A zero separation has no direction and yields
    a zero vector.
    """
    delta = np.asarray(source_position, dtype=float) - np.asarray(position, dtype=float)
    d2 = float(delta @ delta)
    if d2 == 0.0:
        return np.zeros(2)
    strength = G * source_mass / clamp_distance_sq(d2, clamp)
    return delta / math.sqrt(d2) * strength


def net_acceleration(
    position: np.ndarray,
    source_positions: np.ndarray,
    source_masses: np.ndarray,
    G: float,
    clamp: DistanceClamp,
) -> np.ndarray:
    """
    Summed acceleration of a body at ``position`` towards several sources.

    Sources are read at their current positions. A source at zero separation
    contributes nothing.

    Args:
        position: (2,) array.
        source_positions: (N, 2) array.
        source_masses: (N,) array.
        G: gravitational constant.
        clamp: bounds on the squared distance.

    Returns:
        (2,) array.
    """
    pos = np.asarray(source_positions, dtype=float).reshape(-1, 2)
    m = np.asarray(source_masses, dtype=float).reshape(-1)
    if len(pos) == 0:
        return np.zeros(2)
    delta = pos - np.asarray(position, dtype=float)
    d2 = np.einsum("ij,ij->i", delta, delta)
    dist = np.sqrt(d2)
    strength = G * m / np.clip(d2, clamp[0], clamp[1])
    with np.errstate(divide="ignore", invalid="ignore"):
        unit = np.where(dist[:, np.newaxis] > 0, delta / dist[:, np.newaxis], 0.0)
    return unit.T @ strength


def circular_speed(G: float, central_mass: float, radius: float) -> float:
    """Speed of a circular orbit: sqrt(G * M / r)."""
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius}")
    return math.sqrt(G * central_mass / radius)


def rotate(vector: np.ndarray, angle: float) -> np.ndarray:
    """Rotate a 2D vector counter-clockwise by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    x, y = float(vector[0]), float(vector[1])
    return np.array([c * x - s * y, s * x + c * y])


def orbital_velocity(
    position: np.ndarray,
    center: np.ndarray,
    G: float,
    central_mass: float,
    speed_factor: float = 1.0,
    angle_offset: float = 0.0,
) -> np.ndarray:
    """
    Launch velocity along the +90 degree tangent around ``center``.

    ``speed_factor`` scales the circular speed, ``angle_offset`` tilts the
    tangent; both at their defaults give a circular orbit.
    """
    r_vec = np.asarray(position, dtype=float) - np.asarray(center, dtype=float)
    r = float(np.linalg.norm(r_vec))
    speed = circular_speed(G, central_mass, r) * speed_factor
    tangent = rotate(r_vec / r, math.pi / 2 + angle_offset)
    return tangent * speed
