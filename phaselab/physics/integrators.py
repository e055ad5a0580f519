"""
Numerical integration primitive shared by the step laws.

Pure numerical level: no dependency on entities or sketches. Kinematic form:
step(position, velocity, acceleration, dt) -> (position, velocity).
"""

from typing import Tuple

import numpy as np


def semi_implicit_euler_step(
    position: np.ndarray,
    velocity: np.ndarray,
    acceleration: np.ndarray,
    dt: float = 1.0,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Semi-implicit (symplectic) Euler: velocity first, then position from the
    updated velocity.

        v_{n+1} = v_n + dt * a_n
        x_{n+1} = x_n + dt * v_{n+1}
    """
    v_next = velocity + dt * acceleration
    x_next = position + dt * v_next
    return x_next, v_next
