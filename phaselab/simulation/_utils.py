"""
Visualization utilities for sketches: phase portraits and trajectories.

All functions accept a FrameSnapshot as returned by ``Sketch.tick()`` or
``Sketch.snapshot()``. Matplotlib is optional; if not installed, functions
raise ImportError.
"""

from typing import Any, Optional, Tuple

import numpy as np

from phaselab.core.entities import Color
from phaselab.core.system import FrameSnapshot


def hsb_to_rgb(color: Color) -> Tuple[float, float, float]:
    """HSB triple (0-360, 0-100, 0-100) -> RGB floats in [0, 1] for matplotlib."""
    try:
        from matplotlib.colors import hsv_to_rgb
    except ImportError:
        raise ImportError("matplotlib is required for hsb_to_rgb.")
    h, s, b = color
    rgb = hsv_to_rgb(np.array([(h % 360.0) / 360.0, s / 100.0, b / 100.0]))
    return float(rgb[0]), float(rgb[1]), float(rgb[2])


def plot_phase_portrait(
    snapshot: FrameSnapshot,
    ax: Optional[Any] = None,
    mapped: bool = False,
    xlabel: str = "x",
    ylabel: str = "v",
    title: str = "Phase portrait",
    **kwargs: Any,
) -> Any:
    """
    Plot every body's phase trajectory, plus archived/active runs if present.

    Args:
        snapshot: frame to draw.
        ax: matplotlib axes (if None, creates new figure).
        mapped: plot viewport coordinates instead of raw quantities.
        xlabel, ylabel, title: axis and title labels.
        **kwargs: passed to ax.plot().

    Returns:
        matplotlib axes.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_phase_portrait.")
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(6, 5))
    for run in snapshot.runs:
        pts = run.plot if mapped else run.samples
        if len(pts):
            ax.plot(pts[:, 0], pts[:, 1], color=hsb_to_rgb(run.color),
                    alpha=1.0 if run.active else 0.4, **kwargs)
            if run.active:
                ax.plot(pts[-1, 0], pts[-1, 1], "o", color=hsb_to_rgb(run.color))
    for body in snapshot.bodies:
        pts = body.phase_plot if mapped else body.phase_samples
        if not len(pts):
            continue
        color = hsb_to_rgb(body.color)
        ax.plot(pts[:, 0], pts[:, 1], color=color, **kwargs)
        ax.plot(pts[-1, 0], pts[-1, 1], "x" if body.stuck else "o", color=color)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return ax


def plot_trajectories(
    snapshot: FrameSnapshot,
    ax: Optional[Any] = None,
    title: str = "Trajectories",
    **kwargs: Any,
) -> Any:
    """
    Plot each body's recent path and current position in simulation space.

    Args:
        snapshot: frame to draw.
        ax: matplotlib axes (if None, creates new figure).
        title: axes title.
        **kwargs: passed to ax.plot().

    Returns:
        matplotlib axes.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_trajectories.")
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(6, 6))
    sun = snapshot.extra.get("sun")
    bodies = list(snapshot.bodies) + ([sun] if sun is not None else [])
    for body in bodies:
        color = hsb_to_rgb(body.color)
        if len(body.trajectory):
            ax.plot(body.trajectory[:, 0], body.trajectory[:, 1], color=color, **kwargs)
        ax.plot(body.position[0], body.position[1], "x" if body.stuck else "o",
                color=color, markersize=max(2.0, body.size / 2))
    ax.set_title(title)
    ax.set_aspect("equal", adjustable="datalim")
    ax.grid(True, alpha=0.3)
    return ax
