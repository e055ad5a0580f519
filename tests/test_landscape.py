"""Tests for gradient-descent balls on a toroidal height field."""

import threading

import numpy as np
import pytest

from phaselab.config import LandscapeConfig
from phaselab.core import Ball, StepContext
from phaselab.physics import GradientDescentIntegrator, HeightField
from phaselab.simulation import LandscapeSketch


def ramp(width: int = 20, height: int = 20, slope: float = 0.5) -> HeightField:
    """Plane falling along +x (a = +slope in the interior)."""
    xs = np.arange(width, dtype=float)[:, np.newaxis]
    return HeightField(np.repeat(-slope * xs, height, axis=1))


def test_ball_accelerates_downhill() -> None:
    ball = Ball(position=(5.0, 5.0))
    law = GradientDescentIntegrator()
    law.step(ball, StepContext(height_field=ramp()))
    np.testing.assert_allclose(ball.velocity, [0.5, 0.0])
    np.testing.assert_allclose(ball.position, [5.5, 5.0])
    assert not ball.stuck
    assert ball.phase_trajectory[-1] == pytest.approx((0.5, 0.5))


def test_position_wraps_around_the_torus() -> None:
    ball = Ball(position=(19.5, 5.0), velocity=(3.0, -8.0), start_position=(19.5, 5.0))
    flat = HeightField(np.zeros((20, 20)))
    GradientDescentIntegrator().step(ball, StepContext(height_field=flat))
    np.testing.assert_allclose(ball.position, [2.5, 17.0])
    # Radial distance is measured the short way round
    assert ball.radial_distance == pytest.approx(np.hypot(3.0, 8.0))


def test_stuck_is_terminal() -> None:
    flat = HeightField(np.full((10, 10), 0.5))
    ball = Ball(position=(5.0, 5.0))
    law = GradientDescentIntegrator(critical_velocity=0.1)
    ctx = StepContext(height_field=flat)
    law.step(ball, ctx)
    assert ball.stuck
    position, velocity = ball.position.copy(), ball.velocity.copy()
    n = len(ball.trajectory)
    for _ in range(5):
        law.step(ball, StepContext(height_field=ramp(10, 10)))
    assert ball.stuck
    np.testing.assert_array_equal(ball.position, position)
    np.testing.assert_array_equal(ball.velocity, velocity)
    assert len(ball.trajectory) == n


def test_missing_height_field() -> None:
    with pytest.raises(RuntimeError):
        GradientDescentIntegrator().step(Ball(), StepContext())


class TestLandscapeSketch:

    def test_add_ball_needs_landscape(self) -> None:
        sketch = LandscapeSketch(LandscapeConfig(seed=0))
        assert not sketch.ready
        with pytest.raises(RuntimeError):
            sketch.add_ball(10.0, 10.0)
        # Ticking without terrain is a no-op
        snap = sketch.tick()
        assert snap.bodies == []

    def test_add_ball_outside_field(self) -> None:
        sketch = LandscapeSketch(LandscapeConfig(width=50, height=40, seed=0))
        sketch.create_landscape()
        with pytest.raises(ValueError):
            sketch.add_ball(50.0, 10.0)
        with pytest.raises(ValueError):
            sketch.add_ball(-1.0, 10.0)

    def test_create_landscape_drops_balls_and_resets_axis(self) -> None:
        sketch = LandscapeSketch(LandscapeConfig(width=60, height=60, seed=3))
        sketch.use_landscape(ramp(60, 60, slope=1.0))
        sketch.add_ball(10.0, 10.0)
        for _ in range(5):
            sketch.tick()
        assert sketch.distance_range.hi > 1.0
        field = sketch.create_landscape()
        assert field.shape == (60, 60)
        assert len(sketch.entities) == 0
        assert sketch.distance_range.hi == 1.0

    def test_distance_axis_only_grows(self) -> None:
        sketch = LandscapeSketch(LandscapeConfig(seed=1), height_field=ramp(40, 40))
        sketch.add_ball(2.0, 2.0)
        highs = []
        for _ in range(30):
            snap = sketch.tick()
            highs.append(snap.extra["max_radial_distance"])
        assert highs == sorted(highs)
        assert highs[-1] > 1.0

    def test_flat_terrain_balls_stick_immediately(self) -> None:
        sketch = LandscapeSketch(LandscapeConfig(seed=2), height_field=HeightField(np.full((30, 30), 0.5)))
        for x in (3.0, 10.0, 20.0):
            sketch.add_ball(x, x)
        snap = sketch.tick()
        assert snap.extra["stuck"] == 3
        assert all(body.stuck for body in snap.bodies)
        snap = sketch.tick()
        assert all(len(body.trajectory) == 1 for body in snap.bodies)

    def test_random_landscape_run(self) -> None:
        sketch = LandscapeSketch(LandscapeConfig(width=120, height=120, seed=9))
        field = sketch.create_landscape()
        rng = np.random.default_rng(0)
        for _ in range(5):
            sketch.add_ball(rng.uniform(0, field.width), rng.uniform(0, field.height))
        for _ in range(50):
            snap = sketch.tick()
        for body in snap.bodies:
            assert field.contains(body.position[0], body.position[1])
            assert np.all(body.phase_samples >= 0.0)

    def test_add_ball_checks_the_field_under_the_lock(self) -> None:
        sketch = LandscapeSketch(LandscapeConfig(seed=4), height_field=HeightField(np.zeros((50, 50))))
        errors = []

        def drop() -> None:
            try:
                sketch.add_ball(40.0, 40.0)
            except ValueError as exc:
                errors.append(exc)

        with sketch.lock:
            worker = threading.Thread(target=drop)
            worker.start()
            worker.join(timeout=0.2)
            assert worker.is_alive()
            # Terrain shrinks while the drop is waiting
            sketch.use_landscape(HeightField(np.zeros((20, 20))))
        worker.join(timeout=5.0)
        assert not worker.is_alive()
        assert len(errors) == 1
        assert sketch.entities == []
