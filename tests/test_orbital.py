"""Tests for two-body orbits around a fixed sun."""

import math

import numpy as np
import pytest

from phaselab.config import OrbitalConfig
from phaselab.core import EntityRemoved
from phaselab.simulation import OrbitalSketch


@pytest.fixture
def sketch() -> OrbitalSketch:
    return OrbitalSketch(OrbitalConfig(seed=0))


def test_circular_launch_velocity(sketch: OrbitalSketch) -> None:
    bid = sketch.add_body((100.0, 0.0), circular=True)
    body = sketch.store.get(bid)
    np.testing.assert_allclose(body.velocity, [0.0, math.sqrt(60.0)], atol=1e-12)


def test_one_step_radius_change_is_small(sketch: OrbitalSketch) -> None:
    sketch.add_body((100.0, 0.0), circular=True)
    snap = sketch.tick()
    r, speed = snap.bodies[0].phase_samples[-1]
    assert abs(r - 100.0) / 100.0 < 0.01
    assert r == pytest.approx(math.hypot(99.4, math.sqrt(60.0)))
    assert speed == pytest.approx(math.hypot(0.6, math.sqrt(60.0)))


def test_circular_orbit_stays_near_radius(sketch: OrbitalSketch) -> None:
    bid = sketch.add_body((100.0, 0.0), circular=True)
    body = sketch.store.get(bid)
    radii = []
    for _ in range(1000):
        sketch.tick()
        radii.append(float(np.linalg.norm(body.position)))
    radii = np.array(radii)
    assert radii.min() > 90.0
    assert radii.max() < 110.0
    # The body really went round: both sides of the sun were visited
    assert body.trajectory.to_numpy()[:, 0].min() < -90.0


def test_sun_never_moves(sketch: OrbitalSketch) -> None:
    sketch.add_body((120.0, 30.0), circular=False)
    for _ in range(50):
        snap = sketch.tick()
    sun = snap.extra["sun"]
    assert sun.fixed
    np.testing.assert_array_equal(sun.position, [0.0, 0.0])
    assert len(sun.trajectory) == 0


def test_elliptical_launch_is_randomized_within_bounds(sketch: OrbitalSketch) -> None:
    v_circ = math.sqrt(60.0)
    for _ in range(20):
        bid = sketch.add_body((100.0, 0.0), circular=False)
        v = sketch.store.get(bid).velocity
        speed = float(np.linalg.norm(v))
        assert 0.5 * v_circ <= speed <= 1.5 * v_circ
        tilt = math.atan2(v[1], v[0]) - math.pi / 2
        assert abs(tilt) <= math.pi / 6 + 1e-9


def test_explicit_velocity(sketch: OrbitalSketch) -> None:
    bid = sketch.add_body((0.0, 200.0), velocity=(1.0, 2.0))
    np.testing.assert_allclose(sketch.store.get(bid).velocity, [1.0, 2.0])


def test_launch_at_sun_is_rejected(sketch: OrbitalSketch) -> None:
    with pytest.raises(ValueError):
        sketch.add_body((0.0, 0.0))


def test_phase_point_uses_fixed_axes(sketch: OrbitalSketch) -> None:
    sketch.add_body((100.0, 0.0), circular=True)
    snap = sketch.tick()
    r, speed = snap.bodies[0].phase_samples[-1]
    assert snap.bodies[0].phase_point == pytest.approx((r / 400.0, speed / 10.0))


def test_clear_all(sketch: OrbitalSketch) -> None:
    events = []
    sketch.subscribe(events.append)
    ids = [sketch.add_body((100.0 + 10 * i, 0.0)) for i in range(3)]
    sketch.clear_all()
    assert sketch.entities == []
    assert events == [EntityRemoved(i) for i in ids]
    assert sketch.tick().bodies == []
