"""Tests for the integration primitive, clamped gravity and the toroidal height field."""

import math

import numpy as np
import pytest

from phaselab.physics import (
    HeightField,
    circular_speed,
    generate_landscape,
    gravitational_acceleration,
    net_acceleration,
    orbital_velocity,
    paint_spots,
    semi_implicit_euler_step,
    toroidal_delta,
    toroidal_distance,
    wrap_coordinate,
    wrap_index,
)


def test_semi_implicit_euler_uses_updated_velocity() -> None:
    x, v = semi_implicit_euler_step(np.zeros(2), np.array([1.0, 0.0]), np.array([0.0, 2.0]), dt=0.5)
    np.testing.assert_allclose(v, [1.0, 1.0])
    np.testing.assert_allclose(x, [0.5, 0.5])


class TestGravity:

    def test_inverse_square_magnitude_and_direction(self) -> None:
        a = gravitational_acceleration(np.array([100.0, 0.0]), np.zeros(2), 1000.0, 6.0, (100.0, 50000.0))
        np.testing.assert_allclose(a, [-0.6, 0.0])

    def test_close_approach_is_clamped(self) -> None:
        a = gravitational_acceleration(np.array([5.0, 0.0]), np.zeros(2), 1000.0, 6.0, (100.0, 50000.0))
        assert np.linalg.norm(a) == pytest.approx(60.0)

    def test_far_field_is_clamped(self) -> None:
        a = gravitational_acceleration(np.array([1000.0, 0.0]), np.zeros(2), 1000.0, 6.0, (100.0, 50000.0))
        assert np.linalg.norm(a) == pytest.approx(6.0 * 1000.0 / 50000.0)

    def test_zero_separation_gives_zero_force(self) -> None:
        a = gravitational_acceleration(np.zeros(2), np.zeros(2), 1000.0, 6.0, (100.0, 50000.0))
        np.testing.assert_array_equal(a, [0.0, 0.0])
        acc = net_acceleration(np.zeros(2), np.zeros((1, 2)), np.array([10.0]), 1.0, (25.0, 50000.0))
        assert np.all(np.isfinite(acc))
        np.testing.assert_array_equal(acc, [0.0, 0.0])

    def test_no_sources(self) -> None:
        acc = net_acceleration(np.zeros(2), [], [], 1.0, (25.0, 50000.0))
        np.testing.assert_array_equal(acc, [0.0, 0.0])

    def test_pair_is_symmetric(self) -> None:
        clamp = (25.0, 50000.0)
        a0 = net_acceleration(np.array([0.0, 0.0]), np.array([[10.0, 0.0]]), np.array([10.0]), 1.0, clamp)
        a1 = net_acceleration(np.array([10.0, 0.0]), np.array([[0.0, 0.0]]), np.array([10.0]), 1.0, clamp)
        np.testing.assert_allclose(a0, [0.1, 0.0])
        np.testing.assert_allclose(a1, [-0.1, 0.0])

    def test_net_matches_pairwise_sum(self) -> None:
        rng = np.random.default_rng(0)
        positions = rng.uniform(0, 300, size=(3, 2))
        masses = rng.uniform(5, 15, size=3)
        for i in range(3):
            others = [j for j in range(3) if j != i]
            acc = net_acceleration(positions[i], positions[others], masses[others], 1.0, (25.0, 50000.0))
            expected = sum(
                gravitational_acceleration(positions[i], positions[j], masses[j], 1.0, (25.0, 50000.0))
                for j in others
            )
            np.testing.assert_allclose(acc, expected)

    def test_circular_launch(self) -> None:
        assert circular_speed(6.0, 1000.0, 100.0) == pytest.approx(math.sqrt(60.0))
        v = orbital_velocity(np.array([100.0, 0.0]), np.zeros(2), 6.0, 1000.0)
        np.testing.assert_allclose(v, [0.0, math.sqrt(60.0)], atol=1e-12)
        with pytest.raises(ValueError):
            circular_speed(6.0, 1000.0, 0.0)


class TestTerrain:

    def test_wrap_helpers(self) -> None:
        assert wrap_coordinate(-1.0, 10.0) == pytest.approx(9.0)
        assert wrap_coordinate(10.5, 10.0) == pytest.approx(0.5)
        assert 0.0 <= wrap_coordinate(-1e-17, 10.0) < 10.0
        assert wrap_index(-0.5, 10) == 9
        assert wrap_index(10.2, 10) == 0
        assert toroidal_delta(1.0, 9.0, 10.0) == pytest.approx(2.0)
        assert toroidal_distance(np.array([1.0, 1.0]), np.array([9.0, 9.0]), (10, 10)) == pytest.approx(
            math.sqrt(8.0)
        )

    def test_gradient_on_plane(self) -> None:
        xs, ys = np.meshgrid(np.arange(10), np.arange(10), indexing="ij")
        field = HeightField(2.0 * xs + 3.0 * ys)
        np.testing.assert_allclose(field.gradient(4.3, 4.7), [2.0, 3.0])
        # Across the seam: (h[1] - h[9]) / 2 on the x axis
        np.testing.assert_allclose(field.gradient(0.0, 4.0)[0], (2.0 - 18.0) / 2.0)

    def test_rejects_small_fields(self) -> None:
        with pytest.raises(ValueError):
            HeightField(np.zeros((2, 5)))
        with pytest.raises(ValueError):
            HeightField(np.zeros(9))

    def test_brightness(self) -> None:
        field = HeightField(np.array([[-1.0, 0.0, 0.5], [1.0, 2.0, 0.2], [0.0, 0.0, 0.0]]))
        img = field.brightness()
        assert img.dtype == np.uint8
        assert img[0, 0] == 0
        assert img[0, 2] == 127
        assert img[1, 0] == 255
        assert img[1, 1] == 255

    def test_generate_landscape_bounds(self) -> None:
        field = generate_landscape(120, 100, rng=np.random.default_rng(1))
        assert field.shape == (120, 100)
        assert field.heights.min() >= -5.0
        assert field.heights.max() <= 5.0

    def test_single_hill_peaks_at_center(self) -> None:
        field = generate_landscape(100, 100, rng=np.random.default_rng(2), n_high=1, n_low=0)
        assert field.heights.max() == pytest.approx(5.0)
        assert field.heights.min() == pytest.approx(0.5)

    def test_single_pit_bottoms_at_center(self) -> None:
        field = generate_landscape(100, 100, rng=np.random.default_rng(2), n_high=0, n_low=1)
        assert field.heights.min() == pytest.approx(-5.0)
        assert field.heights.max() == pytest.approx(0.5)

    def test_seeded_generation_is_reproducible(self) -> None:
        a = generate_landscape(60, 60, rng=np.random.default_rng(7))
        b = generate_landscape(60, 60, rng=np.random.default_rng(7))
        np.testing.assert_array_equal(a.heights, b.heights)

    def test_overlapping_spots_precedence(self) -> None:
        highs = [((20, 20), 10.0), ((25, 20), 10.0)]
        lows = [((34, 20), 6.0)]
        h = paint_spots(60, 60, highs, lows)
        # In both hills: the first one listed wins
        assert h[21, 20] == pytest.approx(5.0 - 0.01 * 4.5)
        assert h[27, 20] == pytest.approx(5.0 - 0.49 * 4.5)
        # Only in the second hill
        assert h[29, 27] == pytest.approx(5.0 - 0.65 * 4.5)
        # In both hills and the pit: the pit overrides
        assert h[30, 20] == pytest.approx(-5.0 + (16.0 / 36.0) * 5.5)
        assert h[34, 20] == pytest.approx(-5.0)
        # Outside every spot
        assert h[50, 50] == pytest.approx(0.5)

    def test_spots_wrap_across_the_seam(self) -> None:
        h = paint_spots(40, 40, [((0, 0), 5.0)], [])
        assert h[39, 0] == pytest.approx(5.0 - (1.0 / 25.0) * 4.5)
        assert h[0, 38] == pytest.approx(5.0 - (4.0 / 25.0) * 4.5)

    def test_height_at_wraps(self) -> None:
        xs, ys = np.meshgrid(np.arange(5), np.arange(4), indexing="ij")
        field = HeightField(10.0 * xs + ys)
        assert field.height_at(2.7, 1.2) == 21.0
        assert field.height_at(-0.5, 4.0) == 40.0
