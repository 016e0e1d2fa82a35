"""Tests for curve generation."""

import math

import numpy as np
import pytest

from pcmharness.curves.generate import (
    curve_length, generate_cases, make_secondary, perturb_curve, random_curve, translate_curve,
)


class TestRandomCurve:
    """Tests for uniformly drawn curves."""

    def test_shape_and_range(self, rng):
        """Test that points lie inside the field."""
        curve = random_curve(50, 2.0, rng)

        assert curve.shape == (50, 2)
        assert np.all(curve >= 0.0)
        assert np.all(curve < 2.0)

    def test_seeded_generators_agree(self):
        """Test that equal seeds produce equal curves."""
        c1 = random_curve(5, 2.0, np.random.default_rng(7))
        c2 = random_curve(5, 2.0, np.random.default_rng(7))

        assert np.array_equal(c1, c2)

    def test_curve_is_read_only(self, rng):
        """Test that generated curves cannot be modified in place."""
        curve = random_curve(3, 1.0, rng)

        with pytest.raises(ValueError):
            curve[0, 0] = 5.0


class TestTransforms:
    """Tests for translation and perturbation."""

    def test_translate(self, straight_curve):
        """Test that every point moves by the same vector."""
        moved = translate_curve(straight_curve, (100.0, 100.0))

        assert np.array_equal(moved - np.array(straight_curve), np.full((5, 2), 100.0))

    def test_translate_keeps_input(self, straight_curve):
        """Test that translation does not touch its input."""
        original = np.array(straight_curve)
        translate_curve(original, (1.0, 2.0))

        assert original[0].tolist() == [0.0, 0.0]

    def test_perturb_moves_axes_together(self, straight_curve, rng):
        """Test that x and y get the same offset per point."""
        noisy = perturb_curve(straight_curve, 1.0, rng)
        offsets = noisy - np.array(straight_curve)

        assert np.allclose(offsets[:, 0], offsets[:, 1])
        assert np.all(offsets >= 0.0)
        assert np.all(offsets < 1.0 / math.sqrt(2.0))

    def test_zero_deviation_is_identity(self, straight_curve, rng):
        """Test that zero deviation leaves points in place."""
        noisy = perturb_curve(straight_curve, 0.0, rng)

        assert np.array_equal(noisy, np.array(straight_curve))


class TestCurveLength:
    """Tests for polyline length."""

    def test_length(self):
        """Test summing segment lengths."""
        assert curve_length([(0, 0), (3, 4), (3, 8)]) == pytest.approx(9.0)

    def test_single_point(self):
        """Test that a single point has zero length."""
        assert curve_length([(1.0, 1.0)]) == 0.0


class TestGenerateCases:
    """Tests for Discover case generation."""

    def test_identical_secondary(self, default_config, rng):
        """Test that the default configuration pairs a curve with itself."""
        cases = generate_cases(4, default_config.generator, 1.0, rng)

        assert len(cases) == 4
        for case in cases:
            assert case.primary_curve.shape == (5, 2)
            assert np.array_equal(case.primary_curve, case.secondary_curve)
            assert case.epsilon == 1.0

    def test_translated_secondary(self, default_config, rng):
        """Test the translated secondary curve configuration."""
        default_config.generator.secondary = "translate"
        default_config.generator.translation = [3.0, 1.0]

        case = generate_cases(1, default_config.generator, 1.0, rng)[0]

        diff = case.secondary_curve - case.primary_curve
        assert np.allclose(diff, [[3.0, 1.0]] * 5)

    def test_random_secondary(self, default_config, rng):
        """Test the independent secondary curve configuration."""
        default_config.generator.secondary = "random"
        default_config.generator.secondary_point_count = 3

        case = generate_cases(1, default_config.generator, 1.0, rng)[0]

        assert case.secondary_curve.shape == (3, 2)

    def test_perturbed_secondary(self, default_config, rng):
        """Test the perturbed secondary curve configuration."""
        default_config.generator.secondary = "perturb"
        default_config.generator.deviation = 1.0

        cases = generate_cases(3, default_config.generator, 1.0, rng)

        bound = 1.0 / math.sqrt(2.0)
        for case in cases:
            diff = case.secondary_curve - case.primary_curve
            assert case.secondary_curve.shape == (5, 2)
            assert np.allclose(diff[:, 0], diff[:, 1])
            assert np.all(diff >= 0.0)
            assert np.all(diff <= bound + 1e-12)
            assert not np.array_equal(case.primary_curve, case.secondary_curve)

    def test_unknown_secondary_mode(self, default_config, rng, straight_curve):
        """Test that an unknown mode is rejected."""
        default_config.generator.secondary = "mirror"

        with pytest.raises(ValueError):
            make_secondary(np.array(straight_curve), default_config.generator, rng)
