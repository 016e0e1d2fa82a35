"""
Curve generation for Discover trials.

All randomness comes from an explicitly passed numpy Generator, so a seeded
generator reproduces a run exactly.
"""

import math

import numpy as np

from pcmharness.models import TestCase, as_curve
from pcmharness.tracer import get_tracer, trace


def random_curve(n, field_size, rng):
    """
    Curve of n points drawn uniformly from [0, field_size)^2.

    Degenerate configurations are unlikely enough to be ignored.
    """
    return as_curve(rng.uniform(0.0, field_size, size=(n, 2)))


def translate_curve(curve, q):
    """Shift every point of a curve by vector q."""
    return as_curve(np.asarray(curve) + np.asarray(q, dtype=np.float64))


def perturb_curve(curve, deviation, rng):
    """
    Add random noise to the points of a curve.

    Each point moves by deviation^2 / sqrt(2) * r along both axes, with one
    uniform r in [0, 1) per point. The x and y offsets are therefore equal.
    """
    curve = np.asarray(curve)
    d = deviation * deviation / math.sqrt(2.0)
    r = rng.random(len(curve))
    return as_curve(curve + (d * r)[:, None] * np.array([1.0, 1.0]))


def curve_length(curve):
    """Sum of the distances between consecutive points; 0 for a single point."""
    curve = np.asarray(curve)
    if len(curve) <= 1:
        return 0.0
    return float(np.linalg.norm(np.diff(curve, axis=0), axis=1).sum())


def make_secondary(primary, gen_config, rng):
    """Derive the secondary curve of a Discover case from the primary one."""
    mode = gen_config.secondary

    if mode == "identical":
        return primary
    if mode == "translate":
        return translate_curve(primary, gen_config.translation)
    if mode == "perturb":
        return perturb_curve(primary, gen_config.deviation, rng)
    if mode == "random":
        return random_curve(gen_config.secondary_point_count, gen_config.field_size, rng)

    raise ValueError(f"Unknown secondary curve mode: {mode!r}")


@trace(label="generate_cases")
def generate_cases(count, gen_config, epsilon, rng):
    """
    Generate fresh test cases for a Discover run.

    Returns a list of TestCase objects.
    """
    tracer = get_tracer()

    cases = []
    for _ in range(count):
        primary = random_curve(gen_config.point_count, gen_config.field_size, rng)
        secondary = make_secondary(primary, gen_config, rng)
        cases.append(TestCase(primary_curve=primary, secondary_curve=secondary, epsilon=epsilon))

    tracer.event(f"Generated {len(cases)} cases ({gen_config.secondary} secondary curves)")

    return cases
