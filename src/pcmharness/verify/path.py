"""
Validation of witness paths returned by the matching engine.

A witness is a list of (u, v) steps in diagram space. It must never move
backwards along either curve, and the two curve points it pairs up at each
step must lie within the match threshold.
"""

from pcmharness.curves.geometry import distance, point_at
from pcmharness.errors import InvariantViolation
from pcmharness.tracer import get_tracer, trace


def check_monotone(steps):
    """
    Check that steps are coordinatewise non-decreasing.

    Raises InvariantViolation naming the first decreasing pair.
    """
    for (u1, v1), (u2, v2) in zip(steps, steps[1:]):
        if u1 > u2 or v1 > v2:
            raise InvariantViolation(
                "steps_decreasing",
                f"Decreasing from step ({u1}, {v1}) to ({u2}, {v2}).",
                {"from": [float(u1), float(v1)], "to": [float(u2), float(v2)]},
            )


def check_distances(primary, secondary, steps, epsilon, tolerance):
    """
    Check that every step pairs points less than epsilon + tolerance apart.

    Fractional step coordinates interpolate along the curve edge they fall
    on. Raises InvariantViolation on the first step outside the diagram or
    too far apart.
    """
    threshold = epsilon + tolerance
    for u, v in steps:
        _check_in_range(u, v, len(primary), len(secondary))
        d = distance(point_at(primary, u), point_at(secondary, v))
        # NaN fails as well
        if not d < threshold:
            raise InvariantViolation(
                "distance_exceeded",
                f"Distance {d} at step ({u}, {v}) should be below threshold {epsilon}+{tolerance}.",
                {"distance": float(d), "step": [float(u), float(v)], "threshold": threshold},
            )


def _check_in_range(u, v, n, m):
    if not (0.0 <= u <= n - 1 and 0.0 <= v <= m - 1):
        raise InvariantViolation(
            "step_out_of_range",
            f"Step ({u}, {v}) lies outside the {n}x{m} diagram.",
            {"step": [float(u), float(v)], "dims": [n, m]},
        )


@trace(label="check_steps")
def check_steps(primary, secondary, steps, epsilon, tolerance):
    """Check a witness path for monotonicity, then for the distance bound."""
    tracer = get_tracer()

    check_monotone(steps)
    check_distances(primary, secondary, steps, epsilon, tolerance)

    tracer.event(f"Witness of {len(steps)} steps valid")
