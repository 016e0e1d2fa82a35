"""
Structural checks on free-space diagrams.

A lattice vertex is a corner exactly when the free intervals of the edges
meeting there touch it: the edge leaving the vertex starts at 0 and the edge
arriving at it ends at 1. The check walks the lattice in a fixed order and
stops at the first vertex where corner flags and boundaries disagree.
"""

from pcmharness.errors import InvariantViolation
from pcmharness.tracer import get_tracer, trace


@trace(label="check_corner_consistency")
def check_corner_consistency(fsd, tolerance):
    """
    Check corner flags of a free-space diagram against its edge boundaries.

    Vertices are visited j outer, i inner, axis 0 then axis 1. For axis 1 the
    vertex coordinates are swapped so the same rule covers column edges.

    Raises InvariantViolation describing the first inconsistency.
    """
    tracer = get_tracer()

    for j in range(fsd.m):
        for i in range(fsd.n):
            has_corner = bool(fsd.corners[i, j])
            for axis in (0, 1):
                _, h = fsd.dims[axis]
                x, y = (i, j) if axis == 0 else (j, i)
                curr = (axis, x, y) if y < h else None
                prev = (axis, x, y - 1) if y > 0 else None

                if has_corner:
                    _check_corner_present(fsd, (i, j), curr, prev, tolerance)
                else:
                    _check_corner_absent(fsd, (i, j), curr, prev)

    tracer.event(f"Corners consistent on {fsd.n}x{fsd.m} diagram")


def _check_corner_absent(fsd, vertex, curr, prev):
    if curr is not None:
        boundary = fsd.segment(*curr)
        if boundary is not None and boundary.a == 0.0:
            raise InvariantViolation(
                "unexpected_boundary_start",
                f"Start of boundary exists at {curr} while no corner at {vertex}",
                _evidence(vertex, curr, boundary),
            )

    if prev is not None:
        boundary = fsd.segment(*prev)
        if boundary is not None and boundary.b == 1.0:
            raise InvariantViolation(
                "unexpected_boundary_end",
                f"End of boundary exists at {prev} while no corner at {vertex}",
                _evidence(vertex, prev, boundary),
            )


def _check_corner_present(fsd, vertex, curr, prev, tolerance):
    if curr is not None:
        boundary = fsd.segment(*curr)
        if boundary is None:
            raise InvariantViolation(
                "missing_boundary",
                f"Boundary does not exist at {curr} while corner at {vertex}",
                _evidence(vertex, curr, None),
            )
        if boundary.a >= tolerance:
            raise InvariantViolation(
                "boundary_start_offset",
                f"Start of boundary does not exist at {curr} while corner at {vertex} (a={boundary.a})",
                _evidence(vertex, curr, boundary),
            )

    if prev is not None:
        boundary = fsd.segment(*prev)
        if boundary is None:
            raise InvariantViolation(
                "missing_boundary",
                f"Boundary does not exist at {prev} while corner at {vertex}",
                _evidence(vertex, prev, None),
            )
        if boundary.b < 1.0 - tolerance:
            raise InvariantViolation(
                "boundary_end_offset",
                f"End of boundary does not exist at {prev} while corner at {vertex} (b={boundary.b})",
                _evidence(vertex, prev, boundary),
            )


def _evidence(vertex, edge, boundary):
    return {
        "vertex": list(vertex),
        "axis": edge[0],
        "edge": list(edge),
        "boundary": None if boundary is None else [boundary.a, boundary.b],
    }
