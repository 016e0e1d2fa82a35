"""
Raster drawings of curves and free-space diagrams.

Drawings are RGB uint8 images. Diagram space is drawn with v growing
upwards, one cell_size square per lattice cell.
"""

import cv2
import numpy as np

from pcmharness.curves.geometry import elementwise_max, elementwise_min

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def _mix(rgb, alpha):
    """Blend a color over a white background."""
    return tuple(int(round(alpha * c + (1.0 - alpha) * 255)) for c in rgb)


FREE_COLOR = _mix((102, 187, 106), 0.6)
BLOCKED_COLOR = _mix((229, 115, 115), 0.6)


def diagram_intervals(fsd):
    """
    Split every lattice edge into free and blocked parts.

    Returns (free, blocked), each a list of (axis, x, y_start, y_end) runs in
    diagram units.
    """
    free = []
    blocked = []
    for axis, x, y in fsd.edges():
        boundary = fsd.segment(axis, x, y)
        if boundary is None:
            blocked.append((axis, x, y, y + 1.0))
            continue
        if boundary.a > 0.0:
            blocked.append((axis, x, y, y + boundary.a))
        free.append((axis, x, y + boundary.a, y + boundary.b))
        if boundary.b < 1.0:
            blocked.append((axis, x, y + boundary.b, y + 1.0))
    return free, blocked


def draw_diagram(fsd, steps=None, cell_size=20, margin=20):
    """
    Draw a free-space diagram, optionally with a witness path on top.

    Free parts of cell edges are green, blocked parts red, the path black.
    """
    width = fsd.n * cell_size + 2 * margin
    height = fsd.m * cell_size + 2 * margin
    img = np.full((height, width, 3), 255, dtype=np.uint8)

    top = margin + fsd.m * cell_size

    def to_pixel(u, v):
        return (int(margin + cell_size * u), int(top - cell_size * v))

    def run_to_pixels(axis, x, y0, y1):
        if axis == 0:
            return to_pixel(x, y0), to_pixel(x, y1)
        return to_pixel(y0, x), to_pixel(y1, x)

    free, blocked = diagram_intervals(fsd)
    for runs, color in ((free, FREE_COLOR), (blocked, BLOCKED_COLOR)):
        for run in runs:
            p1, p2 = run_to_pixels(*run)
            cv2.line(img, p1, p2, color, 1)

    if steps is not None:
        for (u1, v1), (u2, v2) in zip(steps, steps[1:]):
            cv2.line(img, to_pixel(u1, v1), to_pixel(u2, v2), BLACK, 1)

    return img


def draw_curve_pair(primary, secondary, canvas=400, margin=20):
    """
    Draw two curves scaled to their joint bounding box.

    The primary curve is red, the secondary green.
    """
    size = canvas + 2 * margin
    img = np.full((size, size, 3), 255, dtype=np.uint8)

    points = np.vstack([primary, secondary])
    pmin = elementwise_min(points)
    pdiff = elementwise_max(points) - pmin
    # Flat extents would divide by zero
    pdiff[pdiff == 0.0] = 1.0

    def to_pixels(curve):
        positions = margin + canvas * (np.asarray(curve) - pmin) / pdiff
        return positions.astype(np.int32).reshape(-1, 1, 2)

    cv2.polylines(img, [to_pixels(primary)], isClosed=False, color=BLOCKED_COLOR, thickness=1)
    cv2.polylines(img, [to_pixels(secondary)], isClosed=False, color=FREE_COLOR, thickness=1)

    return img
