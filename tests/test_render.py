"""Tests for diagnostic drawings and the best-effort renderer."""

import os

import numpy as np

from pcmharness.config import RenderConfig
from pcmharness.io.save_artifacts import DiagnosticRenderer
from pcmharness.models import LineBoundary
from pcmharness.render.draw import (
    BLOCKED_COLOR,
    FREE_COLOR,
    diagram_intervals,
    draw_curve_pair,
    draw_diagram,
)


class TestIntervals:
    """Tests for splitting edges into free and blocked runs."""

    def test_blocked_edges(self, fsd_builder):
        """Test that edges without a boundary are fully blocked."""
        free, blocked = diagram_intervals(fsd_builder(2, 2))

        assert free == []
        assert sorted(blocked) == [(0, 0, 0, 1.0), (0, 1, 0, 1.0), (1, 0, 0, 1.0), (1, 1, 0, 1.0)]

    def test_partial_edge(self, fsd_builder):
        """Test an edge free only in its middle."""
        fsd = fsd_builder(2, 2)
        fsd.segments[(0, 1, 0)] = LineBoundary(a=0.25, b=0.5)

        free, blocked = diagram_intervals(fsd)

        assert free == [(0, 1, 0.25, 0.5)]
        assert (0, 1, 0, 0.25) in blocked
        assert (0, 1, 0.5, 1.0) in blocked

    def test_fully_free_edge(self, fsd_builder):
        """Test that a [0, 1] boundary leaves nothing blocked."""
        free, blocked = diagram_intervals(fsd_builder(2, 1, boundary=(0.0, 1.0)))

        assert free == [(1, 0, 0.0, 1.0)]
        assert blocked == []


class TestDrawing:
    """Tests for the raster drawings."""

    def test_diagram_size(self, fsd_builder):
        """Test the canvas size of a diagram drawing."""
        img = draw_diagram(fsd_builder(4, 3), cell_size=10, margin=5)

        assert img.shape == (3 * 10 + 10, 4 * 10 + 10, 3)
        assert img.dtype == np.uint8

    def test_diagram_colors(self, fsd_builder):
        """Test that free and blocked edges use their own colors."""
        fsd = fsd_builder(2, 2)
        fsd.segments[(0, 0, 0)] = LineBoundary(a=0.0, b=1.0)

        img = draw_diagram(fsd, cell_size=20, margin=10)

        colors = {tuple(int(c) for c in px) for px in img.reshape(-1, 3)}
        assert FREE_COLOR in colors
        assert BLOCKED_COLOR in colors

    def test_path_overlay(self, fsd_builder):
        """Test that a witness is drawn in black."""
        img = draw_diagram(fsd_builder(3, 3), steps=[(0.0, 0.0), (2.0, 2.0)], cell_size=20, margin=10)

        assert (img == 0).all(axis=2).any()

    def test_curve_pair_flat(self, straight_curve):
        """Test drawing curves with a zero-height bounding box."""
        img = draw_curve_pair(straight_curve, straight_curve, canvas=100, margin=10)

        assert img.shape == (120, 120, 3)
        assert (img != 255).any()

    def test_curve_pair_single_points(self):
        """Test drawing two one-point curves."""
        img = draw_curve_pair([(1.0, 1.0)], [(1.0, 1.0)], canvas=50, margin=5)

        assert img.shape == (60, 60, 3)


class TestRenderer:
    """Tests for DiagnosticRenderer."""

    def test_disabled(self, temp_dir, straight_curve):
        """Test that a disabled renderer writes nothing."""
        renderer = DiagnosticRenderer(temp_dir, enabled=False)

        result = renderer.curve_pair(straight_curve, straight_curve, "curve_0")

        assert not result.ok
        assert result.error is None
        assert os.listdir(temp_dir) == []

    def test_writes_png(self, temp_dir, fsd_builder):
        """Test that an enabled renderer writes <name>.png."""
        renderer = DiagnosticRenderer(temp_dir)

        result = renderer.diagram(fsd_builder(3, 2), "fsd_7")

        assert result.ok
        assert result.path == os.path.join(temp_dir, "fsd_7.png")
        assert os.path.exists(result.path)

    def test_drawing_error_reported(self, temp_dir):
        """Test that an exception while drawing is returned, not raised."""
        renderer = DiagnosticRenderer(temp_dir)

        result = renderer.diagram(None, "fsd_0")

        assert not result.ok
        assert result.error

    def test_from_config(self):
        """Test building a renderer from its config section."""
        renderer = DiagnosticRenderer.from_config(RenderConfig(enabled=True, out_dir="out", cell_size=8))

        assert renderer.enabled
        assert renderer.out_dir == "out"
        assert renderer.cell_size == 8
