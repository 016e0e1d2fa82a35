"""
Artifact saving utilities for the harness.

Handles writing PNG renders and JSON reports. Diagnostic renders are
best-effort: a failed render is logged and reported, never raised.
"""

import json
import os
from dataclasses import dataclass

import cv2

from pcmharness.render.draw import draw_curve_pair, draw_diagram
from pcmharness.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_image(img, path):
    """
    Save an RGB image to disk.

    Raises OSError if OpenCV cannot write the file.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))
    if len(img.shape) == 3 and img.shape[2] == 3:
        img = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
    if not cv2.imwrite(path, img):
        raise OSError(f"Failed to write image: {path}")

    tracer.event(f"Saved image: {path}")


def save_json(data, path, indent=2):
    """Save a dictionary or Pydantic model to JSON."""
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


@dataclass
class RenderResult:
    """Outcome of one best-effort render. Callers may ignore it."""
    name: str
    path: str = None
    error: str = None

    @property
    def ok(self):
        return self.error is None and self.path is not None


class DiagnosticRenderer:
    """
    Writes diagnostic PNGs for trials into one directory.

    Every method catches its own failures and returns a RenderResult, so
    rendering can never change the outcome of a trial.
    """

    def __init__(self, out_dir, enabled=True, cell_size=20, margin=20, curve_canvas=400):
        self.out_dir = out_dir
        self.enabled = enabled
        self.cell_size = cell_size
        self.margin = margin
        self.curve_canvas = curve_canvas

    @classmethod
    def from_config(cls, render_config):
        return cls(
            render_config.out_dir,
            enabled=render_config.enabled,
            cell_size=render_config.cell_size,
            margin=render_config.margin,
            curve_canvas=render_config.curve_canvas,
        )

    def curve_pair(self, primary, secondary, name):
        """Render two curves to <name>.png."""
        return self._render(name, lambda: draw_curve_pair(
            primary, secondary, canvas=self.curve_canvas, margin=self.margin,
        ))

    def diagram(self, fsd, name, steps=None):
        """Render a diagram, with an optional witness overlay, to <name>.png."""
        return self._render(name, lambda: draw_diagram(
            fsd, steps=steps, cell_size=self.cell_size, margin=self.margin,
        ))

    def _render(self, name, draw):
        if not self.enabled:
            return RenderResult(name=name)

        path = os.path.join(self.out_dir, f"{name}.png")
        try:
            save_image(draw(), path)
        except Exception as e:
            get_tracer().event(f"Render of {name} failed: {type(e).__name__}: {e}", level="WARN")
            return RenderResult(name=name, error=str(e))

        return RenderResult(name=name, path=path)
