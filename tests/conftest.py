"""Pytest fixtures for harness tests."""

import os
import tempfile

import numpy as np
import pytest

from pcmharness.errors import EngineError
from pcmharness.models import FreeSpaceDiagram, LineBoundary, ReachabilityDiagram


def build_fsd(n, m, boundary=None, corners=False):
    """Create an n x m diagram with the same boundary on every edge."""
    fsd = FreeSpaceDiagram(n=n, m=m, corners=np.full((n, m), corners))
    if boundary is not None:
        a, b = boundary
        fsd.segments = {edge: LineBoundary(a=a, b=b) for edge in fsd.edges()}
    return fsd


class ScriptedEngine:
    """
    Stand-in matching engine returning canned answers.

    Without an explicit diagram it answers with a fully free diagram sized
    to the curves. fail_at names a method that raises instead of answering.
    """

    def __init__(self, fsd=None, steps=None, partial=False, fail_at=None):
        self.fsd = fsd
        self.steps = steps
        self.partial = partial
        self.fail_at = fail_at
        self.calls = []
        self.cases = []

    def _enter(self, name):
        self.calls.append(name)
        if self.fail_at == name:
            if name == "extract_steps":
                raise EngineError("Inconsistent reachability diagram")
            raise RuntimeError(f"{name} crashed")

    def build_free_space_diagram(self, curve_a, curve_b, epsilon):
        self._enter("build_free_space_diagram")
        self.cases.append((np.array(curve_a), np.array(curve_b), epsilon))
        if self.fsd is not None:
            return self.fsd
        return build_fsd(len(curve_a), len(curve_b), boundary=(0.0, 1.0), corners=True)

    def to_reachability_diagram(self, fsd):
        self._enter("to_reachability_diagram")
        return ReachabilityDiagram(n=fsd.n, m=fsd.m, segments=dict(fsd.segments), corners=fsd.corners)

    def extract_steps(self, rsd):
        self._enter("extract_steps")
        return self.steps

    def has_partial_match(self, rsd):
        self._enter("has_partial_match")
        return self.partial


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def corpus_dir(temp_dir):
    """Path of a corpus directory that does not exist yet."""
    return os.path.join(temp_dir, "testdata")


@pytest.fixture
def default_config():
    """Create default harness configuration."""
    from pcmharness.config import HarnessConfig
    return HarnessConfig()


@pytest.fixture
def scripted_engine():
    """Factory for scripted matching engines."""
    return ScriptedEngine


@pytest.fixture
def fsd_builder():
    """Factory for uniform free-space diagrams."""
    return build_fsd


@pytest.fixture
def straight_curve():
    """Five collinear points along the x axis."""
    return [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (3.0, 0.0), (4.0, 0.0)]


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(1234)
