"""
Pydantic data models for the harness.

Test cases, diagrams handed over by the matching engine, and the per-trial
and per-run results all flow through these models.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


Steps = List[Tuple[float, float]]


def as_curve(points):
    """
    Convert a point sequence into a read-only (n, 2) float64 array.

    Raises ValueError for empty input or points that are not 2D.
    """
    curve = np.array(points, dtype=np.float64)
    if curve.ndim != 2 or curve.shape[1] != 2:
        raise ValueError(f"Curve must be a sequence of (x, y) points, got shape {curve.shape}")
    if len(curve) < 1:
        raise ValueError("Curve must contain at least one point")
    curve.setflags(write=False)
    return curve


class LineBoundary(BaseModel):
    """Free sub-interval [a, b] of a unit cell edge."""
    a: float
    b: float

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_interval(self):
        if not (0.0 <= self.a <= self.b <= 1.0):
            raise ValueError(f"Boundary [{self.a}, {self.b}] outside 0 <= a <= b <= 1")
        return self


class TestCase(BaseModel):
    """Two curves and the distance threshold they are matched under."""
    primary_curve: np.ndarray
    secondary_curve: np.ndarray
    epsilon: float = Field(..., gt=0.0)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # Not a pytest test class despite the name.
    __test__ = False

    @field_validator("primary_curve", "secondary_curve", mode="before")
    @classmethod
    def _to_curve(cls, value):
        return as_curve(value)


class FreeSpaceDiagram(BaseModel):
    """
    Free-space diagram over an n x m lattice, as built by the matching engine.

    Edges are keyed (axis, x, y). Axis 0 edges run between (x, y) and
    (x, y + 1) with dims (n, m - 1); axis 1 edges are the same with the
    coordinates swapped, dims (m, n - 1). A missing key means the edge has
    no free interval at all. corners[i, j] marks free space exactly at
    lattice vertex (i, j).
    """
    n: int = Field(..., ge=1)
    m: int = Field(..., ge=1)
    segments: Dict[Tuple[int, int, int], LineBoundary] = Field(default_factory=dict)
    corners: np.ndarray

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("corners", mode="before")
    @classmethod
    def _to_bool_grid(cls, value):
        return np.asarray(value, dtype=bool)

    @model_validator(mode="after")
    def _check_shape(self):
        if self.corners.shape != (self.n, self.m):
            raise ValueError(f"Corner grid shape {self.corners.shape} does not match {self.n}x{self.m}")
        return self

    @property
    def dims(self):
        return [(self.n, self.m - 1), (self.m, self.n - 1)]

    def segment(self, axis, x, y):
        """Boundary of edge (axis, x, y), or None if the edge is not free."""
        return self.segments.get((axis, x, y))

    def edges(self):
        """Yield every (axis, x, y) edge key of the lattice."""
        for axis in (0, 1):
            w, h = self.dims[axis]
            for x in range(w):
                for y in range(h):
                    yield (axis, x, y)


class ReachabilityDiagram(FreeSpaceDiagram):
    """Free-space diagram restricted to what a monotone path can reach."""


class TrialStage(str, Enum):
    """Stage of a trial at which it failed."""
    FREE_SPACE = "free_space"
    DIAGRAM_CHECK = "diagram_check"
    REACHABILITY = "reachability"
    STEPS_EXTRACTION = "steps_extraction"
    PARTIAL_MATCH = "partial_match"
    WITNESS = "witness"
    PATH_CHECK = "path_check"


class TrialResult(BaseModel):
    """Outcome of running one test case."""
    index: int
    passed: bool
    stage: Optional[TrialStage] = None
    rule_id: str = ""
    message: str = ""
    evidence: Dict[str, Any] = Field(default_factory=dict)
    partial_match: Optional[bool] = None
    witness_length: Optional[int] = None
    renders: List[str] = Field(default_factory=list)
    persisted_path: Optional[str] = None
    persist_error: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class RunReport(BaseModel):
    """Collection of trial results for one harness invocation."""
    mode: str
    trials: List[TrialResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def passed_count(self):
        return sum(1 for t in self.trials if t.passed)

    @property
    def failed_count(self):
        return sum(1 for t in self.trials if not t.passed)

    @property
    def persisted_count(self):
        return sum(1 for t in self.trials if t.persisted_path)

    @property
    def has_failures(self):
        return self.failed_count > 0
