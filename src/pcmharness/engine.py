"""
Interface to the partial-curve-matching engine under test.

The harness does not build diagrams itself. Any object with the four methods
of MatchingEngine can be tested; load_engine resolves one from a
"module:attribute" path.
"""

import importlib
from typing import Optional, Protocol, runtime_checkable

from pcmharness.models import FreeSpaceDiagram, ReachabilityDiagram, Steps


@runtime_checkable
class MatchingEngine(Protocol):
    """Operations the harness needs from a matching engine."""

    def build_free_space_diagram(self, curve_a, curve_b, epsilon) -> FreeSpaceDiagram:
        ...

    def to_reachability_diagram(self, fsd) -> ReachabilityDiagram:
        ...

    def extract_steps(self, rsd) -> Optional[Steps]:
        """Witness path, or None. Raises EngineError on internal inconsistency."""
        ...

    def has_partial_match(self, rsd) -> bool:
        ...


def load_engine(path):
    """
    Resolve a matching engine from "package.module:attribute".

    A class or other factory found there is called without arguments.
    Raises ValueError for a malformed path or an object that is not an engine.
    """
    module_name, sep, attr = (path or "").partition(":")
    if not module_name or not sep or not attr:
        raise ValueError(f"Engine path must look like 'package.module:attribute', got {path!r}")

    target = getattr(importlib.import_module(module_name), attr)
    # A class has the protocol methods as attributes too
    if isinstance(target, type) or (callable(target) and not isinstance(target, MatchingEngine)):
        engine = target()
    else:
        engine = target

    if not isinstance(engine, MatchingEngine):
        raise ValueError(f"{path} does not provide a matching engine")

    return engine
