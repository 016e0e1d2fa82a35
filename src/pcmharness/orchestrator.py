"""
Single-trial orchestration.

Runs one test case through the matching engine, checks the free-space
diagram and, when the engine claims a partial match, its witness path.
Diagnostic renders are requested along the way but never affect the verdict.
"""

from pcmharness.errors import EngineError, InvariantViolation
from pcmharness.io.save_artifacts import DiagnosticRenderer
from pcmharness.models import TrialResult, TrialStage
from pcmharness.tracer import get_tracer
from pcmharness.verify.diagram import check_corner_consistency
from pcmharness.verify.path import check_steps


def _call_engine(result, stage, func, *args):
    """Call into the engine, turning any failure into an EngineError."""
    result.stage = stage
    try:
        return func(*args)
    except EngineError as e:
        e.stage = stage
        raise
    except Exception as e:
        raise EngineError(f"{type(e).__name__}: {e}", stage=stage) from e


def _verify(result, stage, func, *args):
    """Run a verifier, tagging its violation with the trial stage."""
    result.stage = stage
    try:
        func(*args)
    except InvariantViolation as e:
        e.stage = stage
        raise


def _keep(result, outcome):
    if outcome.ok:
        result.renders.append(outcome.path)


def run_trial(case, engine, index, tolerance, renderer=None):
    """
    Run one test case and judge the engine's output.

    Returns a TrialResult. Invariant violations, engine failures and any
    other error raised while judging are recorded in it rather than raised;
    the stage is the one that was running.
    """
    tracer = get_tracer()
    renderer = renderer or DiagnosticRenderer(None, enabled=False)
    result = TrialResult(index=index, passed=False)

    with tracer.span(f"trial_{index}", module="orchestrator", case=case):
        try:
            _judge(case, engine, index, tolerance, renderer, result)
        except InvariantViolation as e:
            result.stage = e.stage
            result.rule_id = e.rule_id
            result.message = e.message
            result.evidence = e.evidence
        except EngineError as e:
            result.stage = e.stage
            result.rule_id = "engine_error"
            result.message = e.message
        except Exception as e:
            # Malformed engine output, e.g. a diagram of the wrong type
            result.rule_id = "engine_contract"
            result.message = f"{type(e).__name__}: {e}"
        else:
            result.passed = True
            result.stage = None

        if not result.passed:
            tracer.event(f"Trial {index} failed at {result.stage.value}: {result.message}", level="ERROR")

    return result


def _judge(case, engine, index, tolerance, renderer, result):
    tracer = get_tracer()
    ps, qs, eps = case.primary_curve, case.secondary_curve, case.epsilon

    _keep(result, renderer.curve_pair(ps, qs, f"curve_{index}"))

    fsd = _call_engine(result, TrialStage.FREE_SPACE, engine.build_free_space_diagram, ps, qs, eps)
    _verify(result, TrialStage.DIAGRAM_CHECK, check_corner_consistency, fsd, tolerance)
    _keep(result, renderer.diagram(fsd, f"fsd_{index}"))

    rsd = _call_engine(result, TrialStage.REACHABILITY, engine.to_reachability_diagram, fsd)
    _keep(result, renderer.diagram(rsd, f"rsd_{index}"))

    steps = _call_engine(result, TrialStage.STEPS_EXTRACTION, engine.extract_steps, rsd)
    if steps is not None:
        result.witness_length = len(steps)
        _keep(result, renderer.diagram(rsd, f"path_{index}", steps=steps))

    partial = bool(_call_engine(result, TrialStage.PARTIAL_MATCH, engine.has_partial_match, rsd))
    result.partial_match = partial
    tracer.event(f"Is there a partial curve match?: {partial}")

    if not partial:
        return

    if steps is None:
        result.stage = TrialStage.WITNESS
        raise EngineError("Should find steps if partial curve match is true.", stage=TrialStage.WITNESS)

    _verify(result, TrialStage.PATH_CHECK, check_steps, ps, qs, steps, eps, tolerance)
