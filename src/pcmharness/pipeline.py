"""
Driver loop for the harness.

Discover mode runs freshly generated cases and stores every failing one in
the corpus. Replay mode runs the stored cases again without storing anything.
"""

import numpy as np

from pcmharness.config import DISCOVER, REPLAY, load_config
from pcmharness.corpus.store import load_cases, persist_case
from pcmharness.curves.generate import generate_cases
from pcmharness.engine import load_engine
from pcmharness.errors import CorpusError
from pcmharness.io.save_artifacts import DiagnosticRenderer
from pcmharness.models import RunReport
from pcmharness.orchestrator import run_trial
from pcmharness.tracer import get_tracer, trace


def collect_cases(config, rng):
    """
    Build the list of cases for a run.

    Corpus read errors in Replay mode propagate; a run cannot start without
    its whole corpus.
    """
    count = config.run.run_count

    if config.run.mode == DISCOVER:
        return generate_cases(count, config.generator, config.check.epsilon, rng)
    if config.run.mode == REPLAY:
        return load_cases(config.corpus.directory)[:count]

    raise ValueError(f"Unknown run mode: {config.run.mode!r}")


@trace(label="run_harness")
def run_harness(config=None, engine=None, rng=None, config_path=None):
    """
    Run every case of one harness invocation.

    Args:
        config: HarnessConfig object (optional)
        engine: matching engine; resolved from config.engine when omitted
        rng: numpy Generator for Discover cases; seeded from config otherwise
        config_path: path to YAML config file (optional)

    Returns:
        RunReport with one TrialResult per case
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)
    if engine is None:
        if not config.engine:
            raise ValueError("No matching engine configured")
        engine = load_engine(config.engine)
    if rng is None:
        rng = np.random.default_rng(config.generator.seed)

    cases = collect_cases(config, rng)
    renderer = DiagnosticRenderer.from_config(config.render)
    report = RunReport(mode=config.run.mode)

    for index, case in enumerate(cases):
        result = run_trial(case, engine, index, config.check.tolerance, renderer)
        report.trials.append(result)

        if result.passed:
            continue

        tracer.event(f"Test case {index} failed: {result.message}", level="ERROR")

        # Replayed cases are already in the corpus
        if config.run.mode == DISCOVER:
            try:
                result.persisted_path = persist_case(case, config.corpus.directory)
            except (OSError, CorpusError) as e:
                result.persist_error = f"{type(e).__name__}: {e}"
                tracer.event(f"Could not persist case {index}: {result.persist_error}", level="ERROR")

    tracer.event(
        f"Run complete: {report.passed_count} passed, {report.failed_count} failed, "
        f"{report.persisted_count} persisted"
    )

    return report
