"""
Run report generation.

Writes the trial results of a run as JSON plus a human-readable summary.
"""

import os

from pcmharness.io.save_artifacts import ensure_dir, save_json
from pcmharness.tracer import get_tracer, trace


def format_trial(trial):
    """Format a single trial result for display."""
    if trial.passed:
        return f"[PASS] case {trial.index}"
    line = f"[FAIL] case {trial.index} at {trial.stage.value}: {trial.message}"
    if trial.persisted_path:
        line += f" (saved to {trial.persisted_path})"
    elif trial.persist_error:
        line += f" (not saved: {trial.persist_error})"
    return line


def summarize_report(report):
    """Build the summary text of a run."""
    lines = ["Partial Curve Matching Harness Report", "=" * 40, ""]

    lines.append(f"Mode: {report.mode}")
    lines.append(f"Total cases: {len(report.trials)}")
    lines.append(f"Passed: {report.passed_count}")
    lines.append(f"Failed: {report.failed_count}")
    lines.append(f"Persisted: {report.persisted_count}")
    lines.append("")

    failed = [t for t in report.trials if not t.passed]
    if failed:
        lines.append("FAILURES:")
        lines.append("-" * 40)
        lines.extend(format_trial(t) for t in failed)
        lines.append("")

    lines.append("ALL CASES:")
    lines.append("-" * 40)
    lines.extend(format_trial(t) for t in report.trials)

    return "\n".join(lines)


@trace(label="generate_report")
def generate_report(report, out_dir):
    """
    Generate report files.

    Creates:
    - run_report.json: every trial result
    - run_summary.txt: human-readable summary

    Returns the two paths.
    """
    tracer = get_tracer()

    ensure_dir(out_dir)

    report_path = os.path.join(out_dir, "run_report.json")
    data = report.model_dump(mode="json")
    data["passed"] = report.passed_count
    data["failed"] = report.failed_count
    data["persisted"] = report.persisted_count
    save_json(data, report_path)

    summary_path = os.path.join(out_dir, "run_summary.txt")
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write(summarize_report(report))

    tracer.event(f"Report saved: {len(report.trials)} cases, {report.failed_count} failed")

    return report_path, summary_path
