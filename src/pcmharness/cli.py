"""
Command-line interface for the partial-curve-matching harness.

Provides commands for running trials, writing a default config and
inspecting the regression corpus.
"""

import argparse
import sys

from pcmharness.config import load_config, save_default_config
from pcmharness.tracer import configure_tracer, get_tracer


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Regression harness for a partial curve matching engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run the configured trials")
    run_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    run_parser.add_argument(
        "--out", "-o",
        default=None,
        help="Directory for run_report.json and run_summary.txt",
    )
    run_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    run_parser.add_argument(
        "--trace-level",
        default=None,
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    run_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    run_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="pcmharness_config.yaml",
        help="Output path for config file",
    )

    # Corpus command
    corpus_parser = subparsers.add_parser("corpus", help="Corpus subcommands")
    corpus_subparsers = corpus_parser.add_subparsers(dest="corpus_command")

    list_parser = corpus_subparsers.add_parser("list", help="List stored cases")
    list_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "run":
        return handle_run(args)
    elif args.command == "init-config":
        return handle_init_config(args)
    elif args.command == "corpus":
        if args.corpus_command == "list":
            return handle_corpus_list(args)
        corpus_parser.print_help()
        return 0

    return 0


def handle_run(args):
    """Handle the run command."""
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    tracing = config.tracing
    configure_tracer(
        enabled=args.trace or tracing.enabled,
        level=args.trace_level or tracing.level,
        file_path=args.trace_file or tracing.file_path,
        json_output=args.trace_json or tracing.json_output,
    )

    tracer = get_tracer()

    try:
        from pcmharness.pipeline import run_harness
        from pcmharness.report import format_trial, generate_report

        with tracer.span("cli_run", module="cli"):
            report = run_harness(config=config)

            if args.out:
                generate_report(report, args.out)

    except Exception as e:
        tracer.event(f"Run failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    for trial in report.trials:
        if not trial.passed:
            print(f"Test case {trial.index} failed. Error message:")
            print(f"  {format_trial(trial)}")

    print(f"\nRun completed ({report.mode}).")
    print(f"  Cases run: {len(report.trials)}")
    print(f"  Passed: {report.passed_count}")
    print(f"  Failed: {report.failed_count}")
    print(f"  Persisted: {report.persisted_count}")
    if args.out:
        print(f"\nReport saved to: {args.out}/")

    return 1 if report.has_failures else 0


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


def handle_corpus_list(args):
    """Handle the corpus list command."""
    from pcmharness.corpus.store import list_cases

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    try:
        paths = list_cases(config.corpus.directory)
    except FileNotFoundError:
        print(f"No corpus at {config.corpus.directory}/")
        return 0

    for path in paths:
        print(path)
    print(f"{len(paths)} cases in {config.corpus.directory}/")
    return 0


if __name__ == "__main__":
    sys.exit(main())
