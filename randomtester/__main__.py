"""Command line entry point for the randomness tester."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .app import RandomTesterApp
from .errors import InvalidConfigurationError, InvalidInputError, MissingFileError

EXIT_SUCCESS = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_MISSING_FILE = 2
EXIT_INVALID_CONFIG = 3
EXIT_INVALID_INPUT = 4

DEFAULT_REPORT = object()
"""Marker for a bare ``--report`` flag."""

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="randomtester",
        description="Run statistical randomness tests over a sequence of integer samples.",
    )
    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        required=True,
        help="Path to a text file containing integer samples.",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Optional INI configuration file (range, enabled tests, parameters).",
    )
    parser.add_argument(
        "--report",
        "-r",
        nargs="?",
        const=DEFAULT_REPORT,
        type=Path,
        help=(
            "Write a markdown report to PATH; without PATH the report goes to "
            "reports/<input>-<timestamp>.md."
        ),
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print per-test details and enable debug logging.",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    write_report = args.report is not None
    report_path = None if args.report is DEFAULT_REPORT else args.report
    app = RandomTesterApp()
    try:
        result = app.run(
            input_path=args.input,
            config_path=args.config,
            report_path=report_path,
            verbose=args.verbose,
            write_report=write_report,
        )
    except MissingFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_MISSING_FILE
    except InvalidConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG
    except InvalidInputError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except Exception as exc:  # pragma: no cover - defensive guard
        logging.getLogger(__name__).exception("Unexpected failure")
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED_ERROR
    if result.report_path is not None:
        print(f"Report written to {result.report_path}")
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
