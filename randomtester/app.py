"""Application orchestration for the randomness tester CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Sequence, TextIO

from .analysis import AnalysisSummary, analyse_sequence
from .config import RandomTesterConfig, load_config
from .engine import RandomnessTester
from .io import DEFAULT_MAX_ENTRIES, read_input_file
from .reporting import print_console_summary, write_markdown_report
from .tests.factory import build_test_suite

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Summary of a full application run."""

    input_path: Path
    config_path: Path | None
    summary: AnalysisSummary
    started_at: datetime
    duration: timedelta
    report_path: Path | None = None

    @property
    def is_random(self) -> bool:
        return self.summary.passed


class RandomTesterApp:
    """High level service wiring input, configuration, analysis and rendering."""

    def __init__(
        self, *, max_entries: int | None = DEFAULT_MAX_ENTRIES, stream: TextIO | None = None
    ) -> None:
        self._max_entries = max_entries
        self._stream = stream

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(
        self,
        input_path: Path,
        config_path: Path | None = None,
        report_path: Path | None = None,
        verbose: bool = False,
        write_report: bool = False,
    ) -> RunResult:
        """Execute the randomness tester workflow.

        A markdown report is written to ``report_path``, falling back to the
        configured ``[output] report_path``.  When neither is set but
        ``write_report`` is true, the default ``reports/`` location is used.
        """

        started_at = datetime.now(timezone.utc)
        config = self._load_config(config_path)
        samples = read_input_file(input_path, max_entries=self._max_entries)
        LOGGER.info("Loaded %d samples from %s", len(samples), input_path)

        summary = self.analyse(samples, config)
        duration = datetime.now(timezone.utc) - started_at
        result = RunResult(
            input_path=Path(input_path),
            config_path=config_path,
            summary=summary,
            started_at=started_at,
            duration=duration,
        )

        print_console_summary(result, verbose=verbose, stream=self._stream)
        target = report_path or config.output.report_path
        if target is not None or write_report:
            written = write_markdown_report(result, target)
            LOGGER.info("Report written to %s", written)
            result = replace(result, report_path=written)
        return result

    def analyse(self, samples: Sequence[int], config: RandomTesterConfig) -> AnalysisSummary:
        """Build an engine for ``samples`` and summarise it per ``config``."""

        tester = RandomnessTester(samples, config.range.min_value, config.range.max_value)
        suite = build_test_suite(config)
        parameters = config.parameters
        return analyse_sequence(
            tester,
            suite,
            alpha=parameters.alpha,
            bins=parameters.bins,
            lags=parameters.lags,
        )

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------
    def _load_config(self, path: Path | None) -> RandomTesterConfig:
        if path is None:
            LOGGER.info("No configuration given; using defaults.")
            return RandomTesterConfig()
        return load_config(path)


__all__ = ["RandomTesterApp", "RunResult"]
