"""Reporting utilities for console and markdown output."""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from string import Template
from typing import Sequence, TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from datetime import timedelta
    from .analysis import AnalysisSummary, HypothesisOutcome
    from .app import RunResult


@dataclass(frozen=True)
class ReportTemplate:
    """Container for the markdown report template."""

    template: Template = Template(
        "# Sequence Randomness Report\n\n"
        "## Summary\n${summary}\n\n"
        "## File Metadata\n${file_metadata}\n\n"
        "## Hypothesis Tests\n${test_table}\n${test_notes}\n"
        "## Descriptive Statistics\n${descriptive}\n\n"
        "## Interpretations\n${interpretations}\n\n"
        "_Generated on ${timestamp} (duration: ${duration})._\n"
    )


DEFAULT_TEMPLATE = ReportTemplate()


def print_console_summary(result: "RunResult", *, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Print a short summary of the analysis to ``stream``."""

    output = stream if stream is not None else sys.stdout
    summary = result.summary
    status = "RANDOM" if summary.passed else "NON-RANDOM"
    passed = sum(1 for test in summary.tests if test.passed)
    print(
        f"Result: {status} | Tests passed: {passed}/{len(summary.tests)} | CRC-32: 0x{summary.crc32:08X}",
        file=output,
    )
    if not verbose:
        return

    print(f"Samples: {summary.count} in [{summary.min_value}, {summary.max_value}]", file=output)
    for test in summary.tests:
        print(
            f" - {test.name}: statistic {_format_number(test.statistic)}, "
            f"p = {test.p_value:.4f} => {'PASS' if test.passed else 'FAIL'}",
            file=output,
        )
        for line in _format_detail_block(test.details):
            print(f"   {line}", file=output)
    for lag, value in summary.autocorrelations:
        print(f"Autocorrelation (lag {lag}): {value:.4f}", file=output)
    print(f"Longest run of repeated values: {summary.longest_run}", file=output)
    for note in summary.metadata:
        print(f"note: {note}", file=output)
    print(f"Significance level: {summary.threshold:.3f}", file=output)


def build_markdown_report(result: "RunResult", *, template: Template | None = None) -> str:
    """Generate a markdown report for ``result`` using ``template``."""

    template = template or DEFAULT_TEMPLATE.template
    summary = result.summary
    timestamp = result.started_at.astimezone(timezone.utc).isoformat()

    return template.substitute(
        summary=_format_summary_section(summary),
        file_metadata=_format_file_metadata(result),
        test_table=_format_test_table(summary.tests),
        test_notes=_format_test_notes(summary.tests),
        descriptive=_format_descriptive(summary),
        interpretations=_format_interpretations(summary.metadata),
        timestamp=timestamp,
        duration=_format_duration(result.duration),
    )


def write_markdown_report(
    result: "RunResult",
    path: Path | None = None,
    *,
    template: Template | None = None,
) -> Path:
    """Render and persist a markdown report for ``result``."""

    target = _resolve_report_path(result, path)
    target.parent.mkdir(parents=True, exist_ok=True)
    content = build_markdown_report(result, template=template)
    target.write_text(content, encoding="utf-8")
    return target


# ---------------------------------------------------------------------------
# Helper formatting utilities
# ---------------------------------------------------------------------------

def _format_number(value: float) -> str:
    if math.isinf(value):
        return "inf"
    return f"{value:.4f}"


def _format_detail_block(details: str) -> Sequence[str]:
    stripped = details.strip()
    if not stripped:
        return ()
    return tuple(stripped.splitlines())


def _format_summary_section(summary: "AnalysisSummary") -> str:
    verdict = "RANDOM" if summary.passed else "NON-RANDOM"
    passed = sum(1 for test in summary.tests if test.passed)
    return "\n".join(
        [
            f"- **Result:** {verdict}",
            f"- **Tests passed:** {passed}/{len(summary.tests)}",
            f"- **Significance level:** {summary.threshold:.3f}",
        ]
    )


def _format_file_metadata(result: "RunResult") -> str:
    lines = [_metadata_line("Input", result.input_path)]
    if result.config_path is not None:
        lines.append(_metadata_line("Configuration", result.config_path))
    summary = result.summary
    lines.append(f"- **Samples:** {summary.count}")
    lines.append(f"- **Declared range:** [{summary.min_value}, {summary.max_value}]")
    return "\n".join(lines)


def _metadata_line(label: str, path: Path) -> str:
    try:
        stat = path.stat()
        modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
        details = f"size: {stat.st_size} bytes, modified: {modified.isoformat()}"
    except OSError:
        details = "metadata unavailable"
    return f"- **{label} file:** {path} ({details})"


def _format_test_table(tests: Sequence["HypothesisOutcome"]) -> str:
    header = "| Test | Statistic | P-Value | Alpha | Outcome |"
    separator = "| --- | --- | --- | --- | --- |"
    rows = [
        "| {} | {} | {:.4f} | {:.3f} | {} |".format(
            test.name,
            _format_number(test.statistic),
            test.p_value,
            test.threshold,
            "PASS" if test.passed else "FAIL",
        )
        for test in tests
    ]
    if not rows:
        rows.append("| _(no tests executed)_ | - | - | - | - |")
    return "\n".join([header, separator, *rows])


def _format_test_notes(tests: Sequence["HypothesisOutcome"]) -> str:
    sections: list[str] = []
    for test in tests:
        detail_lines = _format_detail_block(test.details)
        if not detail_lines:
            continue
        section_lines = [f"### {test.name}"]
        section_lines.extend(f"> {line}" for line in detail_lines)
        sections.append("\n".join(section_lines))
    if not sections:
        return "\n"
    return "\n\n" + "\n\n".join(sections) + "\n"


def _format_descriptive(summary: "AnalysisSummary") -> str:
    lines = [
        f"- **Autocorrelation (lag {lag}):** {value:.4f}"
        for lag, value in summary.autocorrelations
    ]
    lines.append(f"- **Longest run of repeated values:** {summary.longest_run}")
    lines.append(f"- **Values occurring more than once:** {summary.duplicated_values}")
    lines.append(f"- **CRC-32:** 0x{summary.crc32:08X}")
    return "\n".join(lines)


def _format_interpretations(metadata: Sequence[str]) -> str:
    if not metadata:
        return "- No additional interpretations were recorded."
    return "\n".join(f"- {note}" for note in metadata)


def _format_duration(duration: "timedelta") -> str:
    total_seconds = duration.total_seconds()
    if total_seconds < 1:
        return f"{total_seconds * 1000:.0f} ms"
    return f"{total_seconds:.2f} s"


def _resolve_report_path(result: "RunResult", path: Path | None) -> Path:
    if path is not None:
        return Path(path).expanduser().resolve()
    stem = result.input_path.stem or result.input_path.name or "analysis"
    safe_stem = re.sub(r"[^A-Za-z0-9_.-]+", "-", stem).strip("-") or "analysis"
    timestamp = result.started_at.astimezone(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return (Path("reports") / f"{safe_stem}-{timestamp}.md").resolve()


__all__ = [
    "DEFAULT_TEMPLATE",
    "ReportTemplate",
    "build_markdown_report",
    "print_console_summary",
    "write_markdown_report",
]
