"""Configuration parsing utilities for the randomness tester."""

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .errors import InvalidConfigurationError, MissingFileError
from .tests.base import DEFAULT_BINS, DEFAULT_SIGNIFICANCE_LEVEL

DEFAULT_TESTS_ENABLED: Tuple[str, ...] = ("kolmogorov_smirnov", "chi_square", "runs")
DEFAULT_LAGS: Tuple[int, ...] = (1,)


@dataclass(frozen=True)
class RangeSection:
    """Declared inclusive range the samples are drawn from."""

    min_value: int = 0
    max_value: int = 255


@dataclass(frozen=True)
class TestsSection:
    """Configuration data describing which tests are enabled."""

    enabled_tests: Tuple[str, ...] = DEFAULT_TESTS_ENABLED


@dataclass(frozen=True)
class ParametersSection:
    """Parameters shared by the statistical queries."""

    alpha: float = DEFAULT_SIGNIFICANCE_LEVEL
    bins: int = DEFAULT_BINS
    lags: Tuple[int, ...] = DEFAULT_LAGS


@dataclass(frozen=True)
class OutputSection:
    """Options controlling where results are written."""

    report_path: Path | None = None


@dataclass(frozen=True)
class RandomTesterConfig:
    """Aggregate configuration container returned by :func:`load_config`."""

    range: RangeSection = field(default_factory=RangeSection)
    tests: TestsSection = field(default_factory=TestsSection)
    parameters: ParametersSection = field(default_factory=ParametersSection)
    output: OutputSection = field(default_factory=OutputSection)


def load_config(path: Path) -> RandomTesterConfig:
    """Load and validate an INI configuration file."""

    parser = configparser.ConfigParser()
    try:
        with path.open("r", encoding="utf-8") as config_file:
            parser.read_file(config_file)
    except FileNotFoundError as exc:
        raise MissingFileError(f"Configuration file not found: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read configuration file: {path}") from exc
    except configparser.Error as exc:
        raise InvalidConfigurationError(f"Configuration is not valid INI: {exc}") from exc

    return RandomTesterConfig(
        range=_parse_range(parser),
        tests=_parse_tests(parser),
        parameters=_parse_parameters(parser),
        output=_parse_output(parser, path),
    )


def _parse_range(parser: configparser.ConfigParser) -> RangeSection:
    if not parser.has_section("range"):
        return RangeSection()
    section = parser["range"]
    defaults = RangeSection()
    min_value = _get_int(section, "min", defaults.min_value, section_name="range")
    max_value = _get_int(section, "max", defaults.max_value, section_name="range")
    if min_value >= max_value:
        raise InvalidConfigurationError(
            f"Option 'min' in [range] must be less than 'max' ({min_value} >= {max_value})."
        )
    return RangeSection(min_value=min_value, max_value=max_value)


def _parse_tests(parser: configparser.ConfigParser) -> TestsSection:
    if not parser.has_section("tests"):
        return TestsSection()

    enabled: list[str] = []
    for name, _ in parser.items("tests"):
        try:
            is_enabled = parser.getboolean("tests", name)
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"Test '{name}' in [tests] must be a boolean value."
            ) from exc
        if is_enabled:
            enabled.append(name)

    if not enabled:
        raise InvalidConfigurationError("At least one test must be enabled in [tests] section.")

    return TestsSection(enabled_tests=tuple(enabled))


def _parse_parameters(parser: configparser.ConfigParser) -> ParametersSection:
    if not parser.has_section("parameters"):
        return ParametersSection()
    section = parser["parameters"]
    defaults = ParametersSection()

    alpha = defaults.alpha
    if "alpha" in section:
        try:
            alpha = float(section["alpha"].strip())
        except ValueError as exc:
            raise InvalidConfigurationError(
                "Option 'alpha' in [parameters] must be numeric."
            ) from exc
        if not 0.0 < alpha < 1.0:
            raise InvalidConfigurationError(
                "Option 'alpha' in [parameters] must be between 0 and 1 (exclusive)."
            )

    bins = _get_int(section, "bins", defaults.bins, section_name="parameters")
    if bins < 2:
        raise InvalidConfigurationError("Option 'bins' in [parameters] must be at least 2.")

    lags = defaults.lags
    if "lags" in section:
        raw_lags = [token.strip() for token in section["lags"].split(",") if token.strip()]
        try:
            lags = tuple(int(token) for token in raw_lags)
        except ValueError as exc:
            raise InvalidConfigurationError(
                "Option 'lags' in [parameters] must be a comma separated list of integers."
            ) from exc
        if any(lag <= 0 for lag in lags):
            raise InvalidConfigurationError("Option 'lags' in [parameters] must be positive.")

    return ParametersSection(alpha=alpha, bins=bins, lags=lags)


def _parse_output(parser: configparser.ConfigParser, config_path: Path) -> OutputSection:
    if not parser.has_section("output"):
        return OutputSection()
    section = parser["output"]
    report_path: Path | None = None
    raw_report = section.get("report_path", "").strip()
    if raw_report:
        candidate = Path(raw_report).expanduser()
        if not candidate.is_absolute():
            candidate = (config_path.resolve().parent / candidate).resolve()
        report_path = candidate
    return OutputSection(report_path=report_path)


def _get_int(
    section: configparser.SectionProxy, key: str, default: int, *, section_name: str
) -> int:
    if key not in section:
        return default
    try:
        return int(section[key].strip())
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{key}' in [{section_name}] must be an integer value."
        ) from exc


__all__ = [
    "OutputSection",
    "ParametersSection",
    "RandomTesterConfig",
    "RangeSection",
    "TestsSection",
    "load_config",
]
