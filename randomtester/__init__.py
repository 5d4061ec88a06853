"""Statistical randomness testing for integer sample sequences."""

from .analysis import AnalysisSummary, HypothesisOutcome, analyse_sequence
from .app import RandomTesterApp, RunResult
from .engine import RandomnessTester
from .errors import InvalidArgumentError, InvalidInputError, RandomTesterError

__all__ = [
    "AnalysisSummary",
    "HypothesisOutcome",
    "InvalidArgumentError",
    "InvalidInputError",
    "RandomTesterApp",
    "RandomTesterError",
    "RandomnessTester",
    "RunResult",
    "analyse_sequence",
]
