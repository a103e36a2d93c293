"""Minimum button-press search for toggle patterns and accumulated levels."""

from .model import BinaryState, Operation, Problem
from .parser import format_problem, parse_problem, parse_problems
from .toggle_search import SearchOutcome, min_toggle_presses
from .accumulate_search import min_increment_presses
from .aggregate import AggregateReport, ProblemResult, solve_all, solve_one
from .config import SearchConfig
from .errors import (
    ParseError,
    ProblemError,
    ReachError,
    SearchError,
    SearchLimitExceeded,
    UnreachableTargetError,
)

__all__ = [
    "BinaryState",
    "Operation",
    "Problem",
    "parse_problem",
    "parse_problems",
    "format_problem",
    "SearchOutcome",
    "min_toggle_presses",
    "min_increment_presses",
    "AggregateReport",
    "ProblemResult",
    "solve_all",
    "solve_one",
    "SearchConfig",
    "ReachError",
    "ProblemError",
    "ParseError",
    "SearchError",
    "UnreachableTargetError",
    "SearchLimitExceeded",
]
