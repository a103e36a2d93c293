"""Top-level solve interface.

Expose `solve_problem(problem)` that accepts either a parsed Problem or a raw
problem line compatible with `src.reach.parser.parse_problem`.
"""

from typing import Any, Optional

from src.reach.aggregate import ProblemResult, solve_one
from src.reach.config import SearchConfig
from src.reach.model import Problem
from src.reach.parser import parse_problem


def solve_problem(problem: Any, config: Optional[SearchConfig] = None, index: int = 0) -> ProblemResult:
    """
    Solve both parts for a single problem.
    Accepts:
      - Problem instances (used directly)
      - Raw problem lines (parsed via `parse_problem`)
    """
    if isinstance(problem, Problem):
        parsed = problem
    elif isinstance(problem, str):
        parsed = parse_problem(problem)
    else:
        raise TypeError("solve_problem expects a Problem instance or problem line")

    return solve_one(parsed, config, index)


__all__ = ["solve_problem"]
