"""Run both engines over a batch of problems and total the results."""

import logging
import multiprocessing as mp
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from .accumulate_search import min_increment_presses
from .config import SearchConfig
from .errors import SearchError
from .model import Problem
from .parser import format_problem
from .toggle_search import SearchOutcome, min_toggle_presses
from src.utils.trace import enable_tracing, get_tracer, reset_tracer

logger = logging.getLogger(__name__)


@dataclass
class ProblemResult:
    """Outcome of both searches for one problem; errors are kept as messages."""

    index: int
    line: str
    toggle: Optional[SearchOutcome] = None
    increment: Optional[SearchOutcome] = None
    toggle_error: Optional[str] = None
    increment_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.toggle_error is None and self.increment_error is None

    @property
    def toggle_presses(self) -> Optional[int]:
        return self.toggle.presses if self.toggle else None

    @property
    def increment_presses(self) -> Optional[int]:
        return self.increment.presses if self.increment else None

    def as_row(self) -> Dict[str, Any]:
        errors = [e for e in (self.toggle_error, self.increment_error) if e]
        return {
            "index": self.index,
            "line": self.line,
            "toggle_presses": self.toggle_presses,
            "increment_presses": self.increment_presses,
            "toggle_expansions": self.toggle.expansions if self.toggle else None,
            "increment_expansions": self.increment.expansions if self.increment else None,
            "error": "; ".join(errors),
        }


@dataclass
class AggregateReport:
    results: List[ProblemResult] = field(default_factory=list)

    @property
    def toggle_total(self) -> int:
        return sum(r.toggle_presses for r in self.results if r.toggle is not None)

    @property
    def increment_total(self) -> int:
        return sum(r.increment_presses for r in self.results if r.increment is not None)

    @property
    def failures(self) -> List[ProblemResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> Dict[str, Any]:
        return {
            "problems": len(self.results),
            "part1": self.toggle_total,
            "part2": self.increment_total,
            "failures": [
                {"index": r.index, "line": r.line, "error": r.as_row()["error"]}
                for r in self.failures
            ],
        }


def solve_one(problem: Problem, config: Optional[SearchConfig] = None, index: int = 0) -> ProblemResult:
    """Run both engines on one problem; a failing engine does not stop the other."""
    config = config or SearchConfig()
    reset_tracer()
    if config.trace_dir is not None:
        enable_tracing()
    tracer = get_tracer()

    result = ProblemResult(index=index, line=problem.source or format_problem(problem))
    try:
        result.toggle = min_toggle_presses(problem, config, tracer)
    except SearchError as exc:
        result.toggle_error = str(exc)
    try:
        result.increment = min_increment_presses(problem, config, tracer)
    except SearchError as exc:
        result.increment_error = str(exc)

    if config.trace_dir is not None:
        tracer.to_csv(Path(config.trace_dir) / f"problem_{index:04d}.csv")
    return result


def _solve_indexed(config: SearchConfig, item: Tuple[int, Problem]) -> ProblemResult:
    index, problem = item
    return solve_one(problem, config, index)


def solve_all(
    problems: Sequence[Problem], config: Optional[SearchConfig] = None, progress: bool = False
) -> AggregateReport:
    """Solve every problem, in parallel when ``config.workers > 1``, and total both parts."""
    config = config or SearchConfig()
    items = list(enumerate(problems))
    worker_func = partial(_solve_indexed, config)
    results: List[ProblemResult] = []

    with tqdm(total=len(items), desc="Solving", unit="problem", disable=not progress) as pbar:
        if config.workers > 1 and len(items) > 1:
            logger.info("Solving %d problems with %d workers", len(items), config.workers)
            with mp.Pool(processes=min(config.workers, len(items))) as pool:
                for result in pool.imap_unordered(worker_func, items):
                    results.append(result)
                    pbar.update(1)
        else:
            for item in items:
                results.append(worker_func(item))
                pbar.update(1)

    results.sort(key=lambda r: r.index)
    report = AggregateReport(results)
    for failure in report.failures:
        logger.warning("Problem %d failed: %s", failure.index, failure.as_row()["error"])
    return report
