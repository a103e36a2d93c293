"""Breadth-first search over light patterns where every button press toggles lights."""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional

from .config import SearchConfig
from .errors import SearchLimitExceeded, UnreachableTargetError
from .model import Problem
from src.utils.trace import Tracer, get_tracer

ENGINE = "toggle"

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    """Result of one successful search."""

    presses: int
    expansions: int
    visited: int
    elapsed_seconds: float


def min_toggle_presses(
    problem: Problem, config: Optional[SearchConfig] = None, tracer: Optional[Tracer] = None
) -> SearchOutcome:
    """
    Fewest presses that turn the all-off pattern into ``problem.target_lights``.

    Raises UnreachableTargetError when the target is outside the toggle closure
    and SearchLimitExceeded when ``config.max_expansions`` or ``config.max_states``
    is hit first.
    """
    config = config or SearchConfig()
    tracer = tracer or get_tracer()
    start_time = time.perf_counter()

    length = problem.length
    target = problem.target_lights.bits
    masks = _distinct_masks(problem)

    if target == 0:
        tracer.log_goal(ENGINE, 0, 0)
        return SearchOutcome(0, 0, 1, time.perf_counter() - start_time)
    _check_coverage(problem)

    # The closure never holds more than 2**length patterns.
    limit = min(config.max_expansions, 1 << length)

    frontier: Deque[int] = deque([0])
    visited: Dict[int, int] = {0: 0}
    expansions = 0

    while frontier:
        if expansions >= limit:
            tracer.log_exhausted(ENGINE, f"expansion limit {limit} reached")
            raise SearchLimitExceeded(ENGINE, limit)
        state = frontier.popleft()
        distance = visited[state]
        expansions += 1
        tracer.log_expand(ENGINE, state, distance, len(frontier))

        for mask in masks:
            next_state = state ^ mask
            if next_state in visited:
                tracer.log_duplicate(ENGINE, next_state, distance + 1)
                continue
            if len(visited) >= config.max_states:
                tracer.log_exhausted(ENGINE, f"state limit {config.max_states} reached")
                raise SearchLimitExceeded(ENGINE, config.max_states, "storing")
            visited[next_state] = distance + 1
            if next_state == target:
                tracer.log_goal(ENGINE, next_state, distance + 1)
                elapsed = time.perf_counter() - start_time
                logger.debug(
                    "toggle search reached %s in %d presses (%d expansions)",
                    problem.target_lights, distance + 1, expansions,
                )
                return SearchOutcome(distance + 1, expansions, len(visited), elapsed)
            tracer.log_enqueue(ENGINE, next_state, distance + 1)
            frontier.append(next_state)

    tracer.log_exhausted(ENGINE, f"closure of {len(visited)} patterns exhausted")
    raise UnreachableTargetError(
        ENGINE,
        f"pattern {problem.target_lights} is not reachable; "
        f"explored all {len(visited)} reachable patterns",
    )


def _distinct_masks(problem: Problem):
    # Buttons with identical masks generate identical edges.
    seen = []
    for mask in problem.masks():
        if mask not in seen:
            seen.append(mask)
    return seen


def _check_coverage(problem: Problem) -> None:
    covered = problem.covered_positions()
    missing = [p for p in problem.target_lights.on_positions() if p not in covered]
    if missing:
        raise UnreachableTargetError(
            ENGINE, f"light {missing[0]} must be on but no button toggles it"
        )
