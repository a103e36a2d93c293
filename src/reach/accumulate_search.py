"""Best-first search over level vectors where every button press adds one to its positions.

Levels only ever grow, so any candidate that overshoots a target component is
dropped on sight. That bound also keeps the searchable space finite: at most
``prod(target[i] + 1)`` vectors.
"""

import heapq
import itertools
import logging
import time
from typing import Callable, Dict, List, Optional, Set, Tuple

from .config import SearchConfig
from .errors import SearchLimitExceeded, UnreachableTargetError
from .model import Levels, Problem, apply_increment, deficit, exceeds, zero_levels
from .toggle_search import SearchOutcome
from src.utils.trace import Tracer, get_tracer

ENGINE = "increment"

Heuristic = Callable[[Levels], int]

logger = logging.getLogger(__name__)


def estimate_remaining(
    remaining: Levels, min_footprint: int, max_footprint: int, heuristic: str
) -> int:
    """
    Estimate presses still needed given the per-position ``remaining`` deficit.

    - ``footprint``: total deficit divided by the smallest button footprint.
      Can overestimate when wide buttons are part of the optimum.
    - ``admissible``: a press covers at most ``max_footprint`` units of deficit
      and at most one unit of any single position, so the larger of the two
      lower bounds never overestimates and drops by at most one per press.
    - ``uniform``: always 0, plain distance order.
    """
    if heuristic == "uniform":
        return 0
    total = sum(remaining)
    if heuristic == "footprint":
        return total // min_footprint
    if not remaining:
        return 0
    return max(-(-total // max_footprint), max(remaining))


def make_heuristic(problem: Problem, name: str) -> Heuristic:
    footprints = [op.footprint for op in problem.operations]
    min_footprint, max_footprint = min(footprints), max(footprints)
    target = problem.target_levels

    def _estimate(levels: Levels) -> int:
        return estimate_remaining(deficit(levels, target), min_footprint, max_footprint, name)

    return _estimate


def min_increment_presses(
    problem: Problem, config: Optional[SearchConfig] = None, tracer: Optional[Tracer] = None
) -> SearchOutcome:
    """
    Fewest presses that raise the all-zero vector to ``problem.target_levels`` exactly.

    Optimal for the ``admissible`` and ``uniform`` heuristics. Raises
    UnreachableTargetError when no press sequence hits the target exactly and
    SearchLimitExceeded when ``config.max_expansions`` or ``config.max_states`` is
    hit first.
    """
    config = config or SearchConfig()
    tracer = tracer or get_tracer()
    start_time = time.perf_counter()

    target = problem.target_levels
    start = zero_levels(problem.length)
    if start == target:
        tracer.log_goal(ENGINE, start, 0)
        return SearchOutcome(0, 0, 1, time.perf_counter() - start_time)
    _check_coverage(problem)

    estimate = make_heuristic(problem, config.heuristic)
    increments = _distinct_increments(problem)
    counter = itertools.count()

    # Entries are (estimated total, -distance, insertion order, levels): ties on
    # the estimate go to the deeper node, then to the earlier insertion.
    frontier: List[Tuple[int, int, int, Levels]] = []
    best_distance: Dict[Levels, int] = {start: 0}
    finalized: Set[Levels] = set()
    heapq.heappush(frontier, (estimate(start), 0, next(counter), start))
    expansions = 0

    while frontier:
        _, negative_distance, _, levels = heapq.heappop(frontier)
        distance = -negative_distance
        if levels in finalized or distance > best_distance[levels]:
            continue
        if levels == target:
            tracer.log_goal(ENGINE, levels, distance)
            elapsed = time.perf_counter() - start_time
            logger.debug(
                "increment search reached %s in %d presses (%d expansions)",
                target, distance, expansions,
            )
            return SearchOutcome(distance, expansions, len(best_distance), elapsed)
        if expansions >= config.max_expansions:
            tracer.log_exhausted(ENGINE, f"expansion limit {config.max_expansions} reached")
            raise SearchLimitExceeded(ENGINE, config.max_expansions)

        finalized.add(levels)
        expansions += 1
        tracer.log_expand(ENGINE, levels, distance, len(frontier))

        next_distance = distance + 1
        for delta in increments:
            candidate = apply_increment(levels, delta)
            if exceeds(candidate, target):
                tracer.log_prune(ENGINE, candidate)
                continue
            known = best_distance.get(candidate)
            if candidate in finalized or (known is not None and known <= next_distance):
                tracer.log_duplicate(ENGINE, candidate, next_distance)
                continue
            if known is None and len(best_distance) >= config.max_states:
                tracer.log_exhausted(ENGINE, f"state limit {config.max_states} reached")
                raise SearchLimitExceeded(ENGINE, config.max_states, "storing")
            best_distance[candidate] = next_distance
            total = next_distance + estimate(candidate)
            tracer.log_enqueue(ENGINE, candidate, next_distance, total)
            heapq.heappush(frontier, (total, -next_distance, next(counter), candidate))

    tracer.log_exhausted(ENGINE, f"{len(finalized)} bounded vectors exhausted")
    raise UnreachableTargetError(
        ENGINE,
        f"levels {{{','.join(map(str, target))}}} cannot be hit exactly; "
        f"explored all {len(finalized)} vectors below the target",
    )


def _distinct_increments(problem: Problem) -> List[Levels]:
    seen: List[Levels] = []
    for vector in problem.increment_vectors():
        if vector not in seen:
            seen.append(vector)
    return seen


def _check_coverage(problem: Problem) -> None:
    covered = problem.covered_positions()
    for position, level in enumerate(problem.target_levels):
        if level > 0 and position not in covered:
            raise UnreachableTargetError(
                ENGINE, f"position {position} needs level {level} but no button raises it"
            )
