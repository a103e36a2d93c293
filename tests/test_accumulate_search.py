"""Tests for the best-first level search."""

import random
from collections import deque

import pytest

from problem_lines import EXAMPLE_LINES, INCREMENT_ANSWERS
from src.reach.accumulate_search import estimate_remaining, min_increment_presses
from src.reach.config import SearchConfig
from src.reach.errors import SearchLimitExceeded, UnreachableTargetError
from src.reach.model import BinaryState, Operation, Problem
from src.reach.parser import parse_problem
from src.utils.trace import Tracer


def _oracle_presses(problem):
    """Exhaustive breadth-first enumeration of every vector below the target."""
    target = problem.target_levels
    vectors = problem.increment_vectors()
    start = (0,) * problem.length
    seen = {start: 0}
    queue = deque([start])
    while queue:
        levels = queue.popleft()
        if levels == target:
            return seen[levels]
        for vector in vectors:
            nxt = tuple(a + b for a, b in zip(levels, vector))
            if any(a > b for a, b in zip(nxt, target)) or nxt in seen:
                continue
            seen[nxt] = seen[levels] + 1
            queue.append(nxt)
    return None


def _make_random_problem(rng):
    length = rng.randint(1, 6)
    operations = [
        Operation.of(rng.sample(range(length), rng.randint(1, length)))
        for _ in range(rng.randint(1, 5))
    ]
    levels = [0] * length
    for op in operations:
        presses = rng.randint(0, 2)
        for position in op.positions:
            levels[position] += presses
    return Problem(
        operations=tuple(operations),
        target_lights=BinaryState.off(length),
        target_levels=tuple(levels),
    )


@pytest.mark.parametrize("line, expected", list(zip(EXAMPLE_LINES, INCREMENT_ANSWERS)))
@pytest.mark.parametrize("heuristic", ["admissible", "uniform"])
def test_examples(line, expected, heuristic):
    outcome = min_increment_presses(parse_problem(line), SearchConfig(heuristic=heuristic))
    assert outcome.presses == expected


# Wide buttons A and B finish in two presses, but under the footprint estimate
# the five-wide button C looks closer and its completion via the singles wins.
FOOTPRINT_TRAP = "[........] (0,1,2,3) (4,5,6,7) (0,1,2,3,4) (5) (6) (7) {1,1,1,1,1,1,1,1}"


def test_footprint_heuristic_can_miss_the_optimum():
    problem = parse_problem(FOOTPRINT_TRAP)
    assert _oracle_presses(problem) == 2
    assert min_increment_presses(problem, SearchConfig(heuristic="admissible")).presses == 2
    assert min_increment_presses(problem, SearchConfig(heuristic="uniform")).presses == 2
    assert min_increment_presses(problem, SearchConfig(heuristic="footprint")).presses == 4


@pytest.mark.parametrize("seed", range(30))
@pytest.mark.parametrize("heuristic", ["admissible", "uniform"])
def test_matches_exhaustive_oracle(seed, heuristic):
    problem = _make_random_problem(random.Random(seed))
    outcome = min_increment_presses(problem, SearchConfig(heuristic=heuristic))
    assert outcome.presses == _oracle_presses(problem)


def test_admissible_heuristic_expands_no_more_than_uniform():
    problem = parse_problem(EXAMPLE_LINES[1])
    guided = min_increment_presses(problem, SearchConfig(heuristic="admissible"))
    plain = min_increment_presses(problem, SearchConfig(heuristic="uniform"))
    assert guided.expansions <= plain.expansions


def test_estimate_remaining():
    remaining = (3, 5, 4, 7)
    assert estimate_remaining(remaining, 1, 2, "footprint") == 19
    assert estimate_remaining(remaining, 1, 2, "admissible") == 10
    assert estimate_remaining((1, 1, 1, 1), 1, 4, "admissible") == 1
    assert estimate_remaining(remaining, 1, 2, "uniform") == 0


def test_frontier_never_holds_overshooting_vectors():
    tracer = Tracer(enabled=True)
    problem = parse_problem(EXAMPLE_LINES[1])
    min_increment_presses(problem, tracer=tracer)
    target = problem.target_levels
    enqueued = tracer.states("enqueue", engine="increment")
    assert enqueued
    for levels in enqueued:
        assert all(current <= expected for current, expected in zip(levels, target))
    for levels in tracer.states("prune", engine="increment"):
        assert any(current > expected for current, expected in zip(levels, target))


def test_vectors_are_expanded_once():
    tracer = Tracer(enabled=True)
    min_increment_presses(parse_problem(EXAMPLE_LINES[0]), tracer=tracer)
    expanded = tracer.states("expand", engine="increment")
    assert len(expanded) == len(set(expanded))


def test_zero_target_needs_no_presses():
    outcome = min_increment_presses(parse_problem("[#.] (0) (1) {0,0}"))
    assert outcome.presses == 0


def test_unreachable_target_exhausts_bounded_space():
    problem = parse_problem("[##] (0,1) {1,2}")
    with pytest.raises(UnreachableTargetError, match="cannot be hit exactly"):
        min_increment_presses(problem)


def test_uncovered_position_fails_before_searching():
    problem = parse_problem("[..] (0) {1,1}")
    with pytest.raises(UnreachableTargetError, match="position 1 needs level 1"):
        min_increment_presses(problem)


def test_expansion_limit():
    problem = parse_problem(EXAMPLE_LINES[0])
    with pytest.raises(SearchLimitExceeded) as excinfo:
        min_increment_presses(problem, SearchConfig(max_expansions=1))
    assert excinfo.value.engine == "increment"


def test_state_limit():
    problem = parse_problem(EXAMPLE_LINES[0])
    with pytest.raises(SearchLimitExceeded, match="storing 1 states") as excinfo:
        min_increment_presses(problem, SearchConfig(max_states=1))
    assert excinfo.value.limit == 1


def test_state_limit_bounds_stored_vectors():
    tracer = Tracer(enabled=True)
    problem = parse_problem(EXAMPLE_LINES[1])
    with pytest.raises(SearchLimitExceeded):
        min_increment_presses(problem, SearchConfig(max_states=50, heuristic="uniform"), tracer=tracer)
    assert len(set(tracer.states("enqueue", engine="increment"))) < 50
