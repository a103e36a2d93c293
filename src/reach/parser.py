"""Problem parser: convert one line of machine description into a Problem.

A line looks like::

    [.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}

- ``[...]`` target lights, ``.`` is off and ``#`` is on, leftmost first;
- ``(...)`` one button per group, listing the zero-based positions it affects;
- ``{...}`` target levels, one per light.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Union

from .errors import ParseError, ProblemError
from .model import OFF_SYMBOL, ON_SYMBOL, BinaryState, Operation, Problem


def parse_problem(line: str) -> Problem:
    text = line.strip()
    if not text:
        raise ParseError(line, "empty line")

    lights: Optional[BinaryState] = None
    operations: List[Operation] = []
    levels: Optional[List[int]] = None

    for part in text.split():
        opener = part[0]
        if opener == "[":
            if not part.endswith("]"):
                raise ParseError(line, "missing closing ']' in lights state")
            if lights is not None:
                raise ParseError(line, "multiple lights states found")
            lights = _parse_lights(line, part[1:-1])
        elif opener == "(":
            if not part.endswith(")"):
                raise ParseError(line, f"missing closing ')' in button '{part}'")
            if lights is None:
                raise ParseError(line, "button found before lights state")
            positions = _parse_numbers(line, part[1:-1], what="button")
            if len(set(positions)) != len(positions):
                raise ParseError(line, f"duplicate position in button '{part}'")
            operations.append(Operation.of(positions))
        elif opener == "{":
            if not part.endswith("}"):
                raise ParseError(line, "missing closing '}' in target levels")
            if levels is not None:
                raise ParseError(line, "multiple target levels found")
            levels = _parse_numbers(line, part[1:-1], what="target levels")
        else:
            raise ParseError(line, f"unexpected part in input: '{part}'")

    if lights is None:
        raise ParseError(line, "missing lights state")
    if not operations:
        raise ParseError(line, "no buttons found")
    if levels is None:
        raise ParseError(line, "missing target levels")

    try:
        return Problem(
            operations=tuple(operations),
            target_lights=lights,
            target_levels=tuple(levels),
            source=text,
        )
    except ProblemError as exc:
        raise ParseError(line, str(exc)) from exc


def parse_problems(
    lines: Iterable[Union[str, Tuple[int, str]]], origin: Optional[str] = None
) -> List[Problem]:
    """Parse every non-blank line; the first bad line aborts the whole batch.

    ``lines`` holds plain strings, numbered from 1, or ``(line number, text)``
    pairs as returned by ``load_problem_lines``. ``origin`` names the source in
    error messages.
    """
    problems = []
    for number, item in enumerate(lines, start=1):
        if isinstance(item, tuple):
            number, line = item
        else:
            line = item
        if not line.strip():
            continue
        try:
            problems.append(parse_problem(line))
        except ParseError as exc:
            raise exc.at_line(number, origin) from exc
    return problems


def format_problem(problem: Problem) -> str:
    """Render a problem back into its one-line text form."""
    buttons = " ".join(
        "(" + ",".join(str(p) for p in op.sorted_positions()) + ")"
        for op in problem.operations
    )
    levels = ",".join(str(level) for level in problem.target_levels)
    return f"[{problem.target_lights}] {buttons} {{{levels}}}"


def _parse_lights(line: str, body: str) -> BinaryState:
    if not body:
        raise ParseError(line, "lights state is empty")
    flags = []
    for c in body:
        if c == OFF_SYMBOL:
            flags.append(False)
        elif c == ON_SYMBOL:
            flags.append(True)
        else:
            raise ParseError(line, f"invalid character '{c}' in lights state")
    return BinaryState.from_flags(flags)


def _parse_numbers(line: str, body: str, what: str) -> List[int]:
    numbers = []
    for raw in body.split(","):
        token = raw.strip()
        if not (token.isascii() and token.isdigit()):
            raise ParseError(line, f"failed to parse number '{raw}' in {what}")
        numbers.append(int(token))
    return numbers
