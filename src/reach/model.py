"""Machine model: light patterns, level vectors, buttons and problems."""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Sequence, Tuple

from .errors import ProblemError

Levels = Tuple[int, ...]

OFF_SYMBOL = "."
ON_SYMBOL = "#"


@dataclass(frozen=True)
class Operation:
    """
    A button: the set of zero-based element positions it affects.

    Pressing it toggles those positions of a light pattern, or adds one to
    those positions of a level vector.
    """

    positions: FrozenSet[int]

    @classmethod
    def of(cls, positions: Iterable[int]) -> "Operation":
        return cls(frozenset(positions))

    @property
    def footprint(self) -> int:
        return len(self.positions)

    def mask(self, length: int) -> int:
        bits = 0
        for position in self.positions:
            bits |= 1 << (length - 1 - position)
        return bits

    def increments(self, length: int) -> Levels:
        return tuple(1 if i in self.positions else 0 for i in range(length))

    def sorted_positions(self) -> List[int]:
        return sorted(self.positions)


@dataclass(frozen=True)
class BinaryState:
    """Fixed-size on/off pattern packed into an int; element 0 is the most significant bit."""

    bits: int
    length: int

    @classmethod
    def off(cls, length: int) -> "BinaryState":
        return cls(0, length)

    @classmethod
    def from_flags(cls, flags: Sequence[bool]) -> "BinaryState":
        bits = 0
        for flag in flags:
            bits = (bits << 1) | (1 if flag else 0)
        return cls(bits, len(flags))

    def is_on(self, index: int) -> bool:
        return bool(self.bits >> (self.length - 1 - index) & 1)

    def flags(self) -> List[bool]:
        return [self.is_on(i) for i in range(self.length)]

    def on_positions(self) -> List[int]:
        return [i for i in range(self.length) if self.is_on(i)]

    def toggled(self, operation: Operation) -> "BinaryState":
        return BinaryState(self.bits ^ operation.mask(self.length), self.length)

    def __str__(self) -> str:
        return "".join(ON_SYMBOL if flag else OFF_SYMBOL for flag in self.flags())


def zero_levels(length: int) -> Levels:
    return (0,) * length


def apply_increment(levels: Levels, increments: Levels) -> Levels:
    return tuple(a + b for a, b in zip(levels, increments))


def exceeds(levels: Levels, target: Levels) -> bool:
    """True when any component has overshot its target."""
    for current, expected in zip(levels, target):
        if current > expected:
            return True
    return False


def deficit(levels: Levels, target: Levels) -> Levels:
    return tuple(expected - current for current, expected in zip(levels, target))


@dataclass(frozen=True)
class Problem:
    operations: Tuple[Operation, ...]
    target_lights: BinaryState
    target_levels: Levels
    source: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples so the problem stays hashable.
        object.__setattr__(self, "operations", tuple(self.operations))
        object.__setattr__(self, "target_levels", tuple(self.target_levels))

        length = self.target_lights.length
        if length <= 0:
            raise ProblemError("light pattern must have at least one element")
        if not self.operations:
            raise ProblemError("operation catalog must not be empty")
        for number, operation in enumerate(self.operations):
            if not operation.positions:
                raise ProblemError(f"operation {number} affects no positions")
            out_of_range = [p for p in operation.sorted_positions() if p < 0 or p >= length]
            if out_of_range:
                raise ProblemError(
                    f"operation {number} affects position {out_of_range[0]} "
                    f"outside 0..{length - 1}"
                )
        if len(self.target_levels) != length:
            raise ProblemError(
                f"target levels length {len(self.target_levels)} does not match "
                f"light count {length}"
            )
        if any(level < 0 for level in self.target_levels):
            raise ProblemError("target levels must be non-negative")

    @property
    def length(self) -> int:
        return self.target_lights.length

    def masks(self) -> List[int]:
        return [op.mask(self.length) for op in self.operations]

    def increment_vectors(self) -> List[Levels]:
        return [op.increments(self.length) for op in self.operations]

    def covered_positions(self) -> FrozenSet[int]:
        covered: set = set()
        for operation in self.operations:
            covered.update(operation.positions)
        return frozenset(covered)
