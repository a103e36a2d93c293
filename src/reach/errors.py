"""Exception hierarchy shared by the parser, the model and both search engines."""

from typing import Optional


class ReachError(Exception):
    """Base class for every error raised by the reachability solver."""


class ProblemError(ReachError, ValueError):
    """A problem violates one of the model invariants."""


class ParseError(ProblemError):
    """A problem line could not be parsed.

    Parse errors are fatal for a run: they are raised before any search starts.
    """

    def __init__(
        self,
        line: str,
        reason: str,
        line_number: Optional[int] = None,
        origin: Optional[str] = None,
    ):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        self.origin = origin
        where = "line "
        if line_number is not None:
            where += f"{line_number} "
        if origin:
            where += f"of {origin} "
        super().__init__(f"failed to parse {where}'{line}': {reason}")

    def at_line(self, line_number: int, origin: Optional[str] = None) -> "ParseError":
        return ParseError(self.line, self.reason, line_number, origin)


class SearchError(ReachError):
    """A single search failed; other problems in the same run are unaffected."""

    def __init__(self, engine: str, message: str):
        self.engine = engine
        super().__init__(f"{engine}: {message}")


class UnreachableTargetError(SearchError):
    """The target state lies outside the closure reachable from the start state."""


class SearchLimitExceeded(SearchError):
    """The search expanded or stored more states than the configured caps allow."""

    def __init__(self, engine: str, limit: int, action: str = "expanding"):
        self.limit = limit
        self.action = action
        super().__init__(engine, f"gave up after {action} {limit} states")
