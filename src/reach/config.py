"""Search configuration and run-wide defaults."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

HEURISTICS = ("admissible", "footprint", "uniform")

DEFAULT_MAX_EXPANSIONS = 5_000_000
# Stored states dominate memory; two million level vectors stay well under a gigabyte.
DEFAULT_MAX_STATES = 2_000_000
DEFAULT_HEURISTIC = "admissible"

# Files picked up when a directory is given as input.
INPUT_SUFFIXES = (".txt", ".in", ".csv", ".jsonl", ".json", ".parquet")

# Logging configuration
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class SearchConfig:
    """Limits and strategy choices shared by both engines."""

    max_expansions: int = DEFAULT_MAX_EXPANSIONS
    max_states: int = DEFAULT_MAX_STATES
    heuristic: str = DEFAULT_HEURISTIC
    workers: int = 1
    trace_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.max_expansions <= 0:
            raise ValueError("max_expansions must be positive")
        if self.max_states <= 0:
            raise ValueError("max_states must be positive")
        if self.heuristic not in HEURISTICS:
            raise ValueError(
                f"unknown heuristic '{self.heuristic}', expected one of {', '.join(HEURISTICS)}"
            )
        if self.workers <= 0:
            raise ValueError("workers must be positive")

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Build a config from REACH_* environment variables, falling back to defaults."""
        return cls(
            max_expansions=_env_int("REACH_MAX_EXPANSIONS", DEFAULT_MAX_EXPANSIONS),
            max_states=_env_int("REACH_MAX_STATES", DEFAULT_MAX_STATES),
            heuristic=os.environ.get("REACH_HEURISTIC", DEFAULT_HEURISTIC),
            workers=_env_int("REACH_WORKERS", 1),
        )

    def with_overrides(self, **overrides) -> "SearchConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None
