"""Tracing module: records search engine steps and writes them to CSV."""

import csv
import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class TraceStep:
    """A single step in a search."""

    timestamp: float
    step_number: int
    action_type: str  # 'expand', 'enqueue', 'prune', 'duplicate', 'goal', 'exhausted'
    engine: Optional[str] = None
    state: Optional[Any] = None
    distance: Optional[int] = None
    estimate: Optional[int] = None  # estimated total distance (best-first only)
    frontier_size: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records search steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_expand(self, engine: str, state: Any, distance: int, frontier_size: int):
        """Log a state being taken off the frontier and expanded."""
        if not self.enabled:
            return
        self._record('expand', engine=engine, state=state, distance=distance,
                     frontier_size=frontier_size)

    def log_enqueue(self, engine: str, state: Any, distance: int, estimate: Optional[int] = None):
        """Log a newly discovered state being added to the frontier."""
        if not self.enabled:
            return
        self._record('enqueue', engine=engine, state=state, distance=distance, estimate=estimate)

    def log_prune(self, engine: str, state: Any, reason: str = "overshoots target"):
        """Log a candidate discarded before it reached the frontier."""
        if not self.enabled:
            return
        self._record('prune', engine=engine, state=state, reason=reason)

    def log_duplicate(self, engine: str, state: Any, distance: int):
        """Log a candidate skipped because it was already seen at no greater distance."""
        if not self.enabled:
            return
        self._record('duplicate', engine=engine, state=state, distance=distance)

    def log_goal(self, engine: str, state: Any, distance: int):
        """Log when the target is reached."""
        if not self.enabled:
            return
        self._record('goal', engine=engine, state=state, distance=distance)

    def log_exhausted(self, engine: str, reason: str):
        """Log a search ending without reaching the target."""
        if not self.enabled:
            return
        self._record('exhausted', engine=engine, reason=reason)

    def states(self, action_type: str, engine: Optional[str] = None) -> List[Any]:
        return [
            s.state for s in self.steps
            if s.action_type == action_type and (engine is None or s.engine == engine)
        ]

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            logger.info("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'engine', 'state',
            'distance', 'estimate', 'frontier_size', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        logger.info("Trace written to %s (%d steps)", filepath, len(self.steps))

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_expansions': action_counts.get('expand', 0),
            'num_prunes': action_counts.get('prune', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer. A fresh tracer starts disabled."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=False)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
