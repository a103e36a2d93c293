"""I/O helpers for problem files and run summaries."""

import json
from pathlib import Path
from typing import Any, List


def read_lines(path: Path) -> List[str]:
    """Read a text file into lines without trailing newlines."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f]


def save_json(path: Path, payload: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
