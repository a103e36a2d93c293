"""Tests for reading numbered problem lines from text and tabular files."""

import json

import pandas as pd
import pytest

from problem_lines import EXAMPLE_LINES
from src.reach.loader import load_problem_lines


def _texts(numbered):
    return [text for _, text in numbered]


def test_text_file_keeps_lines(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text(EXAMPLE_LINES[0] + "\n\n" + EXAMPLE_LINES[1] + "\n")
    assert load_problem_lines(str(path)) == [
        (1, EXAMPLE_LINES[0]),
        (2, ""),
        (3, EXAMPLE_LINES[1]),
    ]


def test_csv_uses_line_column(tmp_path):
    path = tmp_path / "machines.csv"
    pd.DataFrame({"id": ["a", "b"], "line": EXAMPLE_LINES[:2]}).to_csv(path, index=False)
    assert _texts(load_problem_lines(str(path))) == EXAMPLE_LINES[:2]


def test_csv_numbers_follow_file_lines(tmp_path):
    path = tmp_path / "machines.csv"
    pd.DataFrame({"line": [EXAMPLE_LINES[0], None, EXAMPLE_LINES[1]]}).to_csv(path, index=False)
    # Header on line 1, the empty row on line 3 is dropped.
    assert load_problem_lines(str(path)) == [(2, EXAMPLE_LINES[0]), (4, EXAMPLE_LINES[1])]


def test_csv_falls_back_to_problem_like_column(tmp_path):
    path = tmp_path / "machines.csv"
    pd.DataFrame({"machine": EXAMPLE_LINES}).to_csv(path, index=False)
    assert _texts(load_problem_lines(str(path))) == EXAMPLE_LINES


def test_csv_fallback_skips_id_columns(tmp_path):
    path = tmp_path / "machines.csv"
    pd.DataFrame(
        {"id": ["m1", "m2", "m3"], "note": ["x", "y", "z"], "machine": EXAMPLE_LINES}
    ).to_csv(path, index=False)
    assert _texts(load_problem_lines(str(path))) == EXAMPLE_LINES


def test_csv_without_problem_column(tmp_path):
    path = tmp_path / "machines.csv"
    pd.DataFrame({"id": ["m1", "m2"], "count": [1, 2]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="No problem column"):
        load_problem_lines(str(path))


def test_jsonl_uses_problem_column(tmp_path):
    path = tmp_path / "machines.jsonl"
    path.write_text("\n".join(json.dumps({"problem": line}) for line in EXAMPLE_LINES) + "\n")
    assert load_problem_lines(str(path)) == list(enumerate(EXAMPLE_LINES, start=1))


def test_json_file_holding_jsonl(tmp_path):
    path = tmp_path / "machines.json"
    path.write_text("\n".join(json.dumps({"input": line}) for line in EXAMPLE_LINES[:2]))
    assert _texts(load_problem_lines(str(path))) == EXAMPLE_LINES[:2]


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_problem_lines("does/not/exist.txt")
