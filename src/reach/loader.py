import os
from typing import List, Optional, Tuple

import pandas as pd

from src.utils.io import read_lines

LINE_COLUMNS = ("line", "problem", "input")

NumberedLine = Tuple[int, str]


def load_problem_lines(file_path: str) -> List[NumberedLine]:
    """
    Reads raw problem lines from a file as ``(line number, text)`` pairs.

    Plain text files hold one problem per line. Tabular files (.csv, .jsonl,
    .json, .parquet) hold one problem per row in a ``line``/``problem``/``input``
    column, or in the first column whose values all look like ``[...] ...``
    problem lines when none of those exist.

    Numbers point back into the file: the text line for text, CSV (after the
    header) and JSONL, the 1-based record for JSON arrays and Parquet.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _looks_like_problems(values: pd.Series) -> bool:
        values = values.dropna().astype(str).str.strip()
        return not values.empty and bool(values.str.startswith("[").all())

    def _pick_column(df: pd.DataFrame) -> Optional[str]:
        lowered = {str(c).lower(): c for c in df.columns}
        for name in LINE_COLUMNS:
            if name in lowered:
                return lowered[name]
        for column in df.columns:
            if _looks_like_problems(df[column]):
                return column
        return None

    def _rows_to_lines(df: pd.DataFrame, first_row: int) -> List[NumberedLine]:
        column = _pick_column(df)
        if column is None:
            raise ValueError(f"No problem column found in {file_path}")
        values = df[column].reset_index(drop=True)
        numbered = []
        for position, value in values.items():
            if pd.isna(value) or not str(value).strip():
                continue
            numbered.append((position + first_row, str(value).strip()))
        return numbered

    suffix = os.path.splitext(file_path)[1].lower()

    if suffix == ".parquet":
        return _rows_to_lines(pd.read_parquet(file_path), 1)

    if suffix == ".csv":
        # Line 1 is the header.
        return _rows_to_lines(pd.read_csv(file_path, dtype=str, skip_blank_lines=False), 2)

    if suffix in (".jsonl", ".json"):
        try:
            df = pd.read_json(file_path, lines=(suffix == ".jsonl"))
        except ValueError:
            # Some sources use ".json" but actually store JSONL.
            df = pd.read_json(file_path, lines=True)
        return _rows_to_lines(df, 1)

    return list(enumerate(read_lines(file_path), start=1))
