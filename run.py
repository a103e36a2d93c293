"""CLI entrypoint: load problem lines, run both searches, and print the totals."""

import argparse
import csv
import sys
from pathlib import Path
from typing import List, Tuple

from src.reach.aggregate import AggregateReport, solve_all
from src.reach.config import HEURISTICS, INPUT_SUFFIXES, SearchConfig
from src.reach.errors import ParseError
from src.reach.loader import NumberedLine, load_problem_lines
from src.reach.parser import parse_problems
from src.utils.io import save_json
from src.utils.log import setup_logger

EXIT_PARSE_ERROR = 1
EXIT_INPUT_ERROR = 1
EXIT_SEARCH_FAILURE = 2


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Minimum button presses for toggle patterns (part 1) and levels (part 2)"
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        type=Path,
        help="Problem files or directories; reads standard input when omitted or '-'",
    )
    parser.add_argument("--workers", type=int, default=None, help="Solve problems in N processes")
    parser.add_argument(
        "--heuristic",
        choices=HEURISTICS,
        default=None,
        help="Remaining-distance estimate for the level search (default: admissible)",
    )
    parser.add_argument(
        "--max-expansions",
        type=int,
        default=None,
        help="Give up on a single search after expanding this many states",
    )
    parser.add_argument(
        "--max-states",
        type=int,
        default=None,
        help="Give up on a single search after storing this many states",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional per-problem results CSV")
    parser.add_argument("--summary", type=Path, default=None, help="Optional summary JSON")
    parser.add_argument(
        "--trace-dir", type=Path, default=None, help="Write one search trace CSV per problem here"
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def read_input_batches(inputs: List[Path]) -> List[Tuple[str, List[NumberedLine]]]:
    """Collect numbered problem lines per source so errors can name the file and line."""
    if not inputs or inputs == [Path("-")]:
        return [("<stdin>", list(enumerate(sys.stdin.read().splitlines(), start=1)))]

    batches: List[Tuple[str, List[NumberedLine]]] = []
    for path in inputs:
        if path.is_file():
            batches.append((str(path), load_problem_lines(str(path))))
        elif path.is_dir():
            for file_path in sorted(path.iterdir()):
                if file_path.suffix in INPUT_SUFFIXES:
                    batches.append((str(file_path), load_problem_lines(str(file_path))))
        else:
            raise FileNotFoundError(f"Input path {path} is neither file nor directory")
    return batches


def write_results_csv(report: AggregateReport, output_path: Path):
    fieldnames = [
        "index", "line", "toggle_presses", "increment_presses",
        "toggle_expansions", "increment_expansions", "error",
    ]
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for result in report.results:
            writer.writerow(result.as_row())


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logger("src", level="DEBUG" if args.verbose else "WARNING")

    try:
        config = SearchConfig.from_env().with_overrides(
            workers=args.workers,
            heuristic=args.heuristic,
            max_expansions=args.max_expansions,
            max_states=args.max_states,
            trace_dir=args.trace_dir,
        )
        problems = []
        for origin, lines in read_input_batches(args.inputs):
            problems.extend(parse_problems(lines, origin))
    except ParseError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    report = solve_all(problems, config, progress=args.progress)

    print(f"Part 1: {report.toggle_total}")
    print(f"Part 2: {report.increment_total}")

    if args.output:
        write_results_csv(report, args.output)
    if args.summary:
        save_json(args.summary, report.summary())

    if not report.ok:
        return EXIT_SEARCH_FAILURE
    return 0


if __name__ == "__main__":
    sys.exit(main())
