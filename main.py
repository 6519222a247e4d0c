"""CLI entrypoint for the word maze level generator."""

from __future__ import annotations

import argparse
import logging
import random
from datetime import date
from pathlib import Path

from wordmaze.core.constants import DEFAULT_SOLVER_RETRIES, SolverStrategy
from wordmaze.core.exceptions import GenerationError, WordListLoadError
from wordmaze.data.dictionary import WordList
from wordmaze.engine.generator import GeneratorConfig, generate_levels
from wordmaze.engine.padding import increase_letters
from wordmaze.io.level_store import LevelStore
from wordmaze.utils.logger import configure_logging
from wordmaze.utils.pretty import pretty_print_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate word maze levels, one JSON file per day",
    )
    defaults = GeneratorConfig()
    parser.add_argument("--rows", type=int, default=defaults.rows, help="Grid height in cells")
    parser.add_argument("--cols", type=int, default=defaults.cols, help="Grid width in cells")
    parser.add_argument(
        "--words",
        type=Path,
        default=Path(defaults.words_path),
        help="Word list: JSON array of strings, or one word per line",
    )
    parser.add_argument("--count", type=int, default=defaults.level_count, help="Number of levels to generate")
    parser.add_argument(
        "--min-avg-word-length",
        type=int,
        default=defaults.min_avg_word_length,
        help="Reject levels whose average word length is below this",
    )
    parser.add_argument(
        "--solver-retries",
        type=int,
        default=DEFAULT_SOLVER_RETRIES,
        help="Failed fill attempts allowed per grid",
    )
    parser.add_argument(
        "--solver",
        type=str,
        choices=[s.value for s in SolverStrategy],
        default=defaults.solver.value,
        help="Segment filling strategy",
    )
    parser.add_argument(
        "--start-date",
        type=date.fromisoformat,
        default=defaults.start_date,
        help="Date of the first level (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(defaults.output_dir),
        help="Directory receiving the level JSON files",
    )
    parser.add_argument("--seed", type=int, default=defaults.seed, help="Random seed for reproducibility")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=defaults.max_attempts,
        help="Give up after this many discarded grids (default: never)",
    )
    parser.add_argument(
        "--no-padding",
        action="store_true",
        help="Do not append frequency-sampled decoy letters",
    )
    parser.add_argument("--print", dest="print_levels", action="store_true", help="Print each level")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.rows <= 0 or args.cols <= 0:
        parser.error("--rows and --cols must be positive")
    if args.count < 0:
        parser.error("--count cannot be negative")

    config = GeneratorConfig(
        rows=args.rows,
        cols=args.cols,
        words_path=args.words,
        seed=args.seed,
        level_count=args.count,
        solver_retries=args.solver_retries,
        min_avg_word_length=args.min_avg_word_length,
        solver=SolverStrategy(args.solver),
        pad_letters=not args.no_padding,
        start_date=args.start_date,
        output_dir=args.output,
        max_attempts=args.max_attempts,
    )

    try:
        word_list = WordList.from_path(config.words_path)
    except WordListLoadError as exc:
        parser.error(str(exc))
    frequencies = word_list.frequencies()

    rng = random.Random(config.seed)
    try:
        batch = generate_levels(word_list, config, rng=rng)
    except GenerationError as exc:
        parser.error(str(exc))

    for generated in batch.levels:
        if config.pad_letters:
            increase_letters(generated, frequencies, rng=rng)
        if args.print_levels:
            pretty_print_level(generated)

    store = LevelStore(config.output_dir)
    for path in store.save_all(batch.levels, start_date=config.start_date):
        print(path)


if __name__ == "__main__":  # pragma: no cover
    main()
