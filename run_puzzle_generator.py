#!/usr/bin/env python3
"""
Grid Puzzles Generator

Command-line front end for batch generation of 9x9 Sudoku and word-search
puzzles. Generated puzzles are written as JSON, one file per puzzle when an
output directory is given, otherwise as a JSON array on stdout. Progress and
log messages go to stderr so stdout stays machine-readable.

Usage Examples:
  # Use config defaults (minimal command)
  python run_puzzle_generator.py sudoku
  python run_puzzle_generator.py wordsearch --words airspeed velocity unladen swallow

  # Override specific parameters
  python run_puzzle_generator.py sudoku --count 10 --hide 45 --seed 42 --output-dir puzzles/sudoku
  python run_puzzle_generator.py wordsearch --word-file words.txt --width 15 --height 12 --count 3
"""

import argparse
import logging
import json
from pathlib import Path
from typing import List, Optional
import sys
from datetime import datetime

from grid_puzzles.core.errors import PuzzleGenerationError
from grid_puzzles.generate.puzzle_builder import PuzzleBuilder
from grid_puzzles.generate.puzzle_entry import PuzzleEntry
from grid_puzzles.utils.config_loader import get_config


def get_config_defaults():
    """Get configuration defaults for CLI arguments."""
    config = get_config()
    return config.get_cli_defaults()


def apply_config_defaults(args):
    """Apply configuration defaults to CLI arguments when not specified."""
    defaults = get_config_defaults()

    if getattr(args, "seed", None) is None and defaults["seed"] is not None:
        try:
            args.seed = int(defaults["seed"])
        except ValueError:
            logging.warning(f"Ignoring non-integer DEFAULT_SEED: {defaults['seed']}")

    return args


def setup_logging(verbose: bool = False, log_file: Optional[str] = None):
    """Setup logging configuration with optional file output."""
    level = logging.DEBUG if verbose else logging.INFO

    # Create logs directory if it doesn't exist
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    # Setup formatters
    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Setup root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_file else level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Console handler, stdout carries the puzzle JSON
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always detailed in file
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        logging.info("=== GRID PUZZLES GENERATION TRACE ===")
        logging.info(f"Start time: {datetime.now().isoformat()}")
        logging.info(f"Log file: {log_file}")
        logging.info(f"Verbose mode: {verbose}")
        logging.info("=" * 60)

    return log_file


def status(message: str):
    """Print a progress line for the user."""
    print(message, file=sys.stderr)


def load_words_from_file(word_file: str) -> List[str]:
    """Read one word per line, skipping blank lines and # comments."""
    words = []
    with open(word_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                words.append(line)
    return words


def emit_puzzles(puzzles: List[PuzzleEntry], output_dir: Optional[str]):
    """Write the batch to stdout as JSON unless it was already saved to files."""
    if output_dir:
        status(f"📁 Saved {len(puzzles)} puzzles to {output_dir}")
        return

    json.dump([puzzle.to_dict() for puzzle in puzzles], sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def print_statistics(builder: PuzzleBuilder):
    """Show builder statistics on stderr."""
    stats = builder.get_generation_statistics()
    status("\n📊 GENERATION STATISTICS")
    status("=" * 60)
    status(f"Total attempts: {stats['total_attempts']}")
    status(f"Successful generations: {stats['successful_generations']}")
    status(f"Failed generations: {stats['failed_generations']}")
    status(f"Retried attempts: {stats['retried_attempts']}")
    status(f"Success rate: {stats['success_rate']}")
    status(f"Average filled cells: {stats['average_filled_cells']}")
    status(f"Average word count: {stats['average_word_count']}")


def run_sudoku_generation(args) -> bool:
    """Generate masked Sudoku puzzles."""
    status("🧩 SUDOKU GENERATION")
    status("=" * 60)
    status(f"   Puzzles: {args.count}")
    status(f"   Hidden cells: {args.hide}")
    status(f"   Seed: {args.seed if args.seed is not None else 'unseeded'}")

    try:
        builder = PuzzleBuilder(seed=args.seed)
        puzzles = builder.generate_sudoku_batch(
            count=args.count, hidden_count=args.hide, output_dir=args.output_dir
        )
        print_statistics(builder)
        emit_puzzles(puzzles, args.output_dir)

        logging.info(f"GENERATION_COMPLETE: {len(puzzles)} Sudoku puzzles generated")
        return len(puzzles) == args.count

    except PuzzleGenerationError as e:
        status(f"❌ Sudoku generation failed: {e}")
        logging.error(f"Generation error: {e}")
        return False


def run_wordsearch_generation(args) -> bool:
    """Generate word-search puzzles from the given words."""
    status("🔤 WORD-SEARCH GENERATION")
    status("=" * 60)

    if args.word_file:
        try:
            words = load_words_from_file(args.word_file)
        except OSError as e:
            status(f"❌ Could not read word file {args.word_file}: {e}")
            return False
    else:
        words = args.words

    status(f"   Words: {len(words)}")
    status(f"   Grid: {args.width}x{args.height}")
    status(f"   Puzzles: {args.count}")
    status(f"   Seed: {args.seed if args.seed is not None else 'unseeded'}")

    try:
        builder = PuzzleBuilder(seed=args.seed)
        puzzles = builder.generate_wordsearch_batch(
            words=words,
            width=args.width,
            height=args.height,
            count=args.count,
            output_dir=args.output_dir,
        )
        print_statistics(builder)
        emit_puzzles(puzzles, args.output_dir)

        logging.info(f"GENERATION_COMPLETE: {len(puzzles)} word-search puzzles generated")
        return len(puzzles) == args.count

    except PuzzleGenerationError as e:
        status(f"❌ Word-search generation failed: {e}")
        logging.error(f"Generation error: {e}")
        return False


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with config-driven defaults."""
    config_defaults = get_config_defaults()

    parser = argparse.ArgumentParser(
        description="Grid Puzzles: Sudoku and word-search generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sudoku --count 5 --hide 50 --seed 7
  %(prog)s wordsearch --words airspeed velocity unladen swallow iron oxide
  %(prog)s wordsearch --word-file words.txt --width 15 --height 15 --output-dir puzzles
        """,
    )

    parser.add_argument("--log-file", help="Also write a detailed trace to this file")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Shared options
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--count",
        type=int,
        default=config_defaults["count"],
        help=f"Number of puzzles to generate (default: {config_defaults['count']})",
    )
    common.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible output (default: DEFAULT_SEED or unseeded)",
    )
    common.add_argument(
        "--output-dir", help="Directory to save puzzle JSON files (default: stdout)"
    )
    common.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging for debugging"
    )

    # Sudoku command
    sudoku_parser = subparsers.add_parser(
        "sudoku", parents=[common], help="Generate masked 9x9 Sudoku puzzles"
    )
    sudoku_parser.add_argument(
        "--hide",
        type=int,
        default=config_defaults["hide"],
        help=f"Number of cells to hide, 0-81 (default: {config_defaults['hide']})",
    )

    # Word-search command
    wordsearch_parser = subparsers.add_parser(
        "wordsearch", parents=[common], help="Generate word-search puzzles"
    )
    word_source = wordsearch_parser.add_mutually_exclusive_group(required=True)
    word_source.add_argument("--words", nargs="+", help="Words to hide, in priority order")
    word_source.add_argument("--word-file", help="File with one word per line")
    wordsearch_parser.add_argument(
        "--width",
        type=int,
        default=config_defaults["width"],
        help=f"Grid width (default: {config_defaults['width']})",
    )
    wordsearch_parser.add_argument(
        "--height",
        type=int,
        default=config_defaults["height"],
        help=f"Grid height (default: {config_defaults['height']})",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> bool:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(getattr(args, "verbose", False), args.log_file)
    args = apply_config_defaults(args)

    logging.info(f"ARGUMENTS: {vars(args)}")

    if not args.command:
        parser.print_help(sys.stderr)
        return False

    try:
        if args.command == "sudoku":
            return run_sudoku_generation(args)
        elif args.command == "wordsearch":
            return run_wordsearch_generation(args)
        else:
            status(f"❌ Unknown command: {args.command}")
            return False

    except KeyboardInterrupt:
        status("\n⚠️  Operation cancelled by user")
        return False


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
