"""
run.py
======
Command-line entry point: deal a classic SET table or generate a puzzle and
print the result as JSON.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Sequence

from .config import GameConfig, load_config
from .env import ClassicEnv, PuzzleEnv, setup_logging
from .type import Card


def _cards(cards: Sequence[Card]) -> List[Dict[str, Any]]:
    return [card.to_dict() for card in cards]


def run_classic(config: GameConfig) -> Dict[str, Any]:
    """Deal a table and report every Set on it."""
    env = ClassicEnv.from_config(config)
    table = env.table
    sets = env.available_sets()
    return {
        "mode": "classic",
        "seed": config.seed,
        "table": _cards(table),
        "deck_remaining": len(env.deck),
        "sets": [[table.index(card) for card in triple] for triple in sets],
        "hint": env.hint(),
    }


def run_puzzle(config: GameConfig) -> Dict[str, Any]:
    """Generate one puzzle and reveal where its answer sits."""
    env = PuzzleEnv.from_config(config)
    puzzle = env.puzzle
    return {
        "mode": "puzzle",
        "seed": config.seed,
        "targets": _cards(puzzle.targets),
        "options": _cards(puzzle.options),
        "answer_index": puzzle.answer_index,
        "answer": puzzle.answer.to_dict(),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SET rules engine: deal a classic table or generate a third-card puzzle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Deal 12 cards and list every Set on the table
  setgame --mode classic --seed 42

  # Deal 15 cards, redealing until the first table holds a Set
  setgame --mode classic --table-size 15 --require-initial-set

  # Generate a puzzle with 6 options
  setgame --mode puzzle --options 6 --verbose
        """
    )

    parser.add_argument(
        "--mode",
        choices=["classic", "puzzle"],
        default="classic",
        help="Game mode to run (default: classic)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible deals (env: SET_SEED)"
    )

    parser.add_argument(
        "--table-size",
        type=int,
        help="Cards dealt on a classic table (env: SET_TABLE_SIZE, default: 12)"
    )

    parser.add_argument(
        "--require-initial-set",
        action="store_true",
        default=None,
        help="Redeal until the classic table contains at least one Set"
    )

    parser.add_argument(
        "--options",
        type=int,
        help="Options offered in puzzle mode (env: SET_PUZZLE_OPTIONS, default: 9)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging"
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line interface for the SET rules engine."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            seed=args.seed,
            table_size=args.table_size,
            require_initial_set=args.require_initial_set,
            puzzle_options=args.options,
            log_level="DEBUG" if args.verbose else None,
        )
        setup_logging(config)

        if args.mode == "classic":
            output = run_classic(config)
        else:
            output = run_puzzle(config)

        print(json.dumps(output, indent=2))

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
