#!/usr/bin/env python3
"""AI Tournament Runner for Taifho.

Plays a series of AI-vs-AI games and reports who won, how long games
took and how often the move cap was hit.

Usage:
    # Round robin of the minimax levels, two games per pairing
    python scripts/run_ai_tournament.py ladder --levels beginner easy medium --games 2

    # A single 2-player match
    python scripts/run_ai_tournament.py match --red easy --blue medium --show-board

    # A 4-player game (runs until three colors have finished)
    python scripts/run_ai_tournament.py match --players 4 --red medium --green easy \\
        --blue easy --yellow beginner

    # Search details for the second game only
    python scripts/run_ai_tournament.py --trace-game 2 match --games 3
"""

from __future__ import annotations

import argparse
import itertools
import logging
import sys
from collections import Counter
from pathlib import Path

# Setup path
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from taifho.ai.factory import AIDifficulty
from taifho.ai.selfplay import GameResult, play_game
from taifho.ai.session import AISession
from taifho.logging_config import LogContext, get_logger
from taifho.logging_config import setup_logging as _setup_logging
from taifho.models import PlayerColor

logger = get_logger("run_ai_tournament")

DEFAULT_LEVELS = ["beginner", "easy", "medium", "challenging", "hard"]


def setup_logging(verbose: bool = False, log_dir: str | None = None) -> None:
    """Configure logging for tournament execution."""
    level = logging.DEBUG if verbose else logging.INFO
    _setup_logging("run_ai_tournament", level=level, log_dir=log_dir)
    _setup_logging("taifho", level=level if verbose else logging.WARNING, log_dir=log_dir)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="AI tournament runner for Taifho",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--seed", type=int, default=42, help="Random seed of the first game")
    parser.add_argument("--max-moves", type=int, default=None, help="Move cap per game")
    parser.add_argument("--log-dir", type=str, default=None, help="Also write logs to this directory")
    parser.add_argument("--show-board", action="store_true", help="Log the final board of every game")
    parser.add_argument(
        "--trace-game",
        type=int,
        default=None,
        help="Log engine search details at DEBUG level for this game number only",
    )

    subparsers = parser.add_subparsers(dest="mode", required=True)

    levels = [d.value for d in AIDifficulty]

    ladder = subparsers.add_parser("ladder", help="2-player round robin between levels")
    ladder.add_argument("--levels", nargs="+", choices=levels, default=DEFAULT_LEVELS)
    ladder.add_argument("--games", type=int, default=2, help="Games per pairing and color")

    match = subparsers.add_parser("match", help="Play games with fixed levels per color")
    match.add_argument("--players", type=int, choices=(2, 4), default=2)
    match.add_argument("--games", type=int, default=1)
    for color in PlayerColor:
        match.add_argument(f"--{color.value}", choices=levels, default="medium")

    return parser


def _log_result(game_no: int, result: GameResult, show_board: bool) -> None:
    if result.placements:
        places = ", ".join(
            f"{i + 1}. {c.value}" for i, c in enumerate(result.placements)
        )
    else:
        places = "no finisher"
    logger.info(
        f"Game {game_no}: {places} | {result.moves_played} moves, "
        f"{result.end_reason}, {result.duration_s:.1f}s"
    )
    if show_board:
        logger.info("Final position:\n" + result.final_board.render())


def _play(args: argparse.Namespace, game_no: int, players, player_count: int) -> GameResult:
    kwargs = dict(
        player_count=player_count,
        max_moves=args.max_moves,
        session=AISession(rng_seed=args.seed + game_no),
    )
    if args.trace_game != game_no:
        return play_game(players, **kwargs)
    with LogContext(get_logger("taifho"), logging.DEBUG):
        return play_game(players, **kwargs)


def run_ladder(args: argparse.Namespace) -> Counter:
    wins: Counter = Counter()
    game_no = 0
    for first, second in itertools.combinations(args.levels, 2):
        for red_level, blue_level in ((first, second), (second, first)):
            for _ in range(args.games):
                game_no += 1
                logger.info(f"Game {game_no}: {red_level} (red) vs {blue_level} (blue)")
                result = _play(
                    args,
                    game_no,
                    {PlayerColor.RED: red_level, PlayerColor.BLUE: blue_level},
                    player_count=2,
                )
                _log_result(game_no, result, args.show_board)
                if result.winner == PlayerColor.RED:
                    wins[red_level] += 1
                elif result.winner == PlayerColor.BLUE:
                    wins[blue_level] += 1
                else:
                    wins["draw"] += 1
    return wins


def run_match(args: argparse.Namespace) -> Counter:
    players = {color: getattr(args, color.value) for color in PlayerColor}
    wins: Counter = Counter()
    for game_no in range(1, args.games + 1):
        result = _play(args, game_no, players, player_count=args.players)
        _log_result(game_no, result, args.show_board)
        wins[result.winner.value if result.winner else "draw"] += 1
    return wins


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_dir)

    if args.mode == "ladder":
        wins = run_ladder(args)
    else:
        wins = run_match(args)

    logger.info("Results:")
    for name, count in wins.most_common():
        logger.info(f"  {name:12s} {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
