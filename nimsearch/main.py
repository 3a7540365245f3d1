import argparse
import logging
import random
import sys
from typing import List, Optional

import yaml

from nimsearch.config import DEFAULT_PILES, DEFAULT_SEED, LOG_DIR
from nimsearch.config_loader import load_and_merge_config
from nimsearch.games.nim_game import NimState
from nimsearch.logging_config import setup_logging

logger = logging.getLogger("nimsearch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the best Nim move with an exhaustive minimax search.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--piles",
        type=str,
        default=DEFAULT_PILES,
        help="Comma-separated pile sizes, e.g. 1,2,4",
    )
    parser.add_argument(
        "--seed", default=DEFAULT_SEED, help="Seed for the random tie-break."
    )
    parser.add_argument(
        "--play", action="store_true", help="Let the computer play both sides to the end."
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        type=str,
        default=None,
        help="Path to a YAML configuration file.",
    )
    parser.add_argument("--log-dir", type=str, default=LOG_DIR, help="Directory for log files.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def play_game(state: NimState, rng: random.Random) -> NimState:
    """Play best moves for both sides until the game is over."""
    while not state.is_terminal():
        move = state.best_move(rng)
        logger.info(f"Player {'+1' if state.turn == 1 else '-1'}: {move}")
        state = state.apply_move(move)
        logger.info(str(state))
    winner = -state.turn  # the player who took the last stick
    logger.info(f"Player {'+1' if winner == 1 else '-1'} wins after {len(state.history) - 1} moves")
    return state


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, log_dir=args.log_dir)

    try:
        config = load_and_merge_config(parser, args)
    except (FileNotFoundError, yaml.YAMLError) as e:
        logger.error(f"Configuration Error: {e}")
        return 1
    except ValueError as e:
        parser.error(str(e))

    if config.get("debug") != args.debug or config.get("log_dir") != args.log_dir:
        setup_logging(debug=config.get("debug", False), log_dir=config.get("log_dir", LOG_DIR))

    state = NimState(piles=config["piles"])
    rng = random.Random(config.get("seed"))
    logger.info(str(state))
    logger.info(f"Nim-sum: {state.nim_sum()}")

    if state.is_terminal():
        logger.info("All piles are empty, there is nothing to play.")
        return 0

    if config.get("play"):
        play_game(state, rng)
    else:
        logger.info(f"Best move: {state.best_move(rng)}")
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
