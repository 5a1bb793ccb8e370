#!/usr/bin/env python3
"""
Pipeflow - Main Entry Point

Headless tools for the pipe-flow puzzle core: inspect difficulty presets,
validate configuration files and dump generated boards.
"""

import argparse
import logging
import os
import sys

logging.basicConfig(
    level=os.getenv("PIPEFLOW_LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s - [%(name)s:%(funcName)s:%(lineno)d] - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def run_presets():
    """List available difficulty presets."""
    from pipeflow.config import DIFFICULTY_PRESETS

    print("Available difficulty presets:")
    print()
    for difficulty, preset in DIFFICULTY_PRESETS.items():
        cfg = preset.config
        print(f"  {difficulty.value:8s} - {cfg.grid.width}x{cfg.grid.height} grid, "
              f"{cfg.grid.blocked_percentage}% blocked, {cfg.bombs.max_bombs} bombs, "
              f"win at {cfg.score.win_filled_pipes_count} pipes")
        print(f"  {'':8s}   {preset.metadata.description}")
    return 0


def run_validate(args):
    """Validate a JSON configuration file."""
    from pipeflow.config import GameConfig, GameConfigValidator

    try:
        config = GameConfig.from_json_file(args.path)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    errors = GameConfigValidator.validate(config)
    if errors:
        print(f"✗ {args.path} is invalid:")
        for error in errors:
            print(f"  - {error}")
        return 1

    print(f"✓ {args.path} is valid")
    return 0


def run_board(args):
    """Generate a board for a preset and print it."""
    from pipeflow.config import get_config_or_default
    from pipeflow.game import GameSession

    config = get_config_or_default(args.difficulty)
    session = GameSession(config, seed=args.seed)
    if args.json:
        print(config.to_json())
    print(session.summary())
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Pipeflow - pipe-connection puzzle core"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("presets", help="List difficulty presets")

    validate_parser = subparsers.add_parser("validate", help="Validate a JSON config file")
    validate_parser.add_argument("path", help="Path to the configuration file")

    board_parser = subparsers.add_parser("board", help="Generate and print a board")
    board_parser.add_argument(
        "-d", "--difficulty",
        default="medium",
        help="Difficulty preset (default: medium)"
    )
    board_parser.add_argument(
        "-s", "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible board"
    )
    board_parser.add_argument(
        "--json",
        action="store_true",
        help="Also print the configuration as JSON"
    )

    args = parser.parse_args()

    if args.command == "presets":
        return run_presets()
    elif args.command == "validate":
        return run_validate(args)
    elif args.command == "board":
        return run_board(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
