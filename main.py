#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty TIER | --width W --height H --mines M]
    python main.py simulate [--games N] [--difficulty TIER]
"""
import argparse
import logging
import random
import time
from pathlib import Path

from src.minesweeper.board import (
    DIFFICULTY_PRESETS,
    BoardConfig,
    get_preset,
)
from src.minesweeper.display import format_elapsed, render_board
from src.minesweeper.engine import GameStatus
from src.minesweeper.environment import MinesweeperEnv
from src.minesweeper.game import Game
from src.minesweeper.settings import JsonFileSettingsStore

DEFAULT_SETTINGS_PATH = Path.home() / ".minesweeper" / "settings.json"

HELP_TEXT = (
    "Commands: r ROW COL (reveal), f ROW COL (flag), c ROW COL (chord), "
    "n (new game), q (quit)"
)


def parse_move(line: str):
    """Split a command line into (command, row, col); row/col may be None."""
    parts = line.split()
    if not parts:
        return None, None, None
    command = parts[0].lower()
    if len(parts) != 3:
        return command, None, None
    try:
        return command, int(parts[1]), int(parts[2])
    except ValueError:
        return command, None, None


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    rng = random.Random(args.seed) if args.seed is not None else None
    game = Game(JsonFileSettingsStore(args.settings), rng=rng)

    if args.width or args.height or args.mines:
        current = game.settings
        requested = (
            args.width or current.width,
            args.height or current.height,
            args.mines or current.mines,
        )
        config = BoardConfig.clamp_custom(*requested)
        adjusted = (config.width, config.height, config.num_mines)
        if adjusted != requested:
            print(
                f"Board settings adjusted to {config.width}x{config.height} "
                f"with {config.num_mines} mines"
            )
        game.set_custom_difficulty(*adjusted)
    elif args.difficulty:
        game.set_difficulty(args.difficulty)

    print(HELP_TEXT)
    actions = {"r": game.reveal, "f": game.flag, "c": game.chord}
    last_tick = time.monotonic()
    announced = False

    while True:
        print(render_board(game.state, show_coordinates=True))
        if game.status == GameStatus.WON and not announced:
            print(f"You won! Play time: {format_elapsed(game.state.timer)}")
            announced = True
        elif game.status == GameStatus.LOST and not announced:
            print("Boom! Type 'n' for a new game.")
            announced = True

        try:
            line = input("> ")
        except EOFError:
            break

        now = time.monotonic()
        for _ in range(int(now - last_tick)):
            game.tick()
        last_tick += int(now - last_tick)

        command, row, col = parse_move(line)
        if command == "q":
            break
        if command == "n":
            game.reset()
            last_tick = time.monotonic()
            announced = False
            continue
        if command not in actions or row is None:
            print(HELP_TEXT)
            continue
        if not game.state.board.is_valid_position(row, col):
            print(f"No cell at ({row}, {col})")
            continue
        if game.state.is_first_click and command == "r":
            last_tick = time.monotonic()
        actions[command](row, col)


def simulate(args: argparse.Namespace) -> None:
    """Play random legal reveals and report the win rate."""
    env = MinesweeperEnv(config=get_preset(args.difficulty))
    wins = 0
    total_revealed = 0

    for episode in range(args.games):
        seed = None if args.seed is None else args.seed + episode
        env.reset(seed=seed)
        env.action_space.seed(seed)
        done = False
        info = {}

        while not done:
            action = env.action_space.sample(mask=env.get_reveal_mask())
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info.get("game_state") == "WON":
            wins += 1
        total_revealed += info.get("revealed", 0)

    print(f"Played {args.games} games on {args.difficulty.upper()}")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg revealed: {total_revealed / args.games:.1f} cells")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    tiers = [name.lower() for name in DIFFICULTY_PRESETS]

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--difficulty", choices=tiers, help="Preset board size"
    )
    play_parser.add_argument("--width", type=int, help="Custom width (8-100)")
    play_parser.add_argument("--height", type=int, help="Custom height (8-100)")
    play_parser.add_argument(
        "--mines", type=int, help="Custom mine count (up to a third of the cells)"
    )
    play_parser.add_argument(
        "--settings",
        type=Path,
        default=DEFAULT_SETTINGS_PATH,
        help="Settings file",
    )
    play_parser.add_argument("--seed", type=int, help="Random seed")

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report the win rate"
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--difficulty", choices=tiers, default="beginner", help="Preset"
    )
    simulate_parser.add_argument("--seed", type=int, help="Random seed")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
