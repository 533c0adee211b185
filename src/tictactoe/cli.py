"""
Play TicTacToe in the terminal, or pit computer tiers against each other.

Usage:
    tictactoe play                              # 3x3 vs medium computer
    tictactoe play --size 5 --difficulty hard --match best-of-3
    tictactoe play --pvp
    tictactoe arena --first hard --second easy --games 200
"""

import argparse
import logging
import os
from typing import Optional

import numpy as np

from .ai import Difficulty
from .arena import eval_tiers
from .game import O, X, empty_cells
from .match import GameRound, MatchStats, coin_flip, starting_mark
from .settings import CoinSide, GameMode, GameSettings, MatchMode

logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None):
    level = (level or os.getenv("LOG_LEVEL", "WARNING") or "WARNING").upper()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    root.addHandler(handler)


def print_board(board, board_size: int):
    """Pretty print board; empty cells show their index."""
    width = len(str(board_size * board_size - 1))
    for r in range(board_size):
        cells = []
        for c in range(board_size):
            i = r * board_size + c
            cells.append((board[i] or str(i)).center(width))
        print(" " + " | ".join(cells))
        if r < board_size - 1:
            print("-" * (board_size * (width + 3) - 1))


def ask_move(game: GameRound, name: str) -> int:
    """Prompt until a legal cell is entered. EOF / Ctrl-C propagate."""
    moves = empty_cells(game.board)
    while True:
        raw = input(f"{name} ({game.current_mark}), your move: ")
        try:
            action = int(raw)
        except ValueError:
            print("Enter a cell number")
            continue
        if action not in moves:
            print("Invalid move, try again")
            continue
        return action


def play_round(settings: GameSettings, first_mark: str, rng: np.random.Generator) -> Optional[str]:
    """Play one interactive round and return the winning mark (None on draw)."""
    game = GameRound(settings, first_mark=first_mark)
    names = {X: settings.player1_name, O: settings.player2_name}
    vs_computer = settings.game_mode is GameMode.AI

    while not game.is_over:
        print_board(game.board, settings.board_size)
        print()
        if vs_computer and game.current_mark != X:
            action = game.computer_move(rng)
            print(f"{names[game.board[action]]} plays: {action}")
        else:
            game.play(ask_move(game, names[game.current_mark]))
        print()

    print_board(game.board, settings.board_size)
    if game.winner is None:
        print("\nDraw!")
    else:
        print(f"\n{names[game.winner]} wins! Line: {list(game.result.line)}")
    return game.winner


def play_match(settings: GameSettings, rng: np.random.Generator):
    stats = MatchStats.for_settings(settings)
    side = coin_flip(rng)
    first = starting_mark(side, settings)
    print(f"Coin: {side.value} - {settings.player1_name if first == X else settings.player2_name} starts")

    while not stats.is_finished(settings):
        if settings.total_rounds > 1:
            print(f"\n=== Round {stats.current_round} / {stats.total_rounds} ===")
        stats.record(play_round(settings, first, rng))
        print(f"Score: {settings.player1_name} {stats.player1_wins} - "
              f"{stats.player2_wins} {settings.player2_name} ({stats.draws} draws)")

    winner = stats.match_winner(settings)
    if settings.total_rounds > 1:
        print(f"\nMatch winner: {winner}" if winner else "\nMatch drawn")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tictactoe", description="N-in-a-row TicTacToe")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: $LOG_LEVEL or WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play an interactive game")
    play.add_argument("--size", type=int, default=3, help="Board size N")
    play.add_argument("--win", type=int, default=None, help="Run length needed to win")
    play.add_argument("--difficulty", type=str, default="medium", choices=[d.value for d in Difficulty])
    play.add_argument("--pvp", action="store_true", help="Two local players instead of the computer")
    play.add_argument("--match", type=str, default="single", choices=[m.value for m in MatchMode])
    play.add_argument("--name", type=str, default=None, help="Player 1 name")
    play.add_argument("--coin", type=str, default="heads", choices=[c.value for c in CoinSide],
                      help="Player 1's call for the coin flip (pvp)")
    play.add_argument("--settings", type=str, default=None, help="Load settings from a JSON file")
    play.add_argument("--seed", type=int, default=None, help="Random seed")

    arena = sub.add_parser("arena", help="Pit two computer tiers against each other")
    arena.add_argument("--first", type=str, required=True, choices=[d.value for d in Difficulty])
    arena.add_argument("--second", type=str, required=True, choices=[d.value for d in Difficulty])
    arena.add_argument("--games", type=int, default=100, help="Number of games")
    arena.add_argument("--size", type=int, default=3, help="Board size N")
    arena.add_argument("--win", type=int, default=None, help="Run length needed to win")
    arena.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser


def settings_from_args(args) -> GameSettings:
    if getattr(args, "settings", None):
        return GameSettings.load(args.settings)
    if args.command == "arena":
        return GameSettings(board_size=args.size, win_condition=args.win)
    return GameSettings(
        board_size=args.size,
        win_condition=args.win,
        match_mode=args.match,
        game_mode=GameMode.PVP if args.pvp else GameMode.AI,
        difficulty=args.difficulty,
        player1_name=args.name or "Player 1",
        player1_coin_choice=args.coin,
    )


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = settings_from_args(args)
    except (OSError, ValueError) as e:
        parser.error(str(e))
    logger.info("settings: %s", settings.to_dict())
    rng = np.random.default_rng(args.seed)

    if args.command == "arena":
        print(f"\n=== {args.first} vs {args.second} "
              f"({settings.board_size}x{settings.board_size}, {settings.win_condition} in a row) ===")
        results = eval_tiers(settings, args.first, args.second, games=args.games, rng=rng)
        print(f"  Games:  {results['games']}")
        print(f"  Wins:   {results['first_w']:.2%}")
        print(f"  Draws:  {results['draws']:.2%}")
        print(f"  Losses: {results['first_l']:.2%}")
        return 0

    print(f"\n=== {settings.board_size}x{settings.board_size}, "
          f"{settings.win_condition} in a row ===")
    try:
        play_match(settings, rng)
    except (EOFError, KeyboardInterrupt):
        print("\nGame aborted")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
