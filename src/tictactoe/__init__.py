"""
N-in-a-row TicTacToe engine.

Win detection over any N x N board and a computer opponent with three
difficulty tiers (random, win/block heuristic, depth-capped minimax).
"""

from .game import (
    X,
    O,
    NO_WIN,
    WinResult,
    detect_win,
    winning_runs,
    empty_cells,
    apply_move,
    other_mark,
    is_terminal,
    new_board,
)
from .minimax import minimax, best_move, candidate_moves, max_depth_for
from .ai import Difficulty, select_move
from .settings import GameSettings, MatchMode, GameMode, CoinSide, default_win_condition
from .match import GameRound, MatchStats, coin_flip, starting_mark
from .arena import play_game, eval_tiers

__version__ = "0.1.0"
__all__ = [
    "X",
    "O",
    "NO_WIN",
    "WinResult",
    "detect_win",
    "winning_runs",
    "empty_cells",
    "apply_move",
    "other_mark",
    "is_terminal",
    "new_board",
    "minimax",
    "best_move",
    "candidate_moves",
    "max_depth_for",
    "Difficulty",
    "select_move",
    "GameSettings",
    "MatchMode",
    "GameMode",
    "CoinSide",
    "default_win_condition",
    "GameRound",
    "MatchStats",
    "coin_flip",
    "starting_mark",
    "play_game",
    "eval_tiers",
]
