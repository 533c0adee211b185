"""
Computer opponent: picks the next cell for a given difficulty.

  easy    uniform random empty cell
  medium  win, else block, else center (odd boards), else random
  hard    minimax with alpha-beta, plus a 20% chance of a random move
          while more than 3 cells are empty
"""

import logging
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from .game import center_index, detect_win, empty_cells, other_mark
from .minimax import best_move

logger = logging.getLogger(__name__)

# Keeps hard beatable
MISTAKE_RATE = 0.2
MISTAKE_MIN_EMPTY = 3


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def _random_cell(empties: Sequence[int], rng: np.random.Generator) -> int:
    return empties[int(rng.integers(len(empties)))]


def _completing_cell(board: Sequence[Optional[str]], mark: str, board_size: int, win_condition: int) -> Optional[int]:
    """First empty cell that wins for mark, if any."""
    probe = list(board)
    for spot in empty_cells(board):
        probe[spot] = mark
        won = detect_win(probe, board_size, win_condition).winner == mark
        probe[spot] = None
        if won:
            return spot
    return None


def easy_move(board: Sequence[Optional[str]], rng: np.random.Generator) -> int:
    return _random_cell(empty_cells(board), rng)


def medium_move(
    board: Sequence[Optional[str]],
    computer_mark: str,
    board_size: int,
    win_condition: int,
    rng: np.random.Generator,
) -> int:
    win = _completing_cell(board, computer_mark, board_size, win_condition)
    if win is not None:
        return win

    block = _completing_cell(board, other_mark(computer_mark), board_size, win_condition)
    if block is not None:
        return block

    center = center_index(board_size)
    if board_size % 2 == 1 and board[center] is None:
        return center

    return _random_cell(empty_cells(board), rng)


def hard_move(
    board: Sequence[Optional[str]],
    computer_mark: str,
    board_size: int,
    win_condition: int,
    rng: np.random.Generator,
) -> int:
    move = best_move(board, computer_mark, board_size, win_condition)

    empties = empty_cells(board)
    if rng.random() < MISTAKE_RATE and len(empties) > MISTAKE_MIN_EMPTY:
        mistake = _random_cell(empties, rng)
        logger.debug("hard: dropping %d for random %d", move, mistake)
        return mistake
    return move


def select_move(
    board: Sequence[Optional[str]],
    computer_mark: str,
    difficulty,
    board_size: int,
    win_condition: int,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """
    Choose the computer's next cell.

    Args:
        board: Current board, left unchanged
        computer_mark: "X" or "O"
        difficulty: Difficulty or its string value
        board_size: Side length N (board has N * N cells)
        win_condition: Run length needed to win
        rng: numpy Generator; a fresh unseeded one by default

    Returns:
        Index of an empty cell

    Raises:
        ValueError: unknown difficulty, or no empty cell left
    """
    difficulty = Difficulty(difficulty)
    if not empty_cells(board):
        raise ValueError("select_move needs at least one empty cell")
    if rng is None:
        rng = np.random.default_rng()

    if difficulty is Difficulty.EASY:
        move = easy_move(board, rng)
    elif difficulty is Difficulty.MEDIUM:
        move = medium_move(board, computer_mark, board_size, win_condition, rng)
    else:
        move = hard_move(board, computer_mark, board_size, win_condition, rng)

    logger.debug("%s %s plays %d", difficulty.value, computer_mark, move)
    return move
