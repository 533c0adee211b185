"""
N-in-a-row game rules and win detection.

Board representation: list of length board_size ** 2, row-major
  - None: empty
  - "X", "O": marks

A run is complete when all of its win_condition cells hold the same mark.
Runs are scanned in a fixed order (rows, columns, down-right diagonals,
down-left diagonals) so the reported line is deterministic.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

import numpy as np

X = "X"
O = "O"

# Cell codes used by the numpy side of the engine
_CODES = {X: 1, O: -1}
_MARK_FOR_CODE = {1: X, -1: O}

Board = List[Optional[str]]


@dataclass(frozen=True)
class WinResult:
    """Winning mark and the cells of its run, or (None, None)."""
    winner: Optional[str]
    line: Optional[Tuple[int, ...]]


NO_WIN = WinResult(None, None)


@lru_cache(maxsize=None)
def winning_runs(board_size: int, win_condition: int) -> np.ndarray:
    """
    Build the table of every run of win_condition cells.

    Returns:
        Read-only [runs, win_condition] array of cell indices in scan order.
        Empty (zero rows) when win_condition > board_size.
    """
    n, k = board_size, win_condition
    runs = []

    for row in range(n):
        for col in range(n - k + 1):
            runs.append([row * n + col + i for i in range(k)])

    for col in range(n):
        for row in range(n - k + 1):
            runs.append([(row + i) * n + col for i in range(k)])

    for row in range(n - k + 1):
        for col in range(n - k + 1):
            runs.append([(row + i) * n + col + i for i in range(k)])

    for row in range(n - k + 1):
        for col in range(k - 1, n):
            runs.append([(row + i) * n + col - i for i in range(k)])

    table = np.array(runs, dtype=np.intp).reshape(-1, k)
    table.setflags(write=False)
    return table


def encode_board(board: Sequence[Optional[str]]) -> np.ndarray:
    """Encode marks as +1 (X), -1 (O), 0 (empty)."""
    return np.fromiter((_CODES.get(v, 0) for v in board), dtype=np.int64, count=len(board))


def mark_code(mark: str) -> int:
    return _CODES[mark]


def winner_code(cells: np.ndarray, runs: np.ndarray) -> Tuple[int, int]:
    """
    Find the first complete run on an encoded board.

    Returns:
        (code, run_row) where code is +1/-1 for the winning mark,
        or (0, -1) if no run is complete.
    """
    sums = cells[runs].sum(axis=1)
    hits = np.flatnonzero(np.abs(sums) == runs.shape[1])
    if hits.size == 0:
        return 0, -1
    first = int(hits[0])
    return int(np.sign(sums[first])), first


def detect_win(board: Sequence[Optional[str]], board_size: int, win_condition: int) -> WinResult:
    """
    Check the board for a completed run.

    Never mutates the board. win_condition > board_size has no runs and
    always yields NO_WIN.
    """
    runs = winning_runs(board_size, win_condition)
    code, row = winner_code(encode_board(board), runs)
    if code == 0:
        return NO_WIN
    return WinResult(_MARK_FOR_CODE[code], tuple(int(i) for i in runs[row]))


def new_board(board_size: int) -> Board:
    return [None] * (board_size * board_size)


def other_mark(mark: str) -> str:
    return O if mark == X else X


def empty_cells(board: Sequence[Optional[str]]) -> List[int]:
    """Return indices of empty cells in index order."""
    return [i for i, v in enumerate(board) if v is None]


def is_full(board: Sequence[Optional[str]]) -> bool:
    return all(v is not None for v in board)


def center_index(board_size: int) -> int:
    return (board_size * board_size) // 2


def apply_move(board: Sequence[Optional[str]], mark: str, index: int) -> Board:
    """Apply move and return new board."""
    if not 0 <= index < len(board):
        raise ValueError(f"cell {index} out of range")
    if board[index] is not None:
        raise ValueError(f"cell {index} already taken")
    after = list(board)
    after[index] = mark
    return after


def is_terminal(board: Sequence[Optional[str]], board_size: int, win_condition: int) -> Tuple[bool, Optional[str]]:
    """
    Check if board is terminal.

    Returns:
        (is_terminal, winner) where winner is "X"/"O" or None for a draw
    """
    result = detect_win(board, board_size, win_condition)
    if result.winner is not None:
        return True, result.winner
    return is_full(board), None
