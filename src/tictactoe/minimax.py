"""
Depth-capped minimax search with alpha-beta pruning.

Scores are from the computer's point of view:
  10 - depth   computer has won
  depth - 10   opponent has won
  0            board full, or depth cap reached (neutral, not a proven draw)

The search runs on an encoded scratch board (see game.encode_board). Every
probed cell is cleared again before its loop iteration ends, cutoffs
included, so the scratch board is back to its starting state when a call
returns.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from .game import empty_cells, encode_board, mark_code, winner_code, winning_runs

logger = logging.getLogger(__name__)

WIN_SCORE = 10

# Root pruning on sparse boards
SPARSE_EMPTY_THRESHOLD = 15
CENTER_RADIUS = 2
FALLBACK_CANDIDATES = 10


def max_depth_for(board_size: int) -> int:
    """Plies searched below the root move for a given board size."""
    if board_size == 3:
        return board_size * board_size
    if board_size == 5:
        return 3
    return 2


def minimax(
    cells: np.ndarray,
    depth: int,
    maximizing: bool,
    alpha: float,
    beta: float,
    *,
    me: int,
    runs: np.ndarray,
    max_depth: int,
) -> float:
    """
    Score an encoded board.

    Args:
        cells: Encoded scratch board (+1/-1/0), probed in place
        depth: Plies played below the root move
        maximizing: True when it is the computer's turn
        alpha, beta: Alpha-beta window
        me: Computer's cell code
        runs: Run table from game.winning_runs
        max_depth: Depth cap
    """
    code, _ = winner_code(cells, runs)
    if code == me:
        return WIN_SCORE - depth
    if code == -me:
        return depth - WIN_SCORE

    spots = np.flatnonzero(cells == 0)
    if spots.size == 0:
        return 0
    if depth >= max_depth:
        return 0

    if maximizing:
        best = -math.inf
        for spot in spots:
            cells[spot] = me
            try:
                score = minimax(cells, depth + 1, False, alpha, beta,
                                me=me, runs=runs, max_depth=max_depth)
            finally:
                cells[spot] = 0
            best = max(best, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break
        return best

    best = math.inf
    for spot in spots:
        cells[spot] = -me
        try:
            score = minimax(cells, depth + 1, True, alpha, beta,
                            me=me, runs=runs, max_depth=max_depth)
        finally:
            cells[spot] = 0
        best = min(best, score)
        beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def candidate_moves(empties: Sequence[int], board_size: int) -> List[int]:
    """
    Root moves worth searching.

    With more than 15 empties only cells within Manhattan distance 2 of the
    center are kept; if none are, the first 10 empties in index order.
    """
    empties = list(empties)
    if len(empties) <= SPARSE_EMPTY_THRESHOLD:
        return empties

    center = board_size // 2
    near = [
        spot for spot in empties
        if abs(spot // board_size - center) + abs(spot % board_size - center) <= CENTER_RADIUS
    ]
    if near:
        return near
    return empties[:FALLBACK_CANDIDATES]


def best_move(
    board: Sequence[Optional[str]],
    computer_mark: str,
    board_size: int,
    win_condition: int,
) -> int:
    """
    Pick the highest scoring root move.

    The first candidate seen keeps its place on equal scores. The caller's
    board is not touched.
    """
    candidates = candidate_moves(empty_cells(board), board_size)
    runs = winning_runs(board_size, win_condition)
    max_depth = max_depth_for(board_size)
    me = mark_code(computer_mark)
    cells = encode_board(board)

    best_score = -math.inf
    best = candidates[0]

    for spot in candidates:
        cells[spot] = me
        try:
            score = minimax(cells, 0, False, -math.inf, math.inf,
                            me=me, runs=runs, max_depth=max_depth)
        finally:
            cells[spot] = 0

        if score > best_score:
            best_score = score
            best = spot

    logger.debug("minimax picked %d (score %s, %d candidates, depth cap %d)",
                 best, best_score, len(candidates), max_depth)
    return best
