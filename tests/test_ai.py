from functools import lru_cache

import numpy as np
import pytest

from tictactoe.ai import Difficulty, select_move
from tictactoe.game import O, X, detect_win, empty_cells, new_board, other_mark
from tictactoe.minimax import best_move


class FixedRng:
    """Stand-in for numpy Generator with scripted draws."""

    def __init__(self, value, index=0):
        self.value = value
        self.index = index
        self.random_calls = 0

    def random(self):
        self.random_calls += 1
        return self.value

    def integers(self, n):
        return min(self.index, n - 1)


def board_with(size, xs=(), os=()):
    board = new_board(size)
    for i in xs:
        board[i] = X
    for i in os:
        board[i] = O
    return board


@lru_cache(maxsize=None)
def solve(board, to_move):
    """Exact 3x3 value from X's point of view: +1, 0, -1."""
    winner = detect_win(board, 3, 3).winner
    if winner is not None:
        return 1 if winner == X else -1
    spots = empty_cells(board)
    if not spots:
        return 0
    values = []
    for spot in spots:
        child = list(board)
        child[spot] = to_move
        values.append(solve(tuple(child), other_mark(to_move)))
    return max(values) if to_move == X else min(values)


def test_easy_only_picks_empty_cells():
    board = board_with(3, xs=(0, 4), os=(8,))
    seen = set()
    for seed in range(200):
        move = select_move(board, O, Difficulty.EASY, 3, 3, rng=np.random.default_rng(seed))
        assert board[move] is None
        seen.add(move)
    assert seen == set(empty_cells(board))


def test_medium_completes_own_run():
    board = board_with(3, os=(0, 1))
    assert select_move(board, O, "medium", 3, 3, rng=np.random.default_rng(0)) == 2


def test_medium_blocks_opponent():
    board = board_with(3, xs=(0, 1))
    assert select_move(board, O, "medium", 3, 3, rng=np.random.default_rng(0)) == 2


def test_medium_prefers_winning_to_blocking():
    board = board_with(3, xs=(0, 1), os=(3, 4))
    assert select_move(board, O, "medium", 3, 3, rng=np.random.default_rng(0)) == 5


def test_medium_takes_center():
    board = board_with(5, xs=(0,))
    assert select_move(board, O, "medium", 5, 4, rng=np.random.default_rng(0)) == 12


def test_medium_falls_back_to_random_on_even_boards():
    board = board_with(4, xs=(0,))
    rng = FixedRng(0.0, index=3)
    assert select_move(board, O, "medium", 4, 3, rng=rng) == empty_cells(board)[3]


def test_hard_returns_search_result_without_mistake():
    board = board_with(3, xs=(0, 1), os=(4,))
    rng = FixedRng(0.99)
    assert select_move(board, O, Difficulty.HARD, 3, 3, rng=rng) == 2
    assert rng.random_calls == 1


def test_hard_mistake_replaces_best_move():
    board = board_with(3, xs=(0, 1), os=(4,))
    rng = FixedRng(0.1, index=1)
    assert select_move(board, O, Difficulty.HARD, 3, 3, rng=rng) == 3


def test_hard_never_errs_with_three_empty_cells():
    board = [X, O, X,
             O, O, X,
             None, None, None]
    rng = FixedRng(0.0, index=0)
    assert select_move(board, X, Difficulty.HARD, 3, 3, rng=rng) == 8


def test_hard_mistake_rate():
    board = board_with(3, xs=(0, 4, 5), os=(3, 8))
    best = best_move(board, O, 3, 3)
    rng = np.random.default_rng(1234)
    runs = 400
    off = sum(select_move(board, O, "hard", 3, 3, rng=rng) != best for _ in range(runs))
    # 20% mistakes, of which 3 in 4 land on another cell
    assert 0.08 < off / runs < 0.23


@pytest.mark.parametrize("opening", range(9))
def test_hard_reply_never_loses_to_perfect_play(opening):
    board = board_with(3, xs=(opening,))
    reply = best_move(board, O, 3, 3)
    board[reply] = O
    assert solve(tuple(board), X) == 0


def test_hard_opening_keeps_the_draw():
    board = new_board(3)
    board[best_move(board, X, 3, 3)] = X
    assert solve(tuple(board), O) == 0


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("size, k", [(3, 3), (5, 4), (7, 5)])
def test_never_returns_occupied_cell(difficulty, size, k):
    rng = np.random.default_rng(size)
    for _ in range(5):
        fill = rng.integers(size * size // 2, size * size)
        order = rng.permutation(size * size)[:fill]
        board = new_board(size)
        for turn, i in enumerate(order):
            board[int(i)] = X if turn % 2 == 0 else O
        before = list(board)
        move = select_move(board, O, difficulty, size, k, rng=rng)
        assert board[move] is None
        assert board == before


def test_full_board_is_rejected():
    board = [X, O, X,
             X, O, O,
             O, X, X]
    with pytest.raises(ValueError):
        select_move(board, O, "easy", 3, 3)


def test_unknown_difficulty():
    with pytest.raises(ValueError):
        select_move(new_board(3), O, "impossible", 3, 3)
