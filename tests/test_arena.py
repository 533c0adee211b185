import numpy as np

from tictactoe.arena import eval_tiers, play_game
from tictactoe.game import X, O
from tictactoe.settings import GameSettings


def test_play_game_finishes():
    rng = np.random.default_rng(3)
    for _ in range(10):
        assert play_game(GameSettings(), "easy", "easy", rng) in (X, O, None)


def test_play_game_with_o_first():
    winner = play_game(GameSettings(board_size=5), "medium", "easy", np.random.default_rng(0), first_mark=O)
    assert winner in (X, O, None)


def test_eval_tiers_rates():
    results = eval_tiers(GameSettings(), "medium", "easy", games=20,
                         rng=np.random.default_rng(7), progress=False)
    assert results["games"] == 20
    assert abs(results["first_w"] + results["draws"] + results["first_l"] - 1.0) < 1e-9
    assert results["first_w"] > results["first_l"]
