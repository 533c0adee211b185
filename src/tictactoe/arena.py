"""
Evaluation functions.

Pits two difficulty tiers against each other over many rounds to measure
their relative strength.
"""

from typing import Dict, Optional

import numpy as np
from tqdm.auto import trange

from .ai import Difficulty
from .game import X, O
from .match import GameRound
from .settings import GameSettings


def play_game(
    settings: GameSettings,
    x_difficulty,
    o_difficulty,
    rng: np.random.Generator,
    first_mark: str = X,
) -> Optional[str]:
    """
    Play one computer-vs-computer round.

    Returns:
        Winning mark, or None for a draw
    """
    tiers = {X: Difficulty(x_difficulty), O: Difficulty(o_difficulty)}
    game = GameRound(settings, first_mark=first_mark)
    while not game.is_over:
        game.computer_move(rng, difficulty=tiers[game.current_mark])
    return game.winner


def eval_tiers(
    settings: GameSettings,
    first,
    second,
    games: int = 100,
    rng: Optional[np.random.Generator] = None,
    progress: bool = True,
) -> Dict[str, float]:
    """
    Evaluate tier `first` against tier `second`.

    `first` plays X in even games and O in odd games; X always opens.

    Returns:
        Dict with 'games', 'first_w', 'draws', 'first_l' (rates)
    """
    if rng is None:
        rng = np.random.default_rng()
    wins = draws = losses = 0

    for g in trange(games, desc=f"{Difficulty(first).value} vs {Difficulty(second).value}",
                    disable=not progress, leave=False):
        first_side = X if g % 2 == 0 else O
        if first_side == X:
            winner = play_game(settings, first, second, rng)
        else:
            winner = play_game(settings, second, first, rng)

        if winner is None:
            draws += 1
        elif winner == first_side:
            wins += 1
        else:
            losses += 1

    total = max(1, wins + draws + losses)
    return {
        "games": wins + draws + losses,
        "first_w": wins / total,
        "draws": draws / total,
        "first_l": losses / total,
    }
