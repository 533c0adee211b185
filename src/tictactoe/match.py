"""
Rounds and match scoring.

Player 1 always plays X and player 2 plays O; the coin flip only decides
which mark moves first.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .ai import select_move
from .game import NO_WIN, WinResult, X, O, apply_move, detect_win, is_full, new_board, other_mark
from .settings import CoinSide, GameMode, GameSettings

logger = logging.getLogger(__name__)


def coin_flip(rng: np.random.Generator) -> CoinSide:
    return CoinSide.HEADS if rng.random() < 0.5 else CoinSide.TAILS


def starting_mark(side: CoinSide, settings: GameSettings) -> str:
    """
    Mark that opens the first round.

    Against the computer, heads lets the human (X) start and tails the
    computer (O). In pvp, player 1 starts when the coin matches their call.
    """
    side = CoinSide(side)
    if settings.game_mode is GameMode.AI:
        return X if side is CoinSide.HEADS else O
    return X if side is settings.player1_coin_choice else O


class GameRound:
    """One round: owns the board and applies moves in turn."""

    def __init__(self, settings: GameSettings, first_mark: str = X):
        self.settings = settings
        self.board = new_board(settings.board_size)
        self.current_mark = first_mark
        self.moves: List[int] = []
        self.result: WinResult = NO_WIN

    @property
    def is_draw(self) -> bool:
        return self.result.winner is None and is_full(self.board)

    @property
    def is_over(self) -> bool:
        return self.result.winner is not None or is_full(self.board)

    @property
    def winner(self) -> Optional[str]:
        return self.result.winner

    def play(self, index: int) -> WinResult:
        """Place the current mark on index and pass the turn."""
        if self.is_over:
            raise ValueError("round is already over")
        self.board = apply_move(self.board, self.current_mark, index)
        self.moves.append(index)
        self.result = detect_win(self.board, self.settings.board_size, self.settings.win_condition)
        self.current_mark = other_mark(self.current_mark)
        return self.result

    def computer_move(self, rng: Optional[np.random.Generator] = None, difficulty=None) -> int:
        """Let the computer choose and play a cell for the current mark."""
        if difficulty is None:
            difficulty = self.settings.difficulty
        index = select_move(
            self.board,
            self.current_mark,
            difficulty,
            self.settings.board_size,
            self.settings.win_condition,
            rng=rng,
        )
        self.play(index)
        return index


@dataclass
class MatchStats:
    """Running score of a match."""

    player1_wins: int = 0
    player2_wins: int = 0
    draws: int = 0
    current_round: int = 1
    total_rounds: int = 1
    history: List[Optional[str]] = field(default_factory=list)

    @classmethod
    def for_settings(cls, settings: GameSettings) -> "MatchStats":
        return cls(total_rounds=settings.total_rounds)

    def record(self, winner: Optional[str]):
        """Count a finished round; winner is "X", "O" or None for a draw."""
        if winner == X:
            self.player1_wins += 1
        elif winner == O:
            self.player2_wins += 1
        else:
            self.draws += 1
        self.history.append(winner)
        self.current_round += 1
        logger.info("round %d: %s (%d-%d, %d draws)", len(self.history), winner or "draw",
                    self.player1_wins, self.player2_wins, self.draws)

    @property
    def rounds_played(self) -> int:
        return len(self.history)

    def match_winner(self, settings: GameSettings) -> Optional[str]:
        """Name of the player who has reached the winning score, if any."""
        needed = settings.wins_needed
        if self.player1_wins >= needed:
            return settings.player1_name
        if self.player2_wins >= needed:
            return settings.player2_name
        return None

    def is_finished(self, settings: GameSettings) -> bool:
        return self.match_winner(settings) is not None or self.rounds_played >= self.total_rounds
