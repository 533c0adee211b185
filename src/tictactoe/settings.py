"""
Game settings chosen before play begins.

Invalid configurations are rejected here, at construction time, so the
engine functions can assume validated inputs.
"""

import json
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .ai import Difficulty

DEFAULT_PLAYER1 = "Player 1"
DEFAULT_PLAYER2 = "Player 2"
COMPUTER_NAME = "Computer"
MAX_NAME_LENGTH = 20

# Run length used by the stock board sizes
DEFAULT_WIN_CONDITIONS = {3: 3, 5: 4, 7: 5}


class MatchMode(str, Enum):
    SINGLE = "single"
    BEST_OF_3 = "best-of-3"
    BEST_OF_5 = "best-of-5"


class GameMode(str, Enum):
    PVP = "pvp"
    AI = "ai"


class CoinSide(str, Enum):
    HEADS = "heads"
    TAILS = "tails"


_ROUNDS = {MatchMode.SINGLE: 1, MatchMode.BEST_OF_3: 3, MatchMode.BEST_OF_5: 5}


def default_win_condition(board_size: int) -> int:
    return DEFAULT_WIN_CONDITIONS.get(board_size, min(board_size, 5))


def _clean_name(name: Optional[str], fallback: str) -> str:
    name = (name or "").strip()[:MAX_NAME_LENGTH]
    return name or fallback


@dataclass
class GameSettings:
    """Settings for one match."""

    board_size: int = 3
    win_condition: Optional[int] = None  # None: default for board_size

    match_mode: MatchMode = MatchMode.SINGLE
    game_mode: GameMode = GameMode.PVP
    difficulty: Difficulty = Difficulty.MEDIUM

    player1_name: str = DEFAULT_PLAYER1
    player2_name: str = DEFAULT_PLAYER2

    # pvp only: player 1 starts when the coin lands on this side
    player1_coin_choice: CoinSide = CoinSide.HEADS

    def __post_init__(self):
        self.match_mode = MatchMode(self.match_mode)
        self.game_mode = GameMode(self.game_mode)
        self.difficulty = Difficulty(self.difficulty)
        self.player1_coin_choice = CoinSide(self.player1_coin_choice)

        if self.board_size < 1:
            raise ValueError(f"board_size must be >= 1, got {self.board_size}")
        if self.win_condition is None:
            self.win_condition = default_win_condition(self.board_size)
        if self.win_condition < 1:
            raise ValueError(f"win_condition must be >= 1, got {self.win_condition}")
        if self.win_condition > self.board_size:
            raise ValueError(
                f"win_condition {self.win_condition} exceeds board_size {self.board_size}"
            )

        self.player1_name = _clean_name(self.player1_name, DEFAULT_PLAYER1)
        if self.game_mode is GameMode.AI:
            self.player2_name = COMPUTER_NAME
        else:
            self.player2_name = _clean_name(self.player2_name, DEFAULT_PLAYER2)

    @property
    def cells(self) -> int:
        return self.board_size * self.board_size

    @property
    def total_rounds(self) -> int:
        return _ROUNDS[self.match_mode]

    @property
    def wins_needed(self) -> int:
        """Wins that decide the match (majority of the rounds)."""
        return self.total_rounds // 2 + 1

    def to_dict(self) -> dict:
        d = asdict(self)
        for key, value in d.items():
            if isinstance(value, Enum):
                d[key] = value.value
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "GameSettings":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def save(self, path: Union[str, Path]):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "GameSettings":
        with open(path) as f:
            return cls.from_dict(json.load(f))
