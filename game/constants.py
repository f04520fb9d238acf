from enum import IntEnum
from typing import Final, Tuple


class Difficulty(IntEnum):
    """Named difficulty tiers, numbered as offered at the selector prompt."""

    EASY = 1
    NORMAL = 2
    HARD = 3

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


MAP_WIDTH: Final[int] = 20
MAP_HEIGHT: Final[int] = 10

# Player baseline, independent of difficulty
PLAYER_MAX_HP: Final[int] = 20
PLAYER_ATTACK: Final[int] = 4

KILL_SCORE: Final[int] = 10
POTION_HEAL_RANGE: Final[Tuple[int, int]] = (6, 10)
# Absolute HP ceiling applied after every agent phase
HP_CEILING: Final[int] = 999

__all__ = [
    "Difficulty",
    "MAP_WIDTH",
    "MAP_HEIGHT",
    "PLAYER_MAX_HP",
    "PLAYER_ATTACK",
    "KILL_SCORE",
    "POTION_HEAL_RANGE",
    "HP_CEILING",
]
