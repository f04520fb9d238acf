from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# (x, y) grid coordinates
Cell = Tuple[int, int]


@dataclass
class Player:
    """The player's position and running stats."""

    x: int
    y: int
    hp: int
    max_hp: int
    attack: int
    score: int = 0
    turns: int = 0

    @property
    def position(self) -> Cell:
        return self.x, self.y

    def move_to(self, cell: Cell) -> None:
        self.x, self.y = cell

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0


@dataclass
class Agent:
    """A hostile mobile entity. Dead agents are removed from their registry."""

    x: int
    y: int
    hp: int

    @property
    def position(self) -> Cell:
        return self.x, self.y

    def move_to(self, cell: Cell) -> None:
        self.x, self.y = cell


@dataclass
class Pickup:
    """A single healing potion lying on the floor."""

    x: int
    y: int

    @property
    def position(self) -> Cell:
        return self.x, self.y
