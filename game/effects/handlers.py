# game/effects/handlers.py
# Contains the functions that apply item effects to the player.

from typing import TYPE_CHECKING

import structlog

from game.constants import POTION_HEAL_RANGE
from game.entities.components import Pickup
from utils.helpers import IntRange, roll_range

if TYPE_CHECKING:
    from game.game_state import GameState

log = structlog.get_logger(__name__)


def consume_potion(
    pickup: Pickup, gs: "GameState", heal_range: IntRange = POTION_HEAL_RANGE
) -> int:
    """Heal the player from ``pickup`` and remove it. Returns HP actually restored."""
    player = gs.player
    roll = roll_range(heal_range, gs.rng_instance)
    before = player.hp
    player.hp = min(player.max_hp, player.hp + roll)
    healed = player.hp - before
    gs.pickups.remove(pickup)

    log.debug("Potion consumed", roll=roll, healed=healed, hp=player.hp)
    gs.add_message(
        f"Picked up a potion! Healed {healed} HP (+{roll} roll, capped).",
        (0, 255, 0),
    )
    return healed
