# engine/action_handler.py
"""
Handles processing of player actions, validating them against the map and
triggering melee, potion pickups or plain movement.
"""
from typing import Any, Dict

import structlog

from game.effects.handlers import consume_potion
from game.game_state import GameState
from game.systems import combat_system

log = structlog.get_logger(__name__)


def _handle_player_move(dx: int, dy: int, gs: GameState) -> bool:
    """
    Attempts to move the player by ``(dx, dy)``.
    Bumping an agent attacks it, stepping on a potion drinks it.
    Returns True if the action consumed a turn.
    """
    player = gs.player
    game_map = gs.game_map
    dest_x, dest_y = player.x + dx, player.y + dy

    if not game_map.in_bounds(dest_x, dest_y):
        log.debug("Move rejected: out of bounds", dest=(dest_x, dest_y))
        gs.add_message("Cannot move out of bounds.", (255, 255, 0))
        return False

    if not game_map.is_walkable(dest_x, dest_y):
        gs.add_message("Bumped into a wall.", (180, 180, 180))
        return True

    agent = gs.agents.get_at(dest_x, dest_y)
    if agent is not None:
        combat_system.player_attack(agent, gs)
        return True

    pickup = gs.pickups.get_at(dest_x, dest_y)
    if pickup is not None:
        consume_potion(pickup, gs)

    player.move_to((dest_x, dest_y))
    log.debug("Player moved", pos=player.position)
    return True


def process_player_action(action: Dict[str, Any], gs: GameState) -> bool:
    """
    Processes a player action dictionary.
    Returns True if the action consumed a turn, False otherwise.
    """
    action_type = action.get("type")
    log.debug("Processing player action", action=action)

    if action_type == "move":
        dx = action.get("dx")
        dy = action.get("dy")
        if not isinstance(dx, int) or not isinstance(dy, int):
            raise ValueError(f"Move action needs integer dx/dy: {action!r}")
        if abs(dx) + abs(dy) != 1:
            raise ValueError(f"Move action must be a single orthogonal step: {action!r}")
        return _handle_player_move(dx, dy, gs)

    if action_type == "unknown":
        gs.add_message("Unknown input. Use w/a/s/d.", (255, 255, 0))
        return False

    log.warning("Unhandled action type", action_type=action_type)
    return False
