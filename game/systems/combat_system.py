# game/systems/combat_system.py
"""
Handles melee between the player and hostile agents.
"""
from typing import TYPE_CHECKING

import structlog

from utils.helpers import roll_range
from game.entities.components import Agent
from game.systems.death_system import handle_agent_death

if TYPE_CHECKING:
    from game.game_state import GameState

log = structlog.get_logger(__name__)


def player_attack(agent: Agent, gs: "GameState") -> bool:
    """
    The player hits ``agent`` for their full attack power.
    On a kill the player steps into the vacated cell; otherwise they stay put.
    Returns ``True`` if the agent died.
    """
    player = gs.player
    damage = player.attack
    gs.add_message(f"You attack the enemy for {damage} damage!", (255, 255, 255))
    agent.hp -= damage
    log.debug("Player attacked agent", pos=agent.position, damage=damage, hp=agent.hp)

    if agent.hp <= 0:
        cell = agent.position
        handle_agent_death(agent, gs)
        player.move_to(cell)
        return True

    gs.add_message(f"Enemy HP left: {agent.hp}", (255, 255, 255))
    return False


def agent_attack(gs: "GameState", bumped: bool = False) -> int:
    """An agent hits the player for a fresh roll from the tier's attack range."""
    damage = roll_range(gs.profile.enemy_attack, gs.rng_instance)
    gs.player.hp -= damage
    if bumped:
        gs.add_message(
            f"An enemy hits you for {damage} damage (bumped into you)!", (255, 0, 0)
        )
    else:
        gs.add_message(f"An enemy attacks you for {damage} damage!", (255, 0, 0))
    log.debug("Agent attacked player", damage=damage, player_hp=gs.player.hp)
    return damage
