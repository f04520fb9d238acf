"""Initial placement of the player, hostile agents and pickups.

Every entity lands on a distinct floor cell.  Random draws are retried a
bounded number of times; after that the candidate pool widens to every
still-free floor cell, and when none is left the remaining entities of that
kind are dropped so a cramped map never stalls generation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Set

import structlog

from game.constants import PLAYER_ATTACK, PLAYER_MAX_HP
from game.difficulty import DifficultyProfile
from game.entities.components import Agent, Cell, Pickup, Player
from game.world.game_map import GameMap
from game.world.procgen import Rect
from game_rng import GameRNG
from utils.helpers import roll_range

log = structlog.get_logger(__name__)

MAX_PLACEMENT_ATTEMPTS = 100


@dataclass
class Placement:
    player: Player
    agents: List[Agent] = field(default_factory=list)
    pickups: List[Pickup] = field(default_factory=list)


def random_floor_tile(game_map: GameMap, rng: GameRNG) -> Cell:
    """Uniform floor cell; ``(1, 1)`` if the map has no floor at all."""
    floors = game_map.floor_positions()
    if not floors:
        log.warning("No floor tiles available, defaulting to (1, 1)")
        return 1, 1
    return floors[rng.get_int(0, len(floors) - 1)]


def _find_free_cell(game_map: GameMap, rng: GameRNG, taken: Set[Cell]) -> Cell | None:
    for _ in range(MAX_PLACEMENT_ATTEMPTS):
        cell = random_floor_tile(game_map, rng)
        if cell not in taken:
            return cell

    free = [cell for cell in game_map.floor_positions() if cell not in taken]
    log.debug(
        "Random placement exhausted, widening to free cells",
        attempts=MAX_PLACEMENT_ATTEMPTS,
        free=len(free),
    )
    if not free:
        return None
    return rng.choice(free)


def place_entities(
    game_map: GameMap,
    rooms: Sequence[Rect],
    profile: DifficultyProfile,
    rng: GameRNG,
    player_max_hp: int = PLAYER_MAX_HP,
    player_attack: int = PLAYER_ATTACK,
) -> Placement:
    """Spawn the player, agents and pickups for a freshly generated map."""
    if rooms:
        player_pos = rooms[0].center
    else:
        player_pos = random_floor_tile(game_map, rng)
    player = Player(
        x=player_pos[0],
        y=player_pos[1],
        hp=player_max_hp,
        max_hp=player_max_hp,
        attack=player_attack,
    )
    placement = Placement(player=player)
    taken: Set[Cell] = {player_pos}

    agent_target = roll_range(profile.enemy_count, rng)
    for _ in range(agent_target):
        cell = _find_free_cell(game_map, rng, taken)
        if cell is None:
            break
        taken.add(cell)
        placement.agents.append(
            Agent(x=cell[0], y=cell[1], hp=roll_range(profile.enemy_hp, rng))
        )
    if len(placement.agents) < agent_target:
        log.warning(
            "Not enough floor for all agents",
            requested=agent_target,
            placed=len(placement.agents),
        )

    pickup_target = roll_range(profile.pickup_count, rng)
    for _ in range(pickup_target):
        cell = _find_free_cell(game_map, rng, taken)
        if cell is None:
            break
        taken.add(cell)
        placement.pickups.append(Pickup(x=cell[0], y=cell[1]))
    if len(placement.pickups) < pickup_target:
        log.warning(
            "Not enough floor for all pickups",
            requested=pickup_target,
            placed=len(placement.pickups),
        )

    log.info(
        "Entities placed",
        player=player_pos,
        agents=len(placement.agents),
        pickups=len(placement.pickups),
        difficulty=profile.name,
    )
    return placement
