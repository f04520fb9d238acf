"""Agent phase of a turn.

Planning and resolution are split so that every agent plans against the same
pre-move snapshot.  Resolution then walks agents in registry order, keeping a
set of cells already claimed this turn; earlier agents win contested cells.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Set, Tuple

import structlog

from game.entities.components import Agent, Cell
from game.systems.combat_system import agent_attack
from game.systems.pathfinding.bfs import next_step

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from game.game_state import GameState

log = structlog.get_logger(__name__)

AgentPlan = List[Tuple[Agent, Cell]]


def plan_agent_moves(game_state: "GameState") -> AgentPlan:
    """Intended destination for every live agent, in registry order."""
    target = game_state.player_position
    # Nothing moves until every plan is made, so the registry is the snapshot.
    plan: AgentPlan = []
    for agent in game_state.agents:
        others = game_state.agents.positions(exclude=agent)
        step = next_step(game_state.game_map, agent.position, target, others)
        plan.append((agent, step))
    log.debug("Agent moves planned", count=len(plan), target=target)
    return plan


def resolve_agent_moves(game_state: "GameState", plan: AgentPlan) -> None:
    """Apply planned moves and attacks; each agent hits at most once per turn."""
    game_map = game_state.game_map
    player_cell = game_state.player_position
    reserved: Set[Cell] = set()
    attacked: Set[int] = set()

    for agent, intended in plan:
        if agent not in game_state.agents:
            continue
        origin = agent.position
        if intended == player_cell:
            agent_attack(game_state)
            attacked.add(id(agent))
            reserved.add(origin)
            continue

        if game_map.is_walkable(*intended) and intended not in reserved:
            agent.move_to(intended)
            reserved.add(intended)
        else:
            reserved.add(origin)
            log.debug("Agent move blocked", origin=origin, intended=intended)

    # An agent left standing on the player's cell without having attacked
    # still gets its hit in.
    for agent in game_state.agents:
        if agent.position == player_cell and id(agent) not in attacked:
            agent_attack(game_state, bumped=True)
