"""Utility functions for handling agent death.

A dead agent is removed from the registry at once and the player is awarded
the kill bonus.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from game.constants import KILL_SCORE
from game.entities.components import Agent

if TYPE_CHECKING:
    from game.game_state import GameState

log = structlog.get_logger(__name__)


def handle_agent_death(agent: Agent, gs: GameState) -> None:
    """Handles death cleanup for ``agent``.

    Parameters
    ----------
    agent:
        The agent that died.
    gs:
        The active :class:`~game.game_state.GameState` instance.
    """
    pos = agent.position
    if not gs.agents.remove(agent):
        log.warning("Dead agent was not in the registry", pos=pos)
        return

    gs.player.score += KILL_SCORE
    gs.add_message(f"Enemy defeated! +{KILL_SCORE} score.", (255, 100, 100))
    log.info("Agent died", pos=pos, score=gs.player.score)
