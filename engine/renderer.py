# engine/renderer.py
"""
Renders the game state as plain text for a terminal.

Entities are overlaid on the terrain glyphs in a fixed order (pickups, then
agents, then the player) so the player is always visible.
"""
from dataclasses import dataclass
from typing import List

import structlog

from game.game_state import GameState

log = structlog.get_logger(__name__)

GLYPH_PLAYER = "@"
GLYPH_AGENT = "E"
GLYPH_PICKUP = "!"


@dataclass(frozen=True)
class RenderConfig:
    title: str = "=== Tiny Roguelike ==="
    high_score_file: str = "highscore.txt"
    show_header: bool = True


def render_header(config: RenderConfig) -> List[str]:
    return [
        config.title,
        "Controls: w=up a=left s=down d=right    q=quit",
        "Objective: survive, kill enemies (score +10 per kill), pick potions '!' to heal.",
        f"High score saved in {config.high_score_file}",
        "",
    ]


def status_line(gs: GameState) -> str:
    player = gs.player
    return (
        f"Diff: {gs.profile.name}    HP: {player.hp}/{player.max_hp}"
        f"    Score: {player.score}    Turns: {player.turns}    High: {gs.high_score}"
    )


def render_grid(gs: GameState) -> List[str]:
    rows = gs.game_map.glyph_rows()
    for pickup in gs.pickups:
        rows[pickup.y][pickup.x] = GLYPH_PICKUP
    for agent in gs.agents:
        rows[agent.y][agent.x] = GLYPH_AGENT
    px, py = gs.player_position
    if gs.game_map.in_bounds(px, py):
        rows[py][px] = GLYPH_PLAYER
    else:
        log.warning("Player outside map while rendering", pos=(px, py))
    return ["".join(row) for row in rows]


def render_frame(gs: GameState, config: RenderConfig | None = None) -> str:
    """Full frame: header, status line and the overlaid grid."""
    config = config or RenderConfig()
    lines: List[str] = []
    if config.show_header:
        lines.extend(render_header(config))
    lines.append(status_line(gs))
    lines.append("")
    lines.extend(render_grid(gs))
    lines.append("")
    return "\n".join(lines) + "\n"
