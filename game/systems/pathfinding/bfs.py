# game/systems/pathfinding/bfs.py
"""Single-step breadth-first pathfinding on the floor grid.

Agents only ever need the first step of a shortest route, so
:func:`next_step` returns one cell rather than a full path.
"""
from collections import deque
from typing import Collection, Dict, Final, Tuple

import structlog

from game.entities.components import Cell
from game.world.game_map import GameMap

log = structlog.get_logger(__name__)

# Neighbour expansion order: +x, -x, +y, -y
DIRECTIONS_4: Final[Tuple[Cell, ...]] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def next_step(
    game_map: GameMap,
    start: Cell,
    target: Cell,
    occupied: Collection[Cell] = (),
) -> Cell:
    """
    Return the first cell after ``start`` on a shortest 4-connected floor path
    to ``target``.

    Cells in ``occupied`` are impassable except ``target`` itself, so an agent
    can always step onto the player.  With no path, a greedy step along the
    longer axis (horizontal on ties) and then the other axis is tried; if
    neither is open the agent stays on ``start``.
    """
    if start == target:
        return start

    blocked_cells = set(occupied)
    blocked_cells.discard(target)

    def blocked(x: int, y: int) -> bool:
        return not game_map.is_walkable(x, y) or (x, y) in blocked_cells

    parent: Dict[Cell, Cell] = {start: start}
    queue = deque([start])
    found = False
    while queue:
        current = queue.popleft()
        if current == target:
            found = True
            break
        cx, cy = current
        for dx, dy in DIRECTIONS_4:
            neighbour = (cx + dx, cy + dy)
            if neighbour in parent or blocked(*neighbour):
                continue
            parent[neighbour] = current
            queue.append(neighbour)

    if found:
        step = target
        while parent[step] != start:
            step = parent[step]
        return step

    sx, sy = start
    tx, ty = target
    dx, dy = _sign(tx - sx), _sign(ty - sy)
    if abs(tx - sx) >= abs(ty - sy):
        candidates = ((sx + dx, sy), (sx, sy + dy))
    else:
        candidates = ((sx, sy + dy), (sx + dx, sy))
    for cell in candidates:
        if cell != start and not blocked(*cell):
            log.debug("No path found, taking greedy step", start=start, step=cell)
            return cell
    log.debug("No path found and greedy steps blocked", start=start, target=target)
    return start
