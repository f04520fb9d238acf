from game.systems.pathfinding.bfs import next_step
from game.world.game_map import GameMap


def _open_map(width=10, height=10):
    gm = GameMap(width, height)
    gm.create_test_room()
    return gm


def _corridor(length=10, row=2):
    gm = GameMap(length, 5)
    gm.carve(1, row, length - 2, row)
    return gm


def _manhattan(a, b):
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def test_step_moves_strictly_closer_on_open_grid():
    gm = _open_map()
    start, target = (1, 1), (7, 5)
    step = next_step(gm, start, target)
    assert _manhattan(step, start) == 1
    assert _manhattan(step, target) == _manhattan(start, target) - 1


def test_start_equal_to_target_stays():
    gm = _open_map()
    assert next_step(gm, (3, 3), (3, 3)) == (3, 3)


def test_tie_prefers_horizontal_expansion():
    gm = _open_map()
    assert next_step(gm, (2, 2), (3, 3)) == (3, 2)


def test_route_goes_around_a_wall():
    gm = _open_map(7, 5)
    # Wall column at x=3 with a gap on row 3
    gm.tiles[1:3, 3] = 1
    step = next_step(gm, (2, 1), (4, 1))
    assert step == (2, 2)


def test_occupied_target_is_still_reachable():
    gm = _corridor()
    assert next_step(gm, (3, 2), (4, 2), occupied={(4, 2)}) == (4, 2)


def test_occupied_cells_block_the_route():
    gm = _corridor()
    # No path past (3, 2); greedy step toward the target is the only option.
    assert next_step(gm, (5, 2), (1, 2), occupied={(3, 2)}) == (4, 2)


def test_fully_enclosed_agent_stays():
    gm = GameMap(7, 7)
    gm.carve(1, 1, 1, 1)
    gm.carve(4, 4, 5, 5)
    assert next_step(gm, (1, 1), (5, 5)) == (1, 1)


def test_greedy_step_skips_blocked_longer_axis():
    gm = GameMap(7, 7)
    gm.carve(2, 2, 2, 3)  # open only below the start
    gm.carve(5, 5, 5, 5)
    step = next_step(gm, (2, 2), (5, 4))
    assert step == (2, 3)
