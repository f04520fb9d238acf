from collections import deque

import numpy as np
import pytest

from game_rng import GameRNG
from game.world import procgen
from game.world.game_map import TILE_ID_FLOOR, TILE_ID_WALL, GameMap
from game.world.procgen import Rect, generate_dungeon


def _reachable(game_map, start):
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nxt = (x + dx, y + dy)
            if nxt not in seen and game_map.is_walkable(*nxt):
                seen.add(nxt)
                queue.append(nxt)
    return seen


def test_rect_touching_edges_do_not_intersect():
    a = Rect(1, 1, 3, 3)
    assert not a.intersects(Rect(4, 1, 3, 3))
    assert not a.intersects(Rect(1, 4, 3, 3))
    assert a.intersects(Rect(3, 3, 3, 3))
    assert a.intersects(a)


def test_rect_center_and_corners():
    r = Rect(2, 3, 5, 4)
    assert r.center == (4, 5)
    assert (r.x2, r.y2) == (6, 6)


@pytest.mark.parametrize("seed", range(40))
def test_generated_layout_invariants(seed):
    gm = GameMap(20, 10)
    rooms = generate_dungeon(gm, GameRNG(seed=seed))

    assert gm.has_floor()
    assert 1 <= len(rooms) <= 6
    for i, room in enumerate(rooms):
        assert room.x >= 1 and room.y >= 1
        assert room.x2 <= gm.width - 2 and room.y2 <= gm.height - 2
        assert 3 <= room.w <= 8 and 3 <= room.h <= 5
        assert np.all(gm.tiles[room.y : room.y2 + 1, room.x : room.x2 + 1] == TILE_ID_FLOOR)
        for other in rooms[i + 1 :]:
            assert not room.intersects(other)

    # Border stays solid.
    assert np.all(gm.tiles[0, :] == TILE_ID_WALL)
    assert np.all(gm.tiles[-1, :] == TILE_ID_WALL)
    assert np.all(gm.tiles[:, 0] == TILE_ID_WALL)
    assert np.all(gm.tiles[:, -1] == TILE_ID_WALL)


@pytest.mark.parametrize("seed", range(20))
def test_all_rooms_are_connected(seed):
    gm = GameMap(20, 10)
    rooms = generate_dungeon(gm, GameRNG(seed=seed))
    reachable = _reachable(gm, rooms[0].center)
    for room in rooms:
        assert room.center in reachable
    assert reachable == set(gm.floor_positions())


def test_generation_is_deterministic():
    gm_a, gm_b = GameMap(20, 10), GameMap(20, 10)
    rooms_a = generate_dungeon(gm_a, GameRNG(seed=99))
    rooms_b = generate_dungeon(gm_b, GameRNG(seed=99))
    assert rooms_a == rooms_b
    assert np.array_equal(gm_a.tiles, gm_b.tiles)


def test_regeneration_resets_map():
    gm = GameMap(20, 10)
    generate_dungeon(gm, GameRNG(seed=1))
    rooms = generate_dungeon(gm, GameRNG(seed=2))
    fresh = GameMap(20, 10)
    generate_dungeon(fresh, GameRNG(seed=2))
    assert np.array_equal(gm.tiles, fresh.tiles)
    assert rooms


def test_no_rooms_falls_back_to_open_interior():
    gm = GameMap(20, 10)
    rooms = generate_dungeon(gm, GameRNG(seed=5), room_count_range=(0, 0))
    assert rooms == []
    assert np.all(gm.tiles[1:-1, 1:-1] == TILE_ID_FLOOR)
    assert np.all(gm.tiles[0, :] == TILE_ID_WALL)


def test_room_placement_gives_up_when_map_is_full(monkeypatch):
    monkeypatch.setattr(procgen, "MAX_ROOM_ATTEMPTS", 5)
    gm = GameMap(5, 5)
    rooms = generate_dungeon(
        gm,
        GameRNG(seed=0),
        room_count_range=(3, 3),
        room_width_range=(3, 3),
        room_height_range=(3, 3),
    )
    assert rooms == [Rect(1, 1, 3, 3)]


def test_generate_rejects_bad_map():
    with pytest.raises(TypeError):
        generate_dungeon("not a map", GameRNG(seed=0))
    with pytest.raises(ValueError):
        generate_dungeon(GameMap(2, 2), GameRNG(seed=0))
