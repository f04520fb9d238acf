# tinyrl/game/world/procgen.py
from typing import List, NamedTuple, Tuple

import structlog

try:
    from game_rng import GameRNG
except ImportError as e:
    structlog.get_logger().error("CRITICAL: GameRNG class not found.", error=str(e))
    raise

try:
    from game.world.game_map import TILE_ID_WALL, GameMap
except ImportError as e:
    structlog.get_logger().error(
        "CRITICAL: GameMap class or TILE_ID_WALL not found.", error=str(e)
    )
    raise


log = structlog.get_logger(__name__)

# --- Configuration ---
ROOM_COUNT_RANGE: Tuple[int, int] = (3, 6)
ROOM_WIDTH_RANGE: Tuple[int, int] = (3, 8)
ROOM_HEIGHT_RANGE: Tuple[int, int] = (3, 5)
# Retries allowed for a single room slot before generation gives up on it
MAX_ROOM_ATTEMPTS = 200


class Rect(NamedTuple):
    """An axis-aligned room rectangle: top-left corner plus size."""
    x: int
    y: int
    w: int
    h: int

    @property
    def x2(self) -> int:
        return self.x + self.w - 1

    @property
    def y2(self) -> int:
        return self.y + self.h - 1

    @property
    def center(self) -> Tuple[int, int]:
        return self.x + self.w // 2, self.y + self.h // 2

    def intersects(self, other: "Rect") -> bool:
        """True if the rectangles share at least one cell. Touching edges do not count."""
        return not (
            self.x + self.w <= other.x
            or other.x + other.w <= self.x
            or self.y + self.h <= other.y
            or other.y + other.h <= self.y
        )

    def carve(self, game_map: GameMap) -> None:
        if not isinstance(game_map, GameMap):
            log.error("Carve called with invalid GameMap object")
            return
        game_map.carve(self.x, self.y, self.x2, self.y2)
        log.debug("Carved room", rect=self)


def _carve_tunnel(
    start: Tuple[int, int],
    end: Tuple[int, int],
    game_map: GameMap,
    rng: GameRNG,
) -> None:
    """
    Carves an L-shaped corridor between two room centers.
    Orientation is a coin flip: 0 runs horizontal along the start row first,
    1 runs vertical along the start column first.
    """
    x1, y1 = start
    x2, y2 = end
    if rng.coin_flip() == 0:
        game_map.carve(x1, y1, x2, y1)
        game_map.carve(x2, y1, x2, y2)
        orientation = "horizontal_first"
    else:
        game_map.carve(x1, y1, x1, y2)
        game_map.carve(x1, y2, x2, y2)
        orientation = "vertical_first"
    log.debug("Carved tunnel", start=start, end=end, orientation=orientation)


def _sample_room(
    game_map: GameMap,
    rng: GameRNG,
    width_range: Tuple[int, int],
    height_range: Tuple[int, int],
) -> Rect:
    # Sizes are capped so a room always fits inside the one-tile border.
    w = min(rng.get_int(*width_range), game_map.width - 2)
    h = min(rng.get_int(*height_range), game_map.height - 2)
    x = rng.get_int(1, game_map.width - w - 1)
    y = rng.get_int(1, game_map.height - h - 1)
    return Rect(x, y, w, h)


def generate_dungeon(
    game_map: GameMap,
    rng: GameRNG,
    room_count_range: Tuple[int, int] = ROOM_COUNT_RANGE,
    room_width_range: Tuple[int, int] = ROOM_WIDTH_RANGE,
    room_height_range: Tuple[int, int] = ROOM_HEIGHT_RANGE,
) -> List[Rect]:
    """
    Fill ``game_map`` with a rooms-and-corridors layout and return the accepted
    rooms in acceptance order.

    Each accepted room is joined to the previously accepted one by an L-shaped
    corridor between their centers.  The map is fully determined by the RNG
    stream.
    """
    if not isinstance(game_map, GameMap):
        log.error("Generate dungeon called with invalid GameMap object")
        raise TypeError("Invalid GameMap object passed to generate_dungeon")
    if game_map.width < 3 or game_map.height < 3:
        raise ValueError("Map must be at least 3x3 to leave room for a border.")

    game_map.fill(TILE_ID_WALL)
    rooms: List[Rect] = []
    room_count = rng.get_int(*room_count_range)
    log.info(
        "Starting dungeon generation",
        width=game_map.width,
        height=game_map.height,
        target_rooms=room_count,
    )

    for slot in range(room_count):
        for attempt in range(MAX_ROOM_ATTEMPTS):
            candidate = _sample_room(game_map, rng, room_width_range, room_height_range)
            if not any(candidate.intersects(other) for other in rooms):
                break
        else:
            log.warning(
                "Room placement exhausted, keeping rooms placed so far",
                slot=slot,
                attempts=MAX_ROOM_ATTEMPTS,
                placed=len(rooms),
            )
            break

        candidate.carve(game_map)
        if rooms:
            _carve_tunnel(rooms[-1].center, candidate.center, game_map, rng)
        rooms.append(candidate)
        log.debug("Accepted room", slot=slot, rect=candidate, attempts=attempt + 1)

    if not game_map.has_floor():
        log.warning("Generation produced no floor, opening the interior")
        game_map.create_test_room()

    log.info("Dungeon generation complete", rooms=len(rooms))
    return rooms
