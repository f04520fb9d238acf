# game/world/game_map.py
from typing import Final, List, NamedTuple, Tuple

import numpy as np
import structlog

log = structlog.get_logger(__name__)

TILE_ID_FLOOR: Final[int] = 0
TILE_ID_WALL: Final[int] = 1


class TileType(NamedTuple):
    walkable: bool
    glyph: str


TILE_TYPES: Final[dict[int, TileType]] = {
    TILE_ID_FLOOR: TileType(walkable=True, glyph="."),
    TILE_ID_WALL: TileType(walkable=False, glyph="#"),
}


class GameMap:
    def __init__(self, width: int, height: int):
        """
        Initializes a map of the given size with every tile set to wall.
        """
        if width <= 0 or height <= 0:
            log.error("Invalid map dimensions", width=width, height=height)
            raise ValueError("Map width and height must be positive integers.")
        self._width = width
        self._height = height
        self.tiles: np.ndarray = np.full(
            (height, width), fill_value=TILE_ID_WALL, dtype=np.uint8, order="C"
        )
        log.debug("GameMap initialized", shape=(height, width))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        """Checks if the given coordinates are within the map boundaries."""
        return 0 <= x < self._width and 0 <= y < self._height

    def is_walkable(self, x: int, y: int) -> bool:
        """Checks if the tile at (x, y) is walkable."""
        if not self.in_bounds(x, y):
            return False
        tile_type = TILE_TYPES.get(int(self.tiles[y, x]))
        return tile_type.walkable if tile_type else False

    def fill(self, tile_id: int) -> None:
        self.tiles[:, :] = tile_id

    def carve(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """Set the inclusive rectangle ``(x1, y1)-(x2, y2)`` to floor, clipped to the map."""
        x_start, x_end = max(0, min(x1, x2)), min(self._width, max(x1, x2) + 1)
        y_start, y_end = max(0, min(y1, y2)), min(self._height, max(y1, y2) + 1)
        if x_start < x_end and y_start < y_end:
            self.tiles[y_start:y_end, x_start:x_end] = TILE_ID_FLOOR

    def has_floor(self) -> bool:
        return bool(np.any(self.tiles == TILE_ID_FLOOR))

    def floor_positions(self) -> List[Tuple[int, int]]:
        """All floor cells as ``(x, y)`` in row-major order."""
        return [(int(x), int(y)) for y, x in np.argwhere(self.tiles == TILE_ID_FLOOR)]

    def glyph_rows(self) -> List[List[str]]:
        """Base terrain glyphs, one list per row, for the renderer to overlay."""
        return [
            [TILE_TYPES[int(tile_id)].glyph for tile_id in row] for row in self.tiles
        ]

    def create_test_room(self) -> None:
        """Open the whole interior, leaving a one-tile wall border."""
        self.fill(TILE_ID_WALL)
        self.carve(1, 1, self._width - 2, self._height - 2)
        log.info("Created test room", width=self._width, height=self._height)
