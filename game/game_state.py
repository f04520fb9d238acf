# game/game_state.py
from typing import List, Sequence, Tuple

import structlog

from game_rng import GameRNG
from game.constants import (
    HP_CEILING,
    MAP_HEIGHT,
    MAP_WIDTH,
    PLAYER_ATTACK,
    PLAYER_MAX_HP,
    Difficulty,
)
from game.difficulty import DIFFICULTY_PROFILES, DifficultyProfile
from game.entities.components import Agent, Cell, Pickup, Player
from game.entities.registry import EntityRegistry
from game.systems.ai_system import plan_agent_moves, resolve_agent_moves
from game.world.game_map import GameMap
from game.world.placement import place_entities
from game.world.procgen import (
    ROOM_COUNT_RANGE,
    ROOM_HEIGHT_RANGE,
    ROOM_WIDTH_RANGE,
    Rect,
    generate_dungeon,
)

log = structlog.get_logger(__name__)

Color = Tuple[int, int, int]


class GameState:
    """Central container for mutable session data.

    Owns the map, the live agents and pickups, the player, the active
    difficulty profile and the session's :class:`GameRNG`.  Only the run loop
    mutates it, one turn at a time.
    """

    def __init__(
        self,
        existing_map: GameMap,
        player: Player,
        profile: DifficultyProfile,
        rng: GameRNG,
        agents: Sequence[Agent] = (),
        pickups: Sequence[Pickup] = (),
        rooms: Sequence[Rect] = (),
        high_score: int = 0,
    ):
        if not isinstance(existing_map, GameMap):
            raise TypeError("GameState requires a valid GameMap instance.")
        if not existing_map.in_bounds(player.x, player.y):
            raise ValueError("Player start position lies outside the map.")

        self.game_map: GameMap = existing_map
        self.rooms: List[Rect] = list(rooms)
        self.player: Player = player
        self.profile: DifficultyProfile = profile
        self.rng_instance: GameRNG = rng
        self.agents: EntityRegistry[Agent] = EntityRegistry("agent", list(agents))
        self.pickups: EntityRegistry[Pickup] = EntityRegistry("pickup", list(pickups))
        self.high_score: int = high_score
        self.message_log: list[tuple[str, Color]] = []

        log.info(
            "Game state initialized",
            map_size=f"{existing_map.width}x{existing_map.height}",
            difficulty=profile.name,
            agents=len(self.agents),
            pickups=len(self.pickups),
            rng_seed=rng.initial_seed,
        )

    @property
    def player_position(self) -> Cell:
        return self.player.position

    @property
    def turn_count(self) -> int:
        return self.player.turns

    @property
    def score(self) -> int:
        return self.player.score

    @property
    def is_player_dead(self) -> bool:
        return self.player.is_dead

    def add_message(self, text: str, color: Color = (255, 255, 255)) -> None:
        """Adds a message to the game log."""
        self.message_log.append((text, color))
        log.debug("Message added", message=text)

    def drain_messages(self) -> list[tuple[str, Color]]:
        """Return and clear the messages produced since the last drain."""
        messages, self.message_log = self.message_log, []
        return messages

    def advance_turn(self) -> None:
        """Count the player's turn and let every live agent act."""
        self.player.turns += 1
        log.debug("Turn advanced", turn=self.player.turns)

        plan = plan_agent_moves(self)
        resolve_agent_moves(self, plan)

        if self.player.hp > HP_CEILING:
            log.warning("Player HP exceeded ceiling, clamping", hp=self.player.hp)
            self.player.hp = HP_CEILING


def new_game(
    difficulty: Difficulty = Difficulty.NORMAL,
    seed: int | None = None,
    profiles: dict[Difficulty, DifficultyProfile] | None = None,
    map_width: int = MAP_WIDTH,
    map_height: int = MAP_HEIGHT,
    room_count_range: Tuple[int, int] = ROOM_COUNT_RANGE,
    room_width_range: Tuple[int, int] = ROOM_WIDTH_RANGE,
    room_height_range: Tuple[int, int] = ROOM_HEIGHT_RANGE,
    player_max_hp: int = PLAYER_MAX_HP,
    player_attack: int = PLAYER_ATTACK,
    high_score: int = 0,
) -> GameState:
    """Generate a dungeon, populate it and wrap everything in a GameState."""
    profile = (profiles or DIFFICULTY_PROFILES)[difficulty]
    rng = GameRNG(seed=seed)
    game_map = GameMap(width=map_width, height=map_height)
    rooms = generate_dungeon(
        game_map,
        rng,
        room_count_range=room_count_range,
        room_width_range=room_width_range,
        room_height_range=room_height_range,
    )
    placement = place_entities(
        game_map,
        rooms,
        profile,
        rng,
        player_max_hp=player_max_hp,
        player_attack=player_attack,
    )
    return GameState(
        existing_map=game_map,
        player=placement.player,
        profile=profile,
        rng=rng,
        agents=placement.agents,
        pickups=placement.pickups,
        rooms=rooms,
        high_score=high_score,
    )
