# game/entities/registry.py
from typing import Generic, Iterator, List, Protocol, Self, Set, TypeVar

import structlog

from game.entities.components import Cell

log = structlog.get_logger(__name__)


class Positioned(Protocol):
    @property
    def position(self) -> Cell: ...


E = TypeVar("E", bound=Positioned)


class EntityRegistry(Generic[E]):
    """
    Ordered collection of live entities of one kind.

    Iteration order is insertion order and is stable across removals; the
    agent phase of a turn relies on it to decide who wins a contested cell.
    Removing an entity deletes it outright, so callers never see dead records.
    """

    def __init__(self: Self, kind: str, entities: List[E] | None = None):
        self.kind = kind
        self._entities: List[E] = list(entities or [])
        log.debug("EntityRegistry initialized", kind=kind, count=len(self._entities))

    def __iter__(self: Self) -> Iterator[E]:
        return iter(list(self._entities))

    def __len__(self: Self) -> int:
        return len(self._entities)

    def __contains__(self: Self, entity: object) -> bool:
        return any(e is entity for e in self._entities)

    def get_at(self: Self, x: int, y: int) -> E | None:
        """First live entity standing on ``(x, y)``, if any."""
        for entity in self._entities:
            if entity.position == (x, y):
                return entity
        return None

    def positions(self: Self, exclude: E | None = None) -> Set[Cell]:
        return {e.position for e in self._entities if e is not exclude}

    def remove(self: Self, entity: E) -> bool:
        for index, existing in enumerate(self._entities):
            if existing is entity:
                del self._entities[index]
                log.debug("Entity removed", kind=self.kind, pos=entity.position)
                return True
        log.debug("Entity already removed or unknown", kind=self.kind)
        return False
