"""Live entity collection of a sketch, with explicit add/remove/clear."""

import logging
from typing import Dict, Generic, Iterator, List, TypeVar

from phaselab.core.entities import SimulatedBody
from phaselab.core.signals import EntityRemoved, Event, Listener

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SimulatedBody)


class StateStore(Generic[T]):
    """
    Ordered collection of entities keyed by a stable integer id.

    Ids are never reused within a store, so a collaborator can join its own
    records (sliders, labels) to entities safely across clears.
    """

    def __init__(self) -> None:
        self._entities: Dict[int, T] = {}
        self._next_id = 0
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        """Register a callback receiving EntityRemoved / ParameterChanged events."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def emit(self, event: Event) -> None:
        for listener in list(self._listeners):
            listener(event)

    def add(self, entity: T) -> int:
        """Append ``entity`` and return its assigned id."""
        entity.id = self._next_id
        self._next_id += 1
        self._entities[entity.id] = entity
        logger.debug("Added %s #%d", type(entity).__name__, entity.id)
        return entity.id

    def get(self, entity_id: int) -> T:
        if entity_id not in self._entities:
            raise KeyError(f"No entity with id {entity_id}")
        return self._entities[entity_id]

    def remove(self, entity_id: int) -> T:
        """Remove one entity and notify listeners."""
        entity = self.get(entity_id)
        del self._entities[entity_id]
        self.emit(EntityRemoved(entity_id))
        logger.debug("Removed %s #%d", type(entity).__name__, entity_id)
        return entity

    def clear(self) -> List[T]:
        """Discard every entity; returns the removed ones in insertion order."""
        removed = list(self._entities.values())
        self._entities.clear()
        for entity in removed:
            self.emit(EntityRemoved(entity.id))
        if removed:
            logger.info("Cleared %d entities", len(removed))
        return removed

    @property
    def entities(self) -> List[T]:
        return list(self._entities.values())

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._entities.values()))

    def __len__(self) -> int:
        return len(self._entities)
