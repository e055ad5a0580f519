"""Events emitted by the core towards the rendering/input collaborator."""

from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True)
class EntityRemoved:
    """An entity left the store; UI resources bound to ``entity_id`` can be released."""

    entity_id: int


@dataclass(frozen=True)
class ParameterChanged:
    """A live parameter edit was applied to an entity."""

    entity_id: int
    name: str
    value: Any


Event = Union[EntityRemoved, ParameterChanged]
Listener = Callable[[Event], None]
