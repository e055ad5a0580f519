"""Base interface for the per-entity integrators of a sketch."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from phaselab.core.entities import SimulatedBody


@dataclass
class StepContext:
    """
    Everything an integrator may read while advancing one entity.

    Not every field applies to every sketch: the oscillator only needs the
    elapsed time, the landscape needs the height field, orbital sketches need
    the attractor or the whole body collection.
    """

    time: float = 0.0
    dt: float = 1.0
    time_step: float = 1.0
    bodies: List[SimulatedBody] = field(default_factory=list)
    attractor: Optional[SimulatedBody] = None
    height_field: Optional[Any] = None
    extra: Dict[str, Any] = field(default_factory=dict)


class Integrator(ABC):
    """
    Advances one entity by one logical tick.

    Implementations mutate the entity in place and append one sample to each
    of its trajectory buffers.
    """

    def initialize(self, **kwargs: Any) -> None:
        """Reset internal state (override for stateful integrators)."""

    @abstractmethod
    def step(self, entity: SimulatedBody, context: StepContext) -> None:
        """
        Execute one step for ``entity``.

        Args:
            entity: body to advance (mutated in place)
            context: time, neighbours and fields the law depends on
        """

    def state_dict(self) -> Dict[str, Any]:
        """Internal parameters, for inspection and debugging."""
        return {}
