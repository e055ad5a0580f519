"""Sketch orchestrator: frame loop over the entity store and snapshot building."""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from phaselab.config import SketchConfig
from phaselab.core.component import Integrator, StepContext
from phaselab.core.entities import Ball, Color, SimulatedBody
from phaselab.core.signals import Listener
from phaselab.core.store import StateStore
from phaselab.mapping.mapper import PhaseSpaceMapper, PlotViewport

logger = logging.getLogger(__name__)


@dataclass
class BodySnapshot:
    """Drawable view of one entity after a frame."""

    id: int
    kind: str
    position: np.ndarray
    velocity: np.ndarray
    size: float
    color: Color
    trajectory: np.ndarray
    phase_samples: np.ndarray
    phase_plot: np.ndarray
    phase_point: Optional[Tuple[float, float]] = None
    fixed: bool = False
    stuck: bool = False


@dataclass
class RunSnapshot:
    """Population statistics of one three-body run, raw and mapped."""

    color: Color
    samples: np.ndarray
    plot: np.ndarray
    active: bool = False


@dataclass
class FrameSnapshot:
    """Everything a renderer needs to draw one frame."""

    time: float
    frame: int
    bodies: List[BodySnapshot]
    runs: List[RunSnapshot] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)


class Sketch(ABC):
    """
    One simulation core.

    Handles the frame loop: integrator over every entity -> trajectory
    buffers -> phase-space mapping -> snapshot. Public operations run under a
    re-entrant lock so input callbacks and frame ticks from different threads
    never interleave.
    """

    #: logical time advanced by one tick when ``tick()`` gets no dt
    default_dt: float = 1.0

    def __init__(
        self,
        integrator: Integrator,
        mapper: PhaseSpaceMapper,
        config: SketchConfig,
    ) -> None:
        """
        Args:
            integrator: step law applied to every entity
            mapper: phase-space projection for the snapshot
            config: sketch configuration (validated here)
        """
        config.validate()
        self.config = config
        self.integrator = integrator
        self.mapper = mapper
        self.store: StateStore = StateStore()
        self.rng = np.random.default_rng(config.seed)
        self.lock = threading.RLock()
        self._time = 0.0
        self._frame = 0
        self.integrator.initialize()

    # ---- input side -------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        """Receive EntityRemoved / ParameterChanged events."""
        self.store.subscribe(listener)

    def _add(self, entity: SimulatedBody) -> int:
        with self.lock:
            return self.store.add(entity)

    def clear_all(self) -> None:
        """Discard every entity."""
        with self.lock:
            self.store.clear()
            self._on_clear()

    def set_viewport(self, viewport: PlotViewport) -> None:
        """Output rectangle of the phase plot (e.g. ``PlotViewport.screen(w, h)``)."""
        with self.lock:
            self.mapper.viewport = viewport

    # ---- frame loop -------------------------------------------------------

    @property
    def substeps(self) -> int:
        return 1

    def tick(self, dt: Optional[float] = None) -> FrameSnapshot:
        """
        Advance the simulation by one frame and return what to draw.

        Args:
            dt: logical time per step (default: ``default_dt``)
        """
        step_dt = self.default_dt if dt is None else float(dt)
        if step_dt < 0:
            raise ValueError(f"dt must be >= 0, got {step_dt}")
        with self.lock:
            for _ in range(self.substeps):
                self._advance(step_dt)
            self._frame += 1
            return self._build_snapshot()

    def _advance(self, dt: float) -> None:
        entities = self.store.entities
        context = self._make_context(time=self._time + dt, dt=dt, bodies=entities)
        for entity in entities:
            self.integrator.step(entity, context)
        self._time = context.time
        self._after_step(context)

    def _make_context(self, time: float, dt: float, bodies: List[SimulatedBody]) -> StepContext:
        return StepContext(time=time, dt=dt, bodies=bodies)

    def _after_step(self, context: StepContext) -> None:
        """Hook run once per step after every entity moved."""

    def _on_clear(self) -> None:
        """Hook run after clear_all()."""

    # ---- output side ------------------------------------------------------

    def snapshot(self) -> FrameSnapshot:
        """Current state without advancing."""
        with self.lock:
            return self._build_snapshot()

    def _build_snapshot(self) -> FrameSnapshot:
        return FrameSnapshot(
            time=self._time,
            frame=self._frame,
            bodies=[self._body_snapshot(e) for e in self.store],
            runs=self._run_snapshots(),
            extra=self._snapshot_extra(),
        )

    def _body_snapshot(self, entity: SimulatedBody) -> BodySnapshot:
        samples = entity.phase_trajectory.to_numpy()
        plot = self.mapper.map_samples(samples)
        return BodySnapshot(
            id=entity.id,
            kind=type(entity).__name__,
            position=entity.position.copy(),
            velocity=entity.velocity.copy(),
            size=entity.size,
            color=entity.color,
            trajectory=entity.trajectory.to_numpy(),
            phase_samples=samples,
            phase_plot=plot,
            phase_point=(float(plot[-1, 0]), float(plot[-1, 1])) if len(plot) else None,
            fixed=entity.fixed,
            stuck=entity.stuck if isinstance(entity, Ball) else False,
        )

    def _run_snapshots(self) -> List[RunSnapshot]:
        return []

    def _snapshot_extra(self) -> Dict[str, Any]:
        return {}

    @property
    def time(self) -> float:
        """Current logical time."""
        return self._time

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def entities(self) -> List[SimulatedBody]:
        return self.store.entities

    @abstractmethod
    def add_entity(self, **params: Any) -> int:
        """Create one entity from user or random parameters; returns its id."""

    def state_dict(self) -> Dict[str, Any]:
        """Summary of the sketch for inspection."""
        return {
            "time": self._time,
            "frame": self._frame,
            "entities": len(self.store),
            "integrator": self.integrator.state_dict(),
            "config": self.config.to_dict(),
        }
