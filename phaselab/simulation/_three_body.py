"""
Three-body chaos: random batches of mutually attracting bodies.

The phase plot shows population statistics rather than single bodies: mean
pairwise separation (x) against mean speed (y), one sample per sub-step.
Restarting a batch archives the current run so earlier runs stay visible next
to the active one.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from phaselab.config import ThreeBodyConfig
from phaselab.core.component import StepContext
from phaselab.core.entities import Color, SimulatedBody, random_color
from phaselab.core.history import TrajectoryBuffer
from phaselab.core.system import RunSnapshot, Sketch
from phaselab.mapping import PhaseSpaceMapper, StaticRange
from phaselab.physics.library import NBodyGravityIntegrator

logger = logging.getLogger(__name__)


def pairwise_separations(positions: np.ndarray) -> np.ndarray:
    """Distances for every unordered pair i < j (N*(N-1)/2 values)."""
    pos = np.asarray(positions, dtype=float).reshape(-1, 2)
    i, j = np.triu_indices(len(pos), k=1)
    return np.linalg.norm(pos[j] - pos[i], axis=1)


def population_statistics(bodies: Sequence[SimulatedBody]) -> Tuple[float, float]:
    """(mean pairwise separation, mean speed); both are >= 0."""
    if len(bodies) < 2:
        raise ValueError("population statistics need at least 2 bodies")
    positions = np.array([b.position for b in bodies])
    speeds = np.array([b.speed for b in bodies])
    return float(pairwise_separations(positions).mean()), float(speeds.mean())


@dataclass
class PhaseRun:
    """Statistics of one batch: (mean separation, mean speed) samples and a colour."""

    color: Color
    capacity: int = 500
    samples: TrajectoryBuffer = field(init=False)

    def __post_init__(self) -> None:
        self.samples = TrajectoryBuffer(self.capacity)

    def push(self, mean_separation: float, mean_speed: float) -> None:
        self.samples.push((mean_separation, mean_speed))

    def __len__(self) -> int:
        return len(self.samples)


class ThreeBodySketch(Sketch):
    """
    Batches of N (default 3) bodies under clamped mutual gravity.

    Each tick runs ``substeps`` updates; every update scales velocity and
    position increments by the time step (``tick(dt)`` or config
    ``time_step``). Statistics are sampled after all bodies moved.
    """

    def __init__(self, config: Optional[ThreeBodyConfig] = None) -> None:
        config = config or ThreeBodyConfig()
        config.validate()
        mapper = PhaseSpaceMapper(
            StaticRange(0.0, config.phase_distance_max),
            StaticRange(0.0, config.phase_speed_max),
        )
        integrator = NBodyGravityIntegrator(config.G, tuple(config.distance_clamp))
        super().__init__(integrator, mapper, config)
        self.default_dt = config.time_step
        self._substeps = config.substeps
        self.current_run: Optional[PhaseRun] = None
        self.history: List[PhaseRun] = []

    @property
    def substeps(self) -> int:
        return self._substeps

    def set_substeps(self, substeps: int) -> None:
        if substeps < 1:
            raise ValueError("substeps must be >= 1")
        with self.lock:
            self._substeps = int(substeps)

    def set_time_step(self, time_step: float) -> None:
        if time_step <= 0:
            raise ValueError("time_step must be positive")
        with self.lock:
            self.default_dt = float(time_step)

    def add_body(
        self,
        position: Sequence[float],
        velocity: Sequence[float] = (0.0, 0.0),
        mass: float = 10.0,
        size: Optional[float] = None,
        color: Optional[Color] = None,
    ) -> int:
        """Add one body to the current batch; size defaults to the mass."""
        cfg: ThreeBodyConfig = self.config
        with self.lock:
            body = SimulatedBody(
                position=position,
                velocity=velocity,
                mass=mass,
                size=mass if size is None else size,
                color=color if color is not None else random_color(self.rng),
                trajectory=TrajectoryBuffer(cfg.trajectory_capacity),
                phase_trajectory=TrajectoryBuffer(cfg.trajectory_capacity),
            )
            if self.current_run is None:
                self.current_run = PhaseRun(random_color(self.rng), cfg.run_capacity)
            return self._add(body)

    def add_entity(self, **params: Any) -> int:
        return self.add_body(**params)

    def restart_batch(self) -> List[int]:
        """
        Archive the running batch's statistics and start a random new one.

        Returns:
            Ids of the new bodies.
        """
        cfg: ThreeBodyConfig = self.config
        with self.lock:
            self._archive_current_run()
            self.store.clear()
            self.current_run = PhaseRun(random_color(self.rng), cfg.run_capacity)
            x0, y0, x1, y1 = cfg.spawn_box
            ids = []
            for _ in range(cfg.n_bodies):
                mass = float(self.rng.uniform(*cfg.mass_range))
                ids.append(self.add_body(
                    position=(self.rng.uniform(x0, x1), self.rng.uniform(y0, y1)),
                    velocity=self.rng.uniform(*cfg.speed_range, size=2),
                    mass=mass,
                ))
        logger.info("Started batch with %d bodies (%d archived runs)", len(ids), len(self.history))
        return ids

    def _archive_current_run(self) -> None:
        run = self.current_run
        if run is None:
            return
        self.history.append(run)
        limit = self.config.max_archived_runs
        if limit is not None and len(self.history) > limit:
            del self.history[: len(self.history) - limit]
        self.current_run = None
        logger.info("Archived run with %d samples", len(run))

    def clear_history(self) -> None:
        with self.lock:
            self.history.clear()

    def _make_context(self, time: float, dt: float, bodies: list) -> StepContext:
        return StepContext(time=time, dt=dt, time_step=dt, bodies=bodies)

    def _after_step(self, context: StepContext) -> None:
        if self.current_run is None or len(context.bodies) < 2:
            return
        self.current_run.push(*population_statistics(context.bodies))

    def _on_clear(self) -> None:
        self.current_run = None

    def _run_snapshots(self) -> List[RunSnapshot]:
        runs = [(run, False) for run in self.history]
        if self.current_run is not None:
            runs.append((self.current_run, True))
        snapshots = []
        for run, active in runs:
            samples = run.samples.to_numpy()
            snapshots.append(RunSnapshot(
                color=run.color,
                samples=samples,
                plot=self.mapper.map_samples(samples),
                active=active,
            ))
        return snapshots
