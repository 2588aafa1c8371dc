"""
environments/flock.py

The flock: an ordered set of boids and the clock that moves them.

Two passes per tick. First every boid decides, then every boid moves.
Nobody moves before everyone has decided.

Inspired by:
- Reynolds boids simulation
- Particle physics sandboxes
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional
import logging
import numpy as np

from flocking.core.boid import Boid, BoidConfig, BoidState

logger = logging.getLogger(__name__)

Observer = Callable[["Flock"], None]


class Visibility(Enum):
    """
    What a boid sees of the others during the velocity pass.

    SEQUENTIAL: live boids; earlier boids' new velocities are visible.
    SNAPSHOT: frozen copies taken at the start of the tick.
    """
    SEQUENTIAL = "sequential"
    SNAPSHOT = "snapshot"


@dataclass
class FlockConfig:
    """Configuration for the flock."""
    visibility: Visibility = Visibility.SEQUENTIAL

    def __post_init__(self):
        self.visibility = Visibility(self.visibility)


class Flock:
    """
    Ordered collection of boids with a fixed two-phase tick.

    Features:
    - Stable insertion order (iteration and output order)
    - Brute-force neighbour queries
    - Sequential or snapshot visibility
    - Observers called after every tick
    """

    def __init__(self, config: Optional[FlockConfig] = None):
        self.config = config or FlockConfig()
        self.boids: Dict[str, Boid] = {}
        self.time = 0
        self._observers: List[Observer] = []

    def add_boid(
        self,
        boid_id: str,
        position,
        velocity=(0.0, 0.0),
        boid_config: Optional[BoidConfig] = None
    ) -> Boid:
        """Add a boid to the end of the flock."""
        if boid_id in self.boids:
            raise ValueError(f"Boid {boid_id!r} already in flock")

        boid = Boid(boid_id, position, velocity, boid_config)
        self.boids[boid_id] = boid
        return boid

    def remove_boid(self, boid_id: str) -> Optional[Boid]:
        """Remove a boid from the flock."""
        return self.boids.pop(boid_id, None)

    def add_observer(self, observer: Observer) -> None:
        """Register a callable invoked with the flock after every tick."""
        self._observers.append(observer)

    def get_neighbors(self, boid_id: str, radius: float) -> List[Boid]:
        """
        Boids strictly within radius of the given boid, in flock order.

        Unknown ids have no neighbours.
        """
        if boid_id not in self.boids:
            return []
        return self.boids[boid_id].neighbors_within(self.boids.values(), radius)

    def step(self) -> None:
        """
        Advance simulation by one tick.

        1. Velocity pass: every boid flocks against the others
        2. Position pass: every boid integrates
        3. Observers see the result
        """
        boids = list(self.boids.values())

        # Phase 1: Decide
        if self.config.visibility is Visibility.SNAPSHOT:
            frozen = [self._freeze(b) for b in boids]
            for i, boid in enumerate(boids):
                boid.flock(frozen[:i] + frozen[i + 1:])
        else:
            for boid in boids:
                boid.flock(boids)

        # Phase 2: Move
        for boid in boids:
            boid.integrate()

        self.time += 1
        logger.debug(f"Tick {self.time} complete for {len(boids)} boids")

        # Phase 3: Observe
        for observer in self._observers:
            observer(self)

    def run(self, steps: int) -> None:
        """Advance the simulation by a fixed number of ticks."""
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")

        logger.info(
            f"Running {steps} ticks with {len(self.boids)} boids "
            f"({self.config.visibility.value} visibility)"
        )
        for _ in range(steps):
            self.step()
        logger.info(f"Finished at tick {self.time}")

    @staticmethod
    def _freeze(boid: Boid) -> Boid:
        """Detached copy of a boid for read-only neighbour use."""
        frozen = Boid(boid.id, boid.position, boid.velocity, boid.config)
        frozen.state.age = boid.state.age
        return frozen

    def get_state_snapshot(self) -> Dict[str, BoidState]:
        """Copy of the current state of all boids."""
        return {bid: boid.state.copy() for bid, boid in self.boids.items()}

    def get_positions(self) -> np.ndarray:
        """Get positions of all boids as an (N, 2) array."""
        return np.array(
            [b.position.to_array() for b in self.boids.values()]
        ).reshape(-1, 2)

    def get_velocities(self) -> np.ndarray:
        """Get velocities of all boids as an (N, 2) array."""
        return np.array(
            [b.velocity.to_array() for b in self.boids.values()]
        ).reshape(-1, 2)

    def __len__(self) -> int:
        return len(self.boids)

    def __iter__(self) -> Iterator[Boid]:
        return iter(self.boids.values())

    def __repr__(self) -> str:
        return (
            f"Flock(boids={len(self.boids)}, "
            f"time={self.time}, "
            f"visibility={self.config.visibility.value})"
        )
