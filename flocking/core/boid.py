"""
core/boid.py

A boid is three habits and nothing else:
match your neighbours, give them room, stay with the group.

Inspired by:
- Reynolds boids (align, separate, cohere)
- Starling murmurations (local rules, global shape)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional
import logging

from .geometry import Vector2, distance, mean

logger = logging.getLogger(__name__)


class ZeroDistance(Enum):
    """What separate does with a neighbour sitting on top of the boid."""
    SKIP = "skip"              # Not counted at all
    ZERO = "zero"              # Counted, pushes with a zero vector
    PROPAGATE = "propagate"    # Divide anyway, velocity becomes NaN


@dataclass
class BoidState:
    """
    What a boid IS at this moment.
    """
    position: Vector2
    velocity: Vector2
    age: int = 0                  # Ticks lived

    def __post_init__(self):
        if not isinstance(self.position, Vector2):
            self.position = Vector2.from_array(self.position)
        if not isinstance(self.velocity, Vector2):
            self.velocity = Vector2.from_array(self.velocity)

    def copy(self) -> BoidState:
        # Vector2 is immutable, a shallow copy is a full snapshot
        return BoidState(self.position, self.velocity, self.age)


@dataclass
class BoidConfig:
    """
    The unchanging nature of a boid.
    """
    align_radius: float = 10.0
    separate_radius: float = 50.0
    cohesion_radius: float = 100.0
    zero_distance: ZeroDistance = ZeroDistance.ZERO
    epsilon: float = 0.0          # Distances at or below count as coincident

    def __post_init__(self):
        self.zero_distance = ZeroDistance(self.zero_distance)
        for name in ("align_radius", "separate_radius", "cohesion_radius"):
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}")


class Boid:
    """
    A single agent in the flock.

    Rules read the neighbours they are handed and write only
    this boid's velocity. Position moves in integrate().
    """

    def __init__(
        self,
        boid_id: str,
        position,
        velocity,
        config: Optional[BoidConfig] = None
    ):
        self.id = boid_id
        self.config = config or BoidConfig()
        self.state = BoidState(position=position, velocity=velocity)

        self.history: List[BoidState] = []
        self.record_history = False
        self._warned_nan = False

    @property
    def position(self) -> Vector2:
        return self.state.position

    @property
    def velocity(self) -> Vector2:
        return self.state.velocity

    # ==================== Neighbourhood ====================

    def distance_to(self, other: Boid) -> float:
        """Euclidean distance to another boid."""
        return distance(self.state.position, other.state.position)

    def neighbors_within(self, others: Iterable[Boid], radius: float) -> List[Boid]:
        """
        Other boids strictly closer than radius.

        Excludes self by identity, so a coincident copy still counts.
        A NaN distance never compares below radius.
        """
        return [
            other for other in others
            if other is not self and self.distance_to(other) < radius
        ]

    # ==================== Rules ====================

    def align(self, others: Iterable[Boid]) -> None:
        """Blend halfway toward the average neighbour velocity."""
        neighbors = self.neighbors_within(others, self.config.align_radius)
        if not neighbors:
            return

        average = mean(n.state.velocity for n in neighbors)
        self._blend(average)

    def separate(self, others: Iterable[Boid]) -> None:
        """Blend halfway toward the average unit vector pointing away from neighbours."""
        neighbors = self.neighbors_within(others, self.config.separate_radius)

        pushes = []
        for neighbor in neighbors:
            diff = self.state.position - neighbor.state.position
            dist = diff.magnitude()

            if dist <= self.config.epsilon:
                policy = self.config.zero_distance
                if policy is ZeroDistance.SKIP:
                    continue
                if policy is ZeroDistance.ZERO:
                    pushes.append(Vector2(0.0, 0.0))
                    continue

            pushes.append(diff / dist)

        if not pushes:
            return

        self._blend(mean(pushes))

    def cohesion(self, others: Iterable[Boid]) -> None:
        """
        Blend halfway toward the raw offset to the neighbour centroid.

        The offset is not normalised: far boids turn harder.
        """
        neighbors = self.neighbors_within(others, self.config.cohesion_radius)
        if not neighbors:
            return

        centroid = mean(n.state.position for n in neighbors)
        direction = centroid - self.state.position
        self._blend(direction)

    def flock(self, others: Iterable[Boid]) -> None:
        """
        Apply align, separate, cohesion in that order.

        Each rule starts from the velocity the previous one left.
        """
        others = list(others)
        self.align(others)
        self.separate(others)
        self.cohesion(others)

    def integrate(self) -> None:
        """Move one unit time step along the current velocity."""
        self.state.position = self.state.position + self.state.velocity
        self.state.age += 1

        if self.record_history:
            self._record()

    # ==================== Internal Mechanisms ====================

    def _blend(self, target: Vector2) -> None:
        self.state.velocity = (self.state.velocity + target) / 2

        if not self._warned_nan and not self.state.velocity.is_finite():
            logger.warning(f"Boid {self.id} velocity is no longer finite: {self.state.velocity}")
            self._warned_nan = True

    def _record(self) -> None:
        """Record current state for later analysis."""
        self.history.append(self.state.copy())

    def __repr__(self) -> str:
        return (
            f"Boid(id={self.id}, "
            f"pos=[{self.state.position.x:.2f}, {self.state.position.y:.2f}], "
            f"vel=[{self.state.velocity.x:.2f}, {self.state.velocity.y:.2f}], "
            f"age={self.state.age})"
        )
