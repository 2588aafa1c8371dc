"""
observations/trajectory.py

Watch. Measure. Compare.

Frames of positions over time, and a few numbers that say
whether a crowd has become a flock.
"""

from __future__ import annotations
from typing import Dict, List, Optional, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from flocking.environments.flock import Flock


class TrajectoryRecorder:
    """
    Records the flock's positions once per frame.

    Frames are tagged with the ids present at that tick, so boids
    may join or leave mid-run. Usable directly as a flock observer.
    """

    def __init__(self, flock: Flock, max_frames: Optional[int] = None):
        self.flock = flock
        self.max_frames = max_frames
        self.frames: List[np.ndarray] = []
        self.frame_ids: List[List[str]] = []

    def record_frame(self) -> None:
        """Record current positions."""
        self.frames.append(self.flock.get_positions().copy())
        self.frame_ids.append([boid.id for boid in self.flock])

        if self.max_frames is not None and len(self.frames) > self.max_frames:
            self.frames = self.frames[-self.max_frames:]
            self.frame_ids = self.frame_ids[-self.max_frames:]

    def __call__(self, flock: Flock) -> None:
        self.record_frame()

    @property
    def boid_ids(self) -> List[str]:
        """Every id seen in the kept frames, in first-seen order."""
        seen: Dict[str, None] = {}
        for ids in self.frame_ids:
            for boid_id in ids:
                seen.setdefault(boid_id, None)
        return list(seen)

    def as_array(self) -> np.ndarray:
        """
        Frames stacked as (frames, boids, 2).

        Columns follow boid_ids. A boid absent from a frame is NaN there.
        """
        if not self.frames:
            return np.zeros((0, len(self.flock), 2))

        columns = {boid_id: i for i, boid_id in enumerate(self.boid_ids)}
        stacked = np.full((len(self.frames), len(columns), 2), np.nan)
        for t, (frame, ids) in enumerate(zip(self.frames, self.frame_ids)):
            for row, boid_id in enumerate(ids):
                stacked[t, columns[boid_id]] = frame[row]
        return stacked

    def __len__(self) -> int:
        return len(self.frames)


def centroid_spread(positions: np.ndarray) -> float:
    """Mean distance from the centroid. Lower is tighter."""
    positions = np.asarray(positions, dtype=np.float64)
    if len(positions) == 0:
        return 0.0
    centroid = positions.mean(axis=0)
    return float(np.linalg.norm(positions - centroid, axis=1).mean())


def velocity_alignment(velocities: np.ndarray) -> float:
    """Mean dot product of each velocity with the mean velocity."""
    velocities = np.asarray(velocities, dtype=np.float64)
    if len(velocities) == 0:
        return 0.0
    mean_velocity = velocities.mean(axis=0)
    return float(np.dot(velocities, mean_velocity).mean())


def polarization(velocities: np.ndarray) -> float:
    """
    Length of the mean unit heading, in [0, 1].

    1 = everyone heading the same way. Stationary boids are ignored.
    """
    velocities = np.asarray(velocities, dtype=np.float64)
    if len(velocities) == 0:
        return 0.0

    speeds = np.linalg.norm(velocities, axis=1)
    moving = speeds > 1e-12
    if not moving.any():
        return 0.0

    headings = velocities[moving] / speeds[moving][:, None]
    return float(np.linalg.norm(headings.mean(axis=0)))
