"""
Observation tools: position output, trajectories, flock metrics.
"""

from .report import PositionReporter
from .trajectory import TrajectoryRecorder, centroid_spread, velocity_alignment, polarization

__all__ = [
    "PositionReporter",
    "TrajectoryRecorder",
    "centroid_spread",
    "velocity_alignment",
    "polarization",
]
