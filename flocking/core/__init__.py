"""
Core components of the flocking system.

- geometry: Vector2 and distance
- boid: the Boid and its three rules
"""

from .geometry import Vector2, distance
from .boid import Boid, BoidState, BoidConfig, ZeroDistance

__all__ = ["Vector2", "distance", "Boid", "BoidState", "BoidConfig", "ZeroDistance"]
