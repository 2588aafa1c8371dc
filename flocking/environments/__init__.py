"""
Environments that host and step boids.
"""

from .flock import Flock, FlockConfig, Visibility

__all__ = ["Flock", "FlockConfig", "Visibility"]
