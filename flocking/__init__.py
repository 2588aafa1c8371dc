"""
Flocking: align, separate, cohere.

A small 2D boids engine. Each tick every boid reads its neighbours
within three radii, blends its velocity, and then the whole flock moves.
"""

__version__ = "0.1.0"
