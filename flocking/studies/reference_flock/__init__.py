"""
Study: Reference Flock

Four boids, spaced exactly one cohesion radius apart.

Questions to explore:
- Does a strict radius keep them strangers forever?
- How does a small nudge inward change the picture?
"""
