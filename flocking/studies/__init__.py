"""
Studies: runnable experiments built on the flock.

1. Reference flock - four boids in a line, the golden run
"""
