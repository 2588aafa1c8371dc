"""
core/geometry.py

Points and directions on the plane.

Everything a boid knows about the world is a position
and a velocity. Both are just two numbers.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
import numpy as np


@dataclass(frozen=True)
class Vector2:
    """
    A 2D point or direction.

    Value type: no identity, equal components are interchangeable.
    """
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @classmethod
    def from_array(cls, values) -> Vector2:
        """Build a vector from any length-2 sequence or array."""
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != (2,):
            raise ValueError(f"Expected 2 components, got shape {arr.shape}")
        return cls(arr[0], arr[1])

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float) -> Vector2:
        return Vector2(self.x * s, self.y * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> Vector2:
        # numpy division: 0/0 gives NaN instead of raising
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vector2(np.float64(self.x) / s, np.float64(self.y) / s)

    def magnitude(self) -> float:
        """Euclidean length. Zero for the zero vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Vector2({self.x:.2f}, {self.y:.2f})"


ZERO = Vector2(0.0, 0.0)


def add(a: Vector2, b: Vector2) -> Vector2:
    return a + b


def subtract(a: Vector2, b: Vector2) -> Vector2:
    return a - b


def scale(a: Vector2, s: float) -> Vector2:
    return a * s


def magnitude(v: Vector2) -> float:
    return v.magnitude()


def distance(p: Vector2, q: Vector2) -> float:
    """Euclidean distance between two points. Symmetric."""
    return (p - q).magnitude()


def mean(vectors) -> Vector2:
    """
    Componentwise average of a non-empty collection of vectors.

    Sums in order, then divides by the count.
    """
    vectors = list(vectors)
    if not vectors:
        raise ValueError("Cannot average an empty collection")
    total = ZERO
    for v in vectors:
        total = total + v
    return total / len(vectors)
