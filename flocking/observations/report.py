"""
observations/report.py

One line per boid per tick. The plainest possible record
of where everyone went.

Non-finite coordinates are spelled NaN, +Inf and -Inf so a poisoned
run prints the same text as the classic reference output.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, TextIO
import math
import sys

if TYPE_CHECKING:
    from flocking.environments.flock import Flock


LINE_FORMAT = "Boid at position ({x:f}, {y:f})"


class _NonFinite(str):
    """A fixed spelling that ignores any numeric format spec."""

    def __format__(self, format_spec: str) -> str:
        return str(self)


def _coordinate(value: float):
    if math.isnan(value):
        return _NonFinite("NaN")
    if math.isinf(value):
        return _NonFinite("+Inf" if value > 0 else "-Inf")
    return value


class PositionReporter:
    """
    Writes every boid's position, in flock order, to a text stream.

    Register with Flock.add_observer to report after each tick.
    """

    def __init__(self, stream: Optional[TextIO] = None, line_format: str = LINE_FORMAT):
        self.stream = stream
        self.line_format = line_format
        self.lines_written = 0

    def format_lines(self, flock: Flock) -> List[str]:
        return [
            self.line_format.format(
                x=_coordinate(boid.position.x),
                y=_coordinate(boid.position.y),
            )
            for boid in flock
        ]

    def emit(self, flock: Flock) -> None:
        # Resolve stdout lazily so capture tools can swap it
        stream = self.stream if self.stream is not None else sys.stdout
        for line in self.format_lines(flock):
            stream.write(line + "\n")
            self.lines_written += 1

    __call__ = emit
