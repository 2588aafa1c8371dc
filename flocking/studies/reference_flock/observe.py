"""
Study: Reference Flock

Run: python -m flocking.studies.reference_flock.observe --steps 100

Four boids in a line, a hundred units apart, all heading (1, 1).
Prints every boid's position after every tick.
"""

import argparse
import logging
import sys

from flocking.core.boid import BoidConfig, ZeroDistance
from flocking.environments.flock import Flock, FlockConfig, Visibility
from flocking.observations.report import PositionReporter
from flocking.observations.trajectory import (
    TrajectoryRecorder,
    centroid_spread,
    polarization,
    velocity_alignment,
)

logger = logging.getLogger(__name__)


REFERENCE_BOIDS = [
    {"position": (100.0, 100.0), "velocity": (1.0, 1.0)},
    {"position": (200.0, 100.0), "velocity": (1.0, 1.0)},
    {"position": (300.0, 100.0), "velocity": (1.0, 1.0)},
    {"position": (400.0, 100.0), "velocity": (1.0, 1.0)},
]


def build_flock(
    visibility: Visibility = Visibility.SEQUENTIAL,
    zero_distance: ZeroDistance = ZeroDistance.ZERO,
    boids=None
) -> Flock:
    """Create the reference flock (or any list of position/velocity dicts)."""
    flock = Flock(FlockConfig(visibility=visibility))
    boid_config = BoidConfig(zero_distance=zero_distance)

    for i, entry in enumerate(boids if boids is not None else REFERENCE_BOIDS):
        flock.add_boid(
            f"boid_{i}",
            position=entry["position"],
            velocity=entry["velocity"],
            boid_config=boid_config,
        )
    return flock


def run_study(
    steps: int = 100,
    visibility: Visibility = Visibility.SEQUENTIAL,
    zero_distance: ZeroDistance = ZeroDistance.ZERO,
    summary: bool = False,
    stream=None
) -> Flock:
    """
    Run the reference flock and report positions every tick.
    """
    flock = build_flock(visibility, zero_distance)
    logger.info(f"Reference flock: {len(flock)} boids, {steps} steps")
    flock.add_observer(PositionReporter(stream))

    recorder = None
    if summary:
        recorder = TrajectoryRecorder(flock)
        flock.add_observer(recorder)

    flock.run(steps)

    if recorder is not None:
        out = stream if stream is not None else sys.stdout
        spreads = [centroid_spread(frame) for frame in recorder.frames]
        velocities = flock.get_velocities()

        print("=" * 50, file=out)
        print(f"Reference flock: {len(flock)} boids, {flock.time} ticks", file=out)
        print("=" * 50, file=out)
        if spreads:
            print(f"Spread (distance from centroid):", file=out)
            print(f"  Initial: {spreads[0]:.2f}", file=out)
            print(f"  Final: {spreads[-1]:.2f}", file=out)
        print(f"Velocity alignment: {velocity_alignment(velocities):.2f}", file=out)
        print(f"Polarization: {polarization(velocities):.2f}", file=out)

    return flock


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reference Flock Study")
    parser.add_argument("--steps", type=int, default=100)
    parser.add_argument(
        "--visibility",
        choices=[v.value for v in Visibility],
        default=Visibility.SEQUENTIAL.value,
    )
    parser.add_argument(
        "--zero-distance",
        choices=[z.value for z in ZeroDistance],
        default=ZeroDistance.ZERO.value,
    )
    parser.add_argument("--summary", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    if args.steps < 0:
        parser.error("--steps must be non-negative")

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        stream=sys.stderr,
    )

    run_study(
        steps=args.steps,
        visibility=Visibility(args.visibility),
        zero_distance=ZeroDistance(args.zero_distance),
        summary=args.summary,
    )


if __name__ == "__main__":
    main()
