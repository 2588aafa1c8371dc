"""
Tests for flocking/observations/

Position reporting, trajectory recording, flock metrics.
"""

import io

import numpy as np
import pytest

from flocking.core.boid import BoidConfig, ZeroDistance
from flocking.environments.flock import Flock
from flocking.observations.report import PositionReporter
from flocking.observations.trajectory import (
    TrajectoryRecorder,
    centroid_spread,
    polarization,
    velocity_alignment,
)


@pytest.fixture
def line_flock():
    flock = Flock()
    flock.add_boid("boid_0", (0.0, 0.0), (1.0, 1.0))
    flock.add_boid("boid_1", (500.0, 0.0), (1.0, 1.0))
    return flock


class TestPositionReporter:
    """Tests for PositionReporter."""

    def test_format(self, line_flock):
        reporter = PositionReporter()
        assert reporter.format_lines(line_flock) == [
            "Boid at position (0.000000, 0.000000)",
            "Boid at position (500.000000, 0.000000)",
        ]

    def test_emit_to_stream(self, line_flock):
        stream = io.StringIO()
        reporter = PositionReporter(stream)
        reporter.emit(line_flock)
        assert stream.getvalue().splitlines()[1] == "Boid at position (500.000000, 0.000000)"
        assert reporter.lines_written == 2

    def test_defaults_to_stdout(self, line_flock, capsys):
        PositionReporter().emit(line_flock)
        assert capsys.readouterr().out.count("\n") == 2

    def test_as_observer(self, line_flock):
        stream = io.StringIO()
        line_flock.add_observer(PositionReporter(stream))
        line_flock.run(2)

        lines = stream.getvalue().splitlines()
        assert len(lines) == 4
        assert lines[0] == "Boid at position (1.000000, 1.000000)"
        assert lines[3] == "Boid at position (502.000000, 2.000000)"

    def test_non_finite_spelling(self):
        """Poisoned positions print as NaN, not Python's nan."""
        flock = Flock()
        config = BoidConfig(zero_distance=ZeroDistance.PROPAGATE)
        flock.add_boid("a", (0.0, 0.0), boid_config=config)
        flock.add_boid("b", (0.0, 0.0), boid_config=config)
        stream = io.StringIO()
        flock.add_observer(PositionReporter(stream))

        flock.run(1)

        assert stream.getvalue().splitlines() == [
            "Boid at position (NaN, NaN)",
            "Boid at position (NaN, NaN)",
        ]

    def test_infinite_spelling(self):
        flock = Flock()
        flock.add_boid("a", (float("inf"), float("-inf")))
        assert PositionReporter().format_lines(flock) == ["Boid at position (+Inf, -Inf)"]

    def test_custom_format(self, line_flock):
        reporter = PositionReporter(line_format="{x:.1f},{y:.1f}")
        assert reporter.format_lines(line_flock)[0] == "0.0,0.0"


class TestTrajectoryRecorder:
    """Tests for TrajectoryRecorder."""

    def test_empty(self, line_flock):
        recorder = TrajectoryRecorder(line_flock)
        assert recorder.as_array().shape == (0, 2, 2)

    def test_records_every_tick(self, line_flock):
        recorder = TrajectoryRecorder(line_flock)
        line_flock.add_observer(recorder)
        line_flock.run(3)

        frames = recorder.as_array()
        assert frames.shape == (3, 2, 2)
        np.testing.assert_array_equal(frames[2, 0], [3.0, 3.0])

    def test_frames_are_copies(self, line_flock):
        recorder = TrajectoryRecorder(line_flock)
        recorder.record_frame()
        line_flock.step()
        np.testing.assert_array_equal(recorder.frames[0][0], [0.0, 0.0])

    def test_max_frames(self, line_flock):
        recorder = TrajectoryRecorder(line_flock, max_frames=2)
        line_flock.add_observer(recorder)
        line_flock.run(5)
        assert len(recorder) == 2
        np.testing.assert_array_equal(recorder.frames[-1][0], [5.0, 5.0])


    def test_boid_removed_mid_run(self):
        flock = Flock()
        flock.add_boid("a", (0.0, 0.0), (1.0, 0.0))
        flock.add_boid("b", (500.0, 0.0), (0.0, 1.0))
        recorder = TrajectoryRecorder(flock)
        flock.add_observer(recorder)

        flock.step()
        flock.remove_boid("b")
        flock.step()

        frames = recorder.as_array()
        assert recorder.boid_ids == ["a", "b"]
        assert frames.shape == (2, 2, 2)
        np.testing.assert_array_equal(frames[1, 0], [2.0, 0.0])
        np.testing.assert_array_equal(frames[0, 1], [500.0, 1.0])
        assert np.isnan(frames[1, 1]).all()

    def test_boid_added_mid_run(self):
        flock = Flock()
        flock.add_boid("a", (0.0, 0.0), (1.0, 0.0))
        recorder = TrajectoryRecorder(flock)
        flock.add_observer(recorder)

        flock.step()
        flock.add_boid("late", (-500.0, 0.0))
        flock.step()

        frames = recorder.as_array()
        assert recorder.boid_ids == ["a", "late"]
        assert np.isnan(frames[0, 1]).all()
        np.testing.assert_array_equal(frames[1, 1], [-500.0, 0.0])


class TestMetrics:
    """Tests for flock metrics."""

    def test_centroid_spread(self):
        assert centroid_spread([[0.0, 0.0], [2.0, 0.0]]) == pytest.approx(1.0)

    def test_centroid_spread_empty(self):
        assert centroid_spread(np.zeros((0, 2))) == 0.0

    def test_velocity_alignment(self):
        assert velocity_alignment([[1.0, 1.0], [1.0, 1.0]]) == pytest.approx(2.0)

    def test_polarization_aligned(self):
        assert polarization([[1.0, 0.0], [3.0, 0.0]]) == pytest.approx(1.0)

    def test_polarization_opposed(self):
        assert polarization([[1.0, 0.0], [-1.0, 0.0]]) == pytest.approx(0.0)

    def test_polarization_ignores_stationary(self):
        assert polarization([[0.0, 0.0], [0.0, 2.0]]) == pytest.approx(1.0)

    def test_polarization_motionless(self):
        assert polarization([[0.0, 0.0]]) == 0.0
        assert polarization(np.zeros((0, 2))) == 0.0
