import io

import pytest

from ollamakit.domain.models import OperationProgress
from ollamakit.presentation.progress import (
    MovingAverageSpeedCalculator,
    ProgressTracker,
    format_eta,
    format_speed,
    render_bar,
)
from ollamakit.presentation.terminal import TerminalStyle


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "calculating..."),
        (1, "ETA: 5s"),
        (5, "ETA: 5s"),
        (58, "ETA: 1m00s"),
        (63, "ETA: 1m05s"),
        (3661, "ETA: 1h01m"),
    ],
)
def test_format_eta(seconds, expected):
    assert format_eta(seconds) == expected


def test_format_speed():
    assert format_speed(1_048_576 * 2.5) == "2.5 MB/s"


def test_speed_needs_two_readings_in_window():
    clock = FakeClock()
    calc = MovingAverageSpeedCalculator(clock=clock)
    assert calc.calculate_speed(0) == 0.0
    clock.now = 1.0
    assert calc.calculate_speed(1000) == 1000.0
    clock.now = 2.0
    assert calc.calculate_speed(3000) == 1500.0


def test_speed_window_drops_old_readings():
    clock = FakeClock()
    calc = MovingAverageSpeedCalculator(clock=clock)
    calc.calculate_speed(0)
    clock.now = 10.0
    assert calc.calculate_speed(5000) == 0.0
    clock.now = 12.0
    assert calc.calculate_speed(9000) == 2000.0


def test_estimate_time_remaining():
    clock = FakeClock()
    calc = MovingAverageSpeedCalculator(clock=clock)
    calc.calculate_speed(0)
    clock.now = 1.0
    assert calc.estimate_time_remaining(100, 1100) == 10


def test_estimate_time_remaining_with_known_speed_records_nothing():
    clock = FakeClock()
    calc = MovingAverageSpeedCalculator(clock=clock)
    assert calc.estimate_time_remaining(100, 1100, speed=50.0) == 20
    assert calc.estimate_time_remaining(100, 1100, speed=0.0) == 0
    clock.now = 1.0
    calc.calculate_speed(0)
    clock.now = 2.0
    assert calc.calculate_speed(100) == 100.0


def test_render_bar_states():
    done = render_bar(100.0, 10, 2048, 2048, 0.0, 0, True, digest="abc")
    assert "█" * 10 in done and "100.00%" in done and "✓ Complete" in done and done.endswith("[abc]")
    assert "[2.00 KB/2.00 KB]" in done

    starting = render_bar(25.0, 8, 1, 4, 0.0, 0, False)
    assert "░" * 6 in starting and " 25.00%" in starting and "initializing..." in starting

    moving = render_bar(50.0, 10, 1, 2, 1_048_576.0, 63, False)
    assert "1.0 MB/s" in moving and "ETA: 1m05s" in moving


def test_tracker_draws_one_bar_per_digest_and_redraws_in_place():
    out = io.StringIO()
    tracker = ProgressTracker(out=out, width_fn=lambda: 120)
    last = tracker.track([
        OperationProgress(status="pulling manifest"),
        OperationProgress(status="pulling abc", digest="sha256:aaaaaaaaaaaa", total=100, completed=0),
        OperationProgress(status="pulling abc", digest="sha256:aaaaaaaaaaaa", total=100, completed=100),
        OperationProgress(status="pulling def", digest="sha256:bbbbbbbbbbbb", total=10, completed=5),
        OperationProgress(status="success"),
    ])
    text = out.getvalue()
    assert last.status == "success"
    assert "pulling manifest" in text and "success" in text
    assert text.count(TerminalStyle.LINE_UP_CLEAR) == 1
    assert "[aaaaaaaa]" in text and "[bbbbbbbb]" in text
    parts = tracker.parts
    assert parts["sha256:aaaaaaaaaaaa"].is_complete
    assert parts["sha256:bbbbbbbbbbbb"].percentage == 50.0


def test_tracker_shows_speed_and_eta_for_partial_download():
    clock = FakeClock()
    out = io.StringIO()
    tracker = ProgressTracker(
        out=out,
        width_fn=lambda: 120,
        speed_factory=lambda: MovingAverageSpeedCalculator(clock=clock),
    )
    digest = "sha256:cccccccccccc"
    tracker.handle(OperationProgress(status="pulling", digest=digest, total=11 * 1_048_576, completed=0))
    clock.now = 1.0
    tracker.handle(OperationProgress(status="pulling", digest=digest, total=11 * 1_048_576, completed=1_048_576))
    text = out.getvalue()
    assert "1.0 MB/s" in text
    assert "ETA: 10s" in text


def test_tracker_bar_width_bounds():
    assert ProgressTracker(width_fn=lambda: 200).bar_width == 50
    assert ProgressTracker(width_fn=lambda: 100).bar_width == 35
    assert ProgressTracker(width_fn=lambda: 40).bar_width == 10


def test_tracker_repeated_status_printed_once():
    out = io.StringIO()
    ProgressTracker(out=out).track([OperationProgress(status="verifying")] * 3)
    assert out.getvalue().count("verifying") == 1
