"""
Terminal progress bars for pull/push operations.

The tracker consumes an iterator of OperationProgress records and draws one
bar per layer digest. Updates for the layer drawn last are redrawn in place.
"""

from __future__ import annotations
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, TextIO, Tuple

from ..domain.models import OperationProgress
from .formatters import format_file_size
from .terminal import TerminalStyle, colored, terminal_width

SPEED_WINDOW_S = 3.0
ETA_ROUNDING_S = 5
MAX_BAR_WIDTH = 50
MIN_BAR_WIDTH = 10
DIGEST_DISPLAY_LENGTH = 8
MEGABYTE = 1_048_576.0


class MovingAverageSpeedCalculator:
    """Transfer speed averaged over the readings of the last few seconds."""

    def __init__(self, window_s: float = SPEED_WINDOW_S, clock: Callable[[], float] = time.monotonic):
        self.window_s = window_s
        self._clock = clock
        self._readings: List[Tuple[float, int]] = []

    def calculate_speed(self, completed: int) -> float:
        """Record a reading and return bytes per second (0.0 until two readings exist)."""
        now = self._clock()
        self._readings.append((now, completed))
        self._readings = [(t, b) for (t, b) in self._readings if now - t <= self.window_s]
        if len(self._readings) < 2:
            return 0.0
        oldest_t, oldest_bytes = self._readings[0]
        span = now - oldest_t
        return (completed - oldest_bytes) / span if span > 0 else 0.0

    def estimate_time_remaining(self, completed: int, total: int, speed: Optional[float] = None) -> int:
        """Seconds left at `speed`, or at a freshly recorded speed when none is given."""
        if speed is None:
            speed = self.calculate_speed(completed)
        if speed <= 0:
            return 0
        return int((total - completed) / speed)


def format_speed(bytes_per_second: float) -> str:
    return f"{bytes_per_second / MEGABYTE:.1f} MB/s"


def format_eta(seconds: int) -> str:
    """Format seconds remaining, rounded up to the next 5 seconds."""
    if seconds <= 0:
        return "calculating..."
    rounded = ((seconds + ETA_ROUNDING_S - 1) // ETA_ROUNDING_S) * ETA_ROUNDING_S
    hours = rounded // 3600
    minutes = (rounded % 3600) // 60
    remaining = rounded % 60
    if hours > 0:
        return "ETA: %dh%02dm" % (hours, minutes)
    if minutes > 0:
        return "ETA: %dm%02ds" % (minutes, remaining)
    return "ETA: %ds" % remaining


def render_bar(
    percentage: float,
    width: int,
    completed: int,
    total: int,
    speed: float,
    eta: int,
    is_completed: bool,
    digest: str = "",
) -> str:
    """Build one progress line: bar, percent, sizes, speed/ETA and digest."""
    percentage = max(0.0, min(percentage, 100.0))
    filled_width = int(width * percentage / 100.0)
    filled = colored("█" * filled_width, TerminalStyle.GREEN)
    empty = "░" * (width - filled_width)
    percent = colored("%6.2f%%" % percentage, TerminalStyle.CYAN)
    sizes = f"[{format_file_size(completed)}/{format_file_size(total)}]"

    if is_completed:
        info = "✓ Complete"
    elif speed > 0.1:
        info = f"{colored(format_speed(speed), TerminalStyle.YELLOW)} {colored(format_eta(eta), TerminalStyle.MAGENTA)}"
    else:
        info = "initializing..."

    line = f"[{filled}{empty}] {percent} {sizes} {info}"
    if digest:
        line += f" [{digest}]"
    return line


@dataclass
class DownloadPart:
    """Progress of one layer, keyed by its digest."""
    digest: str
    total: int
    completed: int = 0
    status: str = ""
    speed: MovingAverageSpeedCalculator = field(default_factory=MovingAverageSpeedCalculator)

    @property
    def percentage(self) -> float:
        return self.completed / self.total * 100.0 if self.total else 0.0

    @property
    def is_complete(self) -> bool:
        return self.completed >= self.total


class ProgressTracker:
    """Draws progress bars for a stream of OperationProgress updates."""

    def __init__(
        self,
        out: Optional[TextIO] = None,
        width_fn: Callable[[], int] = terminal_width,
        speed_factory: Callable[[], MovingAverageSpeedCalculator] = MovingAverageSpeedCalculator,
    ):
        self._out = out or sys.stdout
        self._width_fn = width_fn
        self._speed_factory = speed_factory
        self._parts: Dict[str, DownloadPart] = {}
        self._last_drawn: Optional[str] = None
        self._last_status: Optional[str] = None

    @property
    def bar_width(self) -> int:
        return max(MIN_BAR_WIDTH, min(self._width_fn() - 65, MAX_BAR_WIDTH))

    @property
    def parts(self) -> Dict[str, DownloadPart]:
        return dict(self._parts)

    def track(self, updates: Iterable[OperationProgress]) -> Optional[OperationProgress]:
        """Consume `updates`, drawing as they arrive. Returns the final update."""
        last: Optional[OperationProgress] = None
        for update in updates:
            self.handle(update)
            last = update
        return last

    def handle(self, update: OperationProgress) -> None:
        if update.digest and update.total:
            self._handle_part(update)
        elif update.status and update.status != self._last_status:
            self._write(colored(update.status, TerminalStyle.DIM))
            self._last_drawn = None
        self._last_status = update.status

    def _handle_part(self, update: OperationProgress) -> None:
        part = self._parts.get(update.digest)
        if part is None:
            part = DownloadPart(
                digest=update.digest,
                total=update.total,
                completed=update.completed or 0,
                status=update.status,
                speed=self._speed_factory(),
            )
            self._parts[update.digest] = part
        elif update.completed is not None:
            part.completed = update.completed

        line = self._render(part)
        if self._last_drawn == part.digest:
            self._out.write(TerminalStyle.LINE_UP_CLEAR)
        self._write(line)
        self._last_drawn = part.digest

    def _render(self, part: DownloadPart) -> str:
        if part.is_complete:
            speed, eta = 0.0, 0
        else:
            speed = part.speed.calculate_speed(part.completed)
            eta = part.speed.estimate_time_remaining(part.completed, part.total, speed)
        return render_bar(
            part.percentage,
            self.bar_width,
            part.completed,
            part.total,
            speed,
            eta,
            part.is_complete,
            digest=_short_digest(part.digest),
        )

    def _write(self, line: str) -> None:
        self._out.write(line + "\n")
        self._out.flush()


def _short_digest(digest: str) -> str:
    _, _, value = digest.partition(":")
    return (value or digest)[:DIGEST_DISPLAY_LENGTH]
