"""Frame timing and the simulation clock that drives planet positions."""
from __future__ import annotations

import enum
import logging
import math
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .config import TIME_CFG, TimeCfg
from .kepler import DateLike, date_to_julian_date

logger = logging.getLogger(__name__)


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt


class ClockState(enum.Enum):
    PAUSED = "paused"
    RUNNING_FORWARD = "forward"
    RUNNING_REVERSE = "reverse"


class SimulationClock:
    """Accumulated simulation time scaled by a signed rate multiplier.

    The multiplier is the only state that decides whether the clock runs
    forward, backward or not at all. Non-finite inputs never reach the
    accumulator: they are dropped and the last valid value is kept.
    """

    def __init__(
        self,
        epoch: Optional[DateLike] = None,
        *,
        rate_multiplier: float = 1.0,
        days_per_second: float = TIME_CFG.days_per_second,
    ) -> None:
        if epoch is None:
            epoch = datetime.now(timezone.utc)
        epoch_jd = date_to_julian_date(epoch)
        if not math.isfinite(epoch_jd):
            raise ValueError(f"clock epoch must be a finite date, got {epoch!r}")
        if not math.isfinite(days_per_second):
            raise ValueError("days_per_second must be finite")
        self._epoch_jd = epoch_jd
        self._days_per_second = days_per_second
        self._accumulated_seconds = 0.0
        self._rate_multiplier = rate_multiplier if math.isfinite(rate_multiplier) else 1.0

    @property
    def epoch_jd(self) -> float:
        return self._epoch_jd

    @property
    def days_per_second(self) -> float:
        return self._days_per_second

    @property
    def accumulated_seconds(self) -> float:
        return self._accumulated_seconds

    @property
    def rate_multiplier(self) -> float:
        return self._rate_multiplier

    @property
    def state(self) -> ClockState:
        if self._rate_multiplier > 0.0:
            return ClockState.RUNNING_FORWARD
        if self._rate_multiplier < 0.0:
            return ClockState.RUNNING_REVERSE
        return ClockState.PAUSED

    @property
    def paused(self) -> bool:
        return self.state is ClockState.PAUSED

    @property
    def julian_date(self) -> float:
        return self._epoch_jd + self._accumulated_seconds * self._days_per_second

    def set_rate_multiplier(self, value: float) -> None:
        value = float(value)
        if not math.isfinite(value):
            logger.debug("Ignoring non-finite rate multiplier %r", value)
            return
        self._rate_multiplier = value

    def advance(self, frame_dt: float) -> float:
        """Advance by ``frame_dt * rate_multiplier`` and return the step taken."""

        frame_dt = float(frame_dt)
        if not math.isfinite(frame_dt):
            logger.debug("Ignoring non-finite frame delta %r", frame_dt)
            return 0.0
        step = frame_dt * self._rate_multiplier
        updated = self._accumulated_seconds + step
        if not math.isfinite(updated):
            logger.debug("Dropping step %r that would overflow the clock", step)
            return 0.0
        self._accumulated_seconds = updated
        return step


def _validate_speed_bounds(min_speed: float, max_speed: float) -> None:
    if not (math.isfinite(min_speed) and math.isfinite(max_speed)):
        raise ValueError("speed bounds must be finite")
    if min_speed <= 0.0 or max_speed < min_speed:
        raise ValueError(f"speed bounds must satisfy 0 < min <= max, got {min_speed!r}, {max_speed!r}")


def _validate_slider_bounds(slider_min: float, slider_max: float) -> None:
    if not (math.isfinite(slider_min) and math.isfinite(slider_max)) or slider_max <= slider_min:
        raise ValueError(f"slider track must satisfy min < max, got {slider_min!r}, {slider_max!r}")


def slider_to_multiplier(
    slider: float,
    min_speed: float = TIME_CFG.min_speed,
    max_speed: float = TIME_CFG.max_speed,
    *,
    slider_min: float = TIME_CFG.slider_min,
    slider_max: float = TIME_CFG.slider_max,
) -> float:
    """Map a slider position in ``[slider_min, slider_max]`` onto a speed multiplier.

    The curve is logarithmic, so equal slider travel multiplies the speed by
    an equal factor. ``slider_min`` gives ``min_speed`` and ``slider_max``
    gives ``max_speed``. With ``min_speed == 1`` on a 0-100 track this is
    ``10 ** ((s / 100) * log10(max))``.
    """

    _validate_speed_bounds(min_speed, max_speed)
    _validate_slider_bounds(slider_min, slider_max)
    if not math.isfinite(slider):
        slider = slider_min
    fraction = max(0.0, min(1.0, (slider - slider_min) / (slider_max - slider_min)))
    log_min = math.log10(min_speed)
    log_max = math.log10(max_speed)
    mapped = 10.0 ** (log_min + fraction * (log_max - log_min))
    return max(min_speed, min(max_speed, mapped))


def multiplier_to_slider(
    multiplier: float,
    min_speed: float = TIME_CFG.min_speed,
    max_speed: float = TIME_CFG.max_speed,
    *,
    slider_min: float = TIME_CFG.slider_min,
    slider_max: float = TIME_CFG.slider_max,
) -> int:
    """Nearest slider position for the magnitude of ``multiplier``."""

    _validate_speed_bounds(min_speed, max_speed)
    _validate_slider_bounds(slider_min, slider_max)
    if max_speed == min_speed:
        return int(round(slider_min))
    magnitude = abs(multiplier) if math.isfinite(multiplier) else min_speed
    magnitude = max(min_speed, min(max_speed, magnitude))
    fraction = (math.log10(magnitude) - math.log10(min_speed)) / (
        math.log10(max_speed) - math.log10(min_speed)
    )
    return int(round(slider_min + fraction * (slider_max - slider_min)))


def format_speed(scale: float) -> str:
    """Short label for a positive speed magnitude, e.g. ``1/4×`` or ``20×``."""

    if scale <= 0.0:
        return "0×"
    if scale < 1.0:
        return f"1/{round(1.0 / scale)}×"
    if scale < 10.0:
        return f"{scale:.1f}×"
    return f"{round(scale)}×"


class TimeControl:
    """User-facing speed control layered on a :class:`SimulationClock`.

    Keeps the selected magnitude apart from the live multiplier so that
    pausing and resuming, or flipping direction, restores the same speed.
    """

    def __init__(self, clock: SimulationClock, cfg: TimeCfg = TIME_CFG) -> None:
        _validate_speed_bounds(cfg.min_speed, cfg.max_speed)
        self._clock = clock
        self._cfg = cfg
        self._scale = cfg.min_speed
        self._scale = self._clamp(cfg.default_speed)
        self._paused = False
        self._reversed = False
        self._apply()

    @property
    def clock(self) -> SimulationClock:
        return self._clock

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def reversed(self) -> bool:
        return self._reversed

    @property
    def effective_multiplier(self) -> float:
        if self._paused:
            return 0.0
        return -abs(self._scale) if self._reversed else self._scale

    @property
    def slider_position(self) -> int:
        return multiplier_to_slider(
            self._scale,
            self._cfg.min_speed,
            self._cfg.max_speed,
            slider_min=self._cfg.slider_min,
            slider_max=self._cfg.slider_max,
        )

    def _clamp(self, scale: float) -> float:
        if not math.isfinite(scale):
            return self._scale
        return max(self._cfg.min_speed, min(self._cfg.max_speed, abs(scale)))

    def _apply(self) -> None:
        self._clock.set_rate_multiplier(self.effective_multiplier)

    def toggle_pause(self) -> bool:
        self._paused = not self._paused
        self._apply()
        return self._paused

    def toggle_reverse(self) -> bool:
        self._reversed = not self._reversed
        self._apply()
        return self._reversed

    def set_slider(self, position: float) -> float:
        if not math.isfinite(position):
            logger.debug("Ignoring non-finite slider position %r", position)
            return self._scale
        self._scale = slider_to_multiplier(
            position,
            self._cfg.min_speed,
            self._cfg.max_speed,
            slider_min=self._cfg.slider_min,
            slider_max=self._cfg.slider_max,
        )
        self._apply()
        return self._scale

    def set_preset(self, value: float) -> float:
        self._scale = self._clamp(value)
        self._apply()
        return self._scale

    def fast_forward(self) -> float:
        return self.set_preset(self._scale * self._cfg.fast_forward_factor)

    def speed_up(self) -> float:
        return self.set_preset(self._scale * self._cfg.step_factor)

    def slow_down(self) -> float:
        return self.set_preset(self._scale / self._cfg.step_factor)

    def is_preset_active(self, value: float, tolerance: float = 0.05) -> bool:
        return not self._paused and abs(self._scale - value) < tolerance

    def display_label(self) -> str:
        if self._paused:
            return "0×"
        prefix = "-" if self._reversed else ""
        return prefix + format_speed(self._scale)


__all__ = [
    "ClockState",
    "FrameTimer",
    "SimulationClock",
    "TimeControl",
    "format_speed",
    "multiplier_to_slider",
    "slider_to_multiplier",
]
