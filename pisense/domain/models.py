from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ..core.timeutil import MS_PER_DAY


@dataclass(frozen=True)
class SensorReading:
    temperature_from_pressure: float  # °C
    temperature_from_humidity: float  # °C
    pressure: float  # hPa
    humidity: float  # %RH
    ts_utc: Optional[datetime] = None

    @property
    def average_temperature(self) -> float:
        return round((self.temperature_from_pressure + self.temperature_from_humidity) / 2, 1)

    def summary(self) -> str:
        return (
            f"Temperature: {self.average_temperature:.1f}°c, "
            f"pressure: {self.pressure}hPa, humidity: {self.humidity}%"
        )


@dataclass(frozen=True)
class ScheduleOffset:
    """Turn-on / turn-off instants, in ms since local midnight."""

    turn_on_ms: int
    turn_off_ms: int

    def __post_init__(self) -> None:
        for name in ("turn_on_ms", "turn_off_ms"):
            value = getattr(self, name)
            if not 0 <= value < MS_PER_DAY:
                raise ValueError(f"{name} must be in [0, {MS_PER_DAY}), got {value}")

    @classmethod
    def from_times(cls, turn_on: time, turn_off: time) -> ScheduleOffset:
        def to_ms(t: time) -> int:
            return (t.hour * 3600 + t.minute * 60 + t.second) * 1000 + t.microsecond // 1000

        return cls(turn_on_ms=to_ms(turn_on), turn_off_ms=to_ms(turn_off))

    @property
    def wraps_midnight(self) -> bool:
        return self.turn_off_ms < self.turn_on_ms

    @property
    def degenerate(self) -> bool:
        return self.turn_on_ms == self.turn_off_ms

    def is_on_at(self, ms: int) -> bool:
        # Handle windows crossing midnight (e.g., 22:00 -> 08:00)
        if self.degenerate:
            return True
        if self.turn_on_ms < self.turn_off_ms:
            return self.turn_on_ms <= ms < self.turn_off_ms
        return ms >= self.turn_on_ms or ms < self.turn_off_ms


@dataclass
class PollState:
    last_run_utc: Optional[datetime] = None
    last_reading: Optional[SensorReading] = None
    last_error: Optional[str] = None
    cycles: int = 0
    failures: int = 0


@dataclass
class IndicatorState:
    on: Optional[bool] = None
    last_toggle_utc: Optional[datetime] = None
    next_toggle_in_ms: Optional[int] = None
