from __future__ import annotations
import logging
import random
from dataclasses import dataclass

from ..core.timeutil import now_utc
from ..domain.models import SensorReading

logger = logging.getLogger(__name__)


@dataclass
class SimulatedEnvironment:
    temperature: float = 21.0
    pressure: float = 1013.25
    humidity: float = 45.0
    noise: float = 0.2


class SimulatedSensorController:
    """Stands in for the LPS25H/HTS221 sensor pair."""

    def __init__(
        self,
        env: SimulatedEnvironment | None = None,
        failure_rate: float = 0.0,
    ) -> None:
        self._env = env or SimulatedEnvironment()

        # Optional: inject occasional failures for testing
        self._failure_rate = failure_rate

    async def initialize(self) -> None:
        logger.info("Simulated sensors ready")

    def _jitter(self, value: float, scale: float = 1.0) -> float:
        return value + random.uniform(-self._env.noise, self._env.noise) * scale

    async def read_sensor_data(self) -> SensorReading:
        if self._failure_rate > 0.0 and random.random() < self._failure_rate:
            raise IOError("Simulated sensor read failure")

        return SensorReading(
            temperature_from_pressure=round(self._jitter(self._env.temperature), 2),
            temperature_from_humidity=round(self._jitter(self._env.temperature + 0.4), 2),
            pressure=round(self._jitter(self._env.pressure, scale=5.0), 2),
            humidity=round(max(0.0, min(100.0, self._jitter(self._env.humidity, scale=2.0))), 1),
            ts_utc=now_utc(),
        )
