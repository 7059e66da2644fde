from __future__ import annotations
from typing import Protocol, runtime_checkable
from .models import SensorReading


@runtime_checkable
class SensorController(Protocol):
    async def initialize(self) -> None:
        """Return once the sensors are ready; raise if they never will be."""
        ...

    async def read_sensor_data(self) -> SensorReading:
        ...


@runtime_checkable
class IndicatorController(Protocol):
    async def initialize(self) -> None:
        ...

    async def turn_on(self) -> None:
        ...

    async def turn_off(self) -> None:
        ...


@runtime_checkable
class LocalSinkClient(Protocol):
    async def post_sensor_data(self, reading: SensorReading) -> None:
        ...
