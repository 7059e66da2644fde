from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..core.timeutil import now_utc
from ..domain.models import SensorReading

logger = logging.getLogger(__name__)


class SensorDataPayload(BaseModel):
    """Body of ``POST /sensors`` on the local API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    temperature_from_pressure: float
    temperature_from_humidity: float
    pressure: float
    humidity: float
    timestamp: datetime

    @classmethod
    def from_reading(cls, reading: SensorReading) -> SensorDataPayload:
        return cls(
            temperature_from_pressure=reading.temperature_from_pressure,
            temperature_from_humidity=reading.temperature_from_humidity,
            pressure=reading.pressure,
            humidity=reading.humidity,
            timestamp=reading.ts_utc or now_utc(),
        )


class HttpLocalSinkClient:
    """Forwards sensor readings to the local HTTP API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        path: str = "/sensors",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._path = path if path.startswith("/") else f"/{path}"
        self._timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self._base_url}{self._path}"

    async def post_sensor_data(self, reading: SensorReading) -> None:
        payload = SensorDataPayload.from_reading(reading)
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            resp = await client.post(
                self.url,
                json=payload.model_dump(mode="json", by_alias=True),
            )
            resp.raise_for_status()
        logger.debug("Posted sensor data to %s (status=%s)", self.url, resp.status_code)
