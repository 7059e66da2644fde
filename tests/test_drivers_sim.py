"""Simulated collaborators used in development."""

import pytest

from pisense.domain.interfaces import IndicatorController, LocalSinkClient, SensorController
from pisense.drivers.indicator_sim import SimulatedIndicator
from pisense.drivers.local_api import HttpLocalSinkClient
from pisense.drivers.sensors_sim import SimulatedEnvironment, SimulatedSensorController


def test_simulated_drivers_satisfy_protocols():
    assert isinstance(SimulatedSensorController(), SensorController)
    assert isinstance(SimulatedIndicator(), IndicatorController)
    assert isinstance(HttpLocalSinkClient(), LocalSinkClient)


@pytest.mark.asyncio
async def test_simulated_sensor_reading_is_plausible():
    sensors = SimulatedSensorController(env=SimulatedEnvironment(temperature=20.0, noise=0.1))
    await sensors.initialize()
    reading = await sensors.read_sensor_data()

    assert 19.8 <= reading.temperature_from_pressure <= 20.2
    assert 0.0 <= reading.humidity <= 100.0
    assert reading.ts_utc is not None


@pytest.mark.asyncio
async def test_simulated_sensor_failure_injection():
    sensors = SimulatedSensorController(failure_rate=1.0)
    with pytest.raises(IOError):
        await sensors.read_sensor_data()


@pytest.mark.asyncio
async def test_simulated_indicator_tracks_state():
    indicator = SimulatedIndicator()
    await indicator.initialize()
    await indicator.turn_on()
    assert indicator.is_on
    await indicator.turn_off()
    assert not indicator.is_on
