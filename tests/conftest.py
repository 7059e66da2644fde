# tests/conftest.py
import asyncio
from datetime import datetime, timedelta, timezone

from pisense.domain.models import SensorReading


def at(hour, minute=0, second=0, millisecond=0):
    return datetime(2026, 10, 19, hour, minute, second, millisecond * 1000, tzinfo=timezone.utc)


class FakeClock:
    """Virtual wall clock: sleep() advances time instantly.

    ``early_s`` makes every sleep wake that much before the requested time.
    With ``park_after=n`` the (n+1)-th sleep is recorded and then blocks
    until cancelled, which freezes a scheduling loop after n cycles.
    """

    def __init__(self, start, park_after=None, early_s=0.0):
        self._now = start
        self.park_after = park_after
        self.early_s = early_s
        self.sleeps = []

    def now(self):
        return self._now

    def advance(self, seconds):
        self._now += timedelta(seconds=seconds)

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        if self.park_after is not None and len(self.sleeps) > self.park_after:
            await asyncio.Event().wait()
        self.advance(seconds - self.early_s)
        await asyncio.sleep(0)


async def spin_until(predicate, limit=1000):
    for _ in range(limit):
        if predicate():
            return True
        await asyncio.sleep(0)
    return predicate()


def make_reading(t_pressure=21.27, t_humidity=21.33, pressure=1013.2, humidity=45.5):
    return SensorReading(
        temperature_from_pressure=t_pressure,
        temperature_from_humidity=t_humidity,
        pressure=pressure,
        humidity=humidity,
    )


class FakeSensors:
    def __init__(self, clock=None, outcomes=None, work_s=0.0):
        self.clock = clock
        self.outcomes = list(outcomes or [])
        self.work_s = work_s
        self.read_times = []
        self.ready = asyncio.Event()
        self.init_error = None

    async def initialize(self):
        await self.ready.wait()
        if self.init_error:
            raise self.init_error

    async def read_sensor_data(self):
        if self.clock:
            self.read_times.append(self.clock.now())
            self.clock.advance(self.work_s)
        outcome = self.outcomes.pop(0) if self.outcomes else make_reading()
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeSink:
    def __init__(self, fail_on=()):
        self.posted = []
        self.fail_on = set(fail_on)
        self.calls = 0

    async def post_sensor_data(self, reading):
        self.calls += 1
        if self.calls in self.fail_on:
            raise ConnectionError("local API unreachable")
        self.posted.append(reading)


class FakeIndicator:
    def __init__(self, clock=None, fail=False):
        self.clock = clock
        self.fail = fail
        self.calls = []
        self.ready = asyncio.Event()

    async def initialize(self):
        await self.ready.wait()

    async def _record(self, action):
        self.calls.append((action, self.clock.now() if self.clock else None))
        if self.fail:
            raise OSError(f"led matrix {action} failed")

    async def turn_on(self):
        await self._record("on")

    async def turn_off(self):
        await self._record("off")

    @property
    def actions(self):
        return [a for a, _ in self.calls]
