from __future__ import annotations
import asyncio
import contextlib
import logging
from datetime import datetime, timedelta
from typing import Optional

from ..core.timeutil import Clock, SystemClock, now_utc
from ..domain.interfaces import SensorController, LocalSinkClient
from ..domain.models import PollState


logger = logging.getLogger(__name__)


class SensorPollScheduler:
    """Reads the sensors at the top of every minute and forwards to the local API.

    Runs never overlap: the next run is only armed once the current one is
    over, and it is always armed, whatever the outcome of the cycle.
    """

    def __init__(
        self,
        sensors: SensorController,
        sink: LocalSinkClient,
        clock: Optional[Clock] = None,
    ) -> None:
        self._sensors = sensors
        self._sink = sink
        self._clock = clock or SystemClock()

        self._task: Optional[asyncio.Task] = None
        self._last_boundary: Optional[datetime] = None
        self.state = PollState()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def next_boundary(self, now: datetime) -> datetime:
        """Top of the minute after ``now``, never one already targeted."""
        boundary = now.replace(second=0, microsecond=0) + timedelta(minutes=1)
        if self._last_boundary is not None and boundary <= self._last_boundary:
            # Woke up early: that minute was already polled
            boundary = self._last_boundary + timedelta(minutes=1)
        return boundary

    def next_delay_ms(self) -> int:
        now = self._clock.now()
        return (self.next_boundary(now) - now) // timedelta(milliseconds=1)

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="sensor_poll_loop")

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def wait(self) -> None:
        if self._task:
            await self._task

    async def _run(self) -> None:
        logger.info("Sensor poll loop started")
        try:
            while True:
                # Recomputed from the wall clock after every cycle
                now = self._clock.now()
                self._last_boundary = self.next_boundary(now)
                delay_ms = (self._last_boundary - now) // timedelta(milliseconds=1)
                logger.debug("Next sensor poll in %dms", delay_ms)
                await self._clock.sleep(delay_ms / 1000)
                await self.run_once()
        finally:
            logger.info("Sensor poll loop stopped")

    async def run_once(self) -> None:
        self.state.last_run_utc = now_utc()
        self.state.cycles += 1
        try:
            reading = await self._sensors.read_sensor_data()
            self.state.last_reading = reading
            await self._sink.post_sensor_data(reading)
            self.state.last_error = None
            logger.info("Sensor data: %s", reading.summary())
        except Exception as e:
            self.state.failures += 1
            self.state.last_error = str(e)
            logger.exception("Unable to retrieve or save the sensor data: %s", e)
