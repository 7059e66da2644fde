from __future__ import annotations
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..core.timeutil import Clock, SystemClock
from ..domain.interfaces import IndicatorController, LocalSinkClient, SensorController
from ..domain.models import ScheduleOffset
from ..domain.readiness import ReadinessGate
from .day_night import DayNightScheduler
from .poller import SensorPollScheduler

logger = logging.getLogger(__name__)

LED_MATRIX = "led-matrix"
SENSORS = "sensors"


class Orchestrator:
    """Owns the hardware collaborators and the two scheduling loops."""

    def __init__(
        self,
        sink: LocalSinkClient,
        indicator: IndicatorController,
        sensors: SensorController,
        offsets: ScheduleOffset,
        day_night_enabled: bool = False,
        clock: Optional[Clock] = None,
    ) -> None:
        self.clock = clock or SystemClock()
        self.indicator = indicator
        self.sensors = sensors
        self.day_night_enabled = day_night_enabled

        self.gate = ReadinessGate([LED_MATRIX, SENSORS])
        self.poller = SensorPollScheduler(sensors=sensors, sink=sink, clock=self.clock)
        self.day_night = DayNightScheduler(indicator=indicator, offsets=offsets, clock=self.clock)

        self._init_tasks: list[asyncio.Task] = []

    def initialize(self) -> None:
        """Kick off every subsystem's initialization; each reports to the gate on completion."""
        self._init_tasks = [
            asyncio.create_task(self._initialize(LED_MATRIX, self.indicator.initialize), name=f"init_{LED_MATRIX}"),
            asyncio.create_task(self._initialize(SENSORS, self.sensors.initialize), name=f"init_{SENSORS}"),
        ]

    async def _initialize(self, name: str, init: Callable[[], Awaitable[None]]) -> None:
        try:
            await init()
        except Exception as e:
            # Never signals: dependent loops stay idle
            logger.exception("Subsystem %s failed to initialize: %s", name, e)
            return
        self.gate.signal_ready(name)

    async def start(self) -> None:
        logger.info("Initialization finished")

        await self.poller.start()

        if self.day_night_enabled:
            await self.day_night.start()
        else:
            # Day/night loop disabled: keep the led matrix off
            await self.indicator.turn_off()
            self.day_night.state.on = False

    async def stop(self) -> None:
        for task in self._init_tasks:
            task.cancel()
        await asyncio.gather(*self._init_tasks, return_exceptions=True)
        self._init_tasks = []
        await self.poller.stop()
        await self.day_night.stop()

    async def wait(self) -> None:
        await asyncio.gather(self.poller.wait(), self.day_night.wait())


async def run(orchestrator: Orchestrator) -> int:
    """Process entry point: wait for the hardware, start the loops, run until stopped.

    Returns the process exit status.
    """
    orchestrator.initialize()
    try:
        await orchestrator.gate.wait()
        try:
            await orchestrator.start()
        except Exception as e:
            logger.critical("Hardware failed with error %s", e, exc_info=True)
            return 1
        logger.info("Hardware loop started")
        await orchestrator.wait()
        return 0
    finally:
        await orchestrator.stop()
