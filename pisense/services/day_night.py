from __future__ import annotations
import asyncio
import contextlib
import logging
from datetime import datetime
from typing import Optional

from ..core.timeutil import (
    MS_PER_DAY,
    Clock,
    SystemClock,
    format_duration_ms,
    ms_since_midnight,
    now_utc,
)
from ..domain.interfaces import IndicatorController
from ..domain.models import IndicatorState, ScheduleOffset

logger = logging.getLogger(__name__)


def delay_until_turn_on(offsets: ScheduleOffset, now_ms: int) -> int:
    """Delay from an off-toggle at ``now_ms`` to the next turn-on."""
    on = offsets.turn_on_ms
    if offsets.degenerate:
        return _delay_until_next(on, now_ms)
    if on < offsets.turn_off_ms and now_ms > on:
        on += MS_PER_DAY
    return max(0, on - now_ms)


def delay_until_turn_off(offsets: ScheduleOffset, now_ms: int) -> int:
    """Delay from an on-toggle at ``now_ms`` to the next turn-off.

    For a window crossing midnight, an on-toggle before the off-time (a start
    in the small hours) turns off today; otherwise tomorrow.
    """
    off = offsets.turn_off_ms
    if offsets.degenerate:
        return _delay_until_next(off, now_ms)
    if off < offsets.turn_on_ms and now_ms >= off:
        off += MS_PER_DAY
    return max(0, off - now_ms)


def _delay_until_next(offset_ms: int, now_ms: int) -> int:
    return (offset_ms - now_ms - 1) % MS_PER_DAY + 1


class DayNightScheduler:
    """Toggles the indicator on and off at fixed times of day.

    Exactly one toggle is pending at any time once started. Equal on/off
    offsets mean "always on": the indicator is switched on and re-asserted
    every 24h, never switched off.
    """

    def __init__(
        self,
        indicator: IndicatorController,
        offsets: ScheduleOffset,
        clock: Optional[Clock] = None,
    ) -> None:
        self._indicator = indicator
        self._offsets = offsets
        self._clock = clock or SystemClock()

        self._task: Optional[asyncio.Task] = None
        self.state = IndicatorState()

    @property
    def offsets(self) -> ScheduleOffset:
        return self._offsets

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def initial_state(self, now: datetime) -> bool:
        return self._offsets.is_on_at(ms_since_midnight(now))

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="day_night_loop")

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
        on = self.initial_state(self._clock.now())
        logger.info(
            "Day/night loop started (on=%s off=%s, starting %s)",
            format_duration_ms(self._offsets.turn_on_ms),
            format_duration_ms(self._offsets.turn_off_ms),
            "ON" if on else "OFF",
        )
        try:
            while True:
                delay_ms = await (self.turn_on() if on else self.turn_off())
                await self._clock.sleep(delay_ms / 1000)
                if not self._offsets.degenerate:
                    on = not on
        finally:
            logger.info("Day/night loop stopped")

    async def turn_off(self) -> int:
        """Switch the indicator off; return the delay in ms until it turns back on."""
        delay_ms = delay_until_turn_on(self._offsets, ms_since_midnight(self._clock.now()))
        logger.info("Turning off led matrix")
        await self._apply(False, delay_ms)
        logger.info("Led matrix will be turned on in %dms (%s)", delay_ms, format_duration_ms(delay_ms))
        return delay_ms

    async def turn_on(self) -> int:
        """Switch the indicator on; return the delay in ms until it turns off."""
        delay_ms = delay_until_turn_off(self._offsets, ms_since_midnight(self._clock.now()))
        logger.info("Turning on led matrix")
        await self._apply(True, delay_ms)
        if self._offsets.degenerate:
            logger.info("Led matrix stays on, next check in %dms (%s)", delay_ms, format_duration_ms(delay_ms))
        else:
            logger.info("Led matrix will be turned off in %dms (%s)", delay_ms, format_duration_ms(delay_ms))
        return delay_ms

    async def _apply(self, on: bool, delay_ms: int) -> None:
        # The next toggle is armed even if this one fails
        self.state.next_toggle_in_ms = delay_ms
        try:
            if on:
                await self._indicator.turn_on()
            else:
                await self._indicator.turn_off()
            self.state.on = on
            self.state.last_toggle_utc = now_utc()
        except Exception as e:
            logger.exception("Unable to turn %s led matrix: %s", "on" if on else "off", e)
