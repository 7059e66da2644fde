from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Protocol
from zoneinfo import ZoneInfo

from .config import settings

MS_PER_DAY = 24 * 3600 * 1000


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    return now_utc().astimezone(ZoneInfo(settings.timezone))


class Clock(Protocol):
    """Wall clock and timer used by the schedulers."""

    def now(self) -> datetime:
        ...

    async def sleep(self, seconds: float) -> None:
        ...


class SystemClock:
    def now(self) -> datetime:
        return now_local()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


def ms_since_midnight(dt: datetime) -> int:
    return (dt.hour * 3600 + dt.minute * 60 + dt.second) * 1000 + dt.microsecond // 1000


def format_duration_ms(ms: int) -> str:
    hours, rest = divmod(ms, 3600 * 1000)
    minutes, rest = divmod(rest, 60 * 1000)
    seconds, millis = divmod(rest, 1000)
    return f"{hours}:{minutes:02d}:{seconds:02d}.{millis:03d}"
