from __future__ import annotations
import asyncio
import logging
from typing import Callable, Iterable

logger = logging.getLogger(__name__)

ReadyListener = Callable[[], None]


class ReadinessGate:
    """One-shot latch over a fixed set of subsystems.

    Each subsystem reports once through ``signal_ready``. When the last one
    reports, listeners are called and waiters released, exactly once.
    """

    def __init__(self, subsystems: Iterable[str]) -> None:
        self._flags: dict[str, bool] = {name: False for name in subsystems}
        if not self._flags:
            raise ValueError("ReadinessGate needs at least one subsystem")
        self._listeners: list[ReadyListener] = []
        self._fired = False
        self._event = asyncio.Event()

    @property
    def is_ready(self) -> bool:
        return self._fired

    @property
    def pending(self) -> list[str]:
        return [name for name, ok in self._flags.items() if not ok]

    def add_listener(self, listener: ReadyListener) -> None:
        self._listeners.append(listener)

    def signal_ready(self, subsystem: str) -> None:
        if subsystem not in self._flags:
            logger.warning("Ignoring readiness signal from unknown subsystem %r", subsystem)
            return

        if not self._flags[subsystem]:
            self._flags[subsystem] = True
            logger.info("Subsystem ready: %s (pending=%s)", subsystem, self.pending)

        if self._fired or not all(self._flags.values()):
            return

        self._fired = True
        self._event.set()
        for listener in list(self._listeners):
            listener()

    async def wait(self) -> None:
        await self._event.wait()
