from __future__ import annotations
import logging

logger = logging.getLogger(__name__)


class SimulatedIndicator:
    def __init__(self) -> None:
        self._state = False

    @property
    def is_on(self) -> bool:
        return self._state

    async def initialize(self) -> None:
        logger.info("Simulated led matrix ready")

    async def turn_on(self) -> None:
        self._state = True
        logger.info("LED MATRIX state=ON")

    async def turn_off(self) -> None:
        self._state = False
        logger.info("LED MATRIX state=OFF")
