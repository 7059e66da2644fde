from __future__ import annotations

import asyncio
import logging
import sys

from .core.config import Settings, settings
from .core.log import configure_logging
from .domain.interfaces import IndicatorController, SensorController
from .domain.models import ScheduleOffset
from .drivers.indicator_sim import SimulatedIndicator
from .drivers.local_api import HttpLocalSinkClient
from .drivers.sensors_sim import SimulatedSensorController
from .services.orchestrator import Orchestrator, run


logger = logging.getLogger(__name__)


def build_sensors(cfg: Settings) -> SensorController:
    if cfg.sensor_mode.lower() != "sim":
        raise ValueError(f"Unsupported sensor_mode {cfg.sensor_mode!r} (only 'sim' is bundled)")
    return SimulatedSensorController(failure_rate=cfg.sim_failure_rate)


def build_indicator(cfg: Settings) -> IndicatorController:
    if cfg.indicator_mode.lower() != "sim":
        raise ValueError(f"Unsupported indicator_mode {cfg.indicator_mode!r} (only 'sim' is bundled)")
    return SimulatedIndicator()


def build_orchestrator(cfg: Settings = settings) -> Orchestrator:
    return Orchestrator(
        sink=HttpLocalSinkClient(
            base_url=cfg.local_api_url,
            path=cfg.local_api_path,
            timeout=cfg.local_api_timeout_s,
        ),
        indicator=build_indicator(cfg),
        sensors=build_sensors(cfg),
        offsets=ScheduleOffset.from_times(cfg.turn_on_time, cfg.turn_off_time),
        day_night_enabled=cfg.day_night_enabled,
    )


def main() -> None:
    configure_logging()
    logger.info(
        "Starting %s (tz=%s, day_night_enabled=%s)",
        settings.app_name,
        settings.timezone,
        settings.day_night_enabled,
    )
    orchestrator = build_orchestrator(settings)
    try:
        status = asyncio.run(run(orchestrator))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        status = 0
    logger.info("Shutdown complete")
    sys.exit(status)


if __name__ == "__main__":
    main()
