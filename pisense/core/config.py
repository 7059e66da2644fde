from datetime import time

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Pi Sense Node"
    timezone: str = "UTC"

    # Local API (sensor data sink)
    local_api_url: str = "http://localhost:8080"
    local_api_path: str = "/sensors"
    local_api_timeout_s: float = 5.0

    # Led matrix day/night schedule (local time)
    turn_on_time: time = time(8, 0)
    turn_off_time: time = time(22, 0)

    # False keeps the led matrix off; True runs the day/night loop
    day_night_enabled: bool = False

    # Collaborators: only "sim" ships, real drivers are injected by bootstrap code
    sensor_mode: str = "sim"
    indicator_mode: str = "sim"
    sim_failure_rate: float = Field(default=0.0, ge=0.0, le=1.0)

    # Logging
    log_file: str = "pisense.log"
    log_level: str = "INFO"


settings = Settings()
