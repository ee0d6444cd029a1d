"""Application configuration pulled from environment variables via pydantic."""
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from agroutils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the farm weather service."""
    model_config = SettingsConfigDict(env_prefix="AGRO_", extra="ignore")

    weather_source: str = "openweather"  # options: openweather
    openweather_api_key: str | None = None
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    farm_latitude: float = 7.7340  # Wenchi, Ghana
    farm_longitude: float = -2.1009
    units: str = "metric"
    # Calendar days are cut at midnight in this zone when bucketing forecast steps.
    day_boundary_timezone: str = "UTC"
    request_timeout_seconds: int = 10
    api_key: str | None = None
    log_level: str = "INFO"

    @field_validator("openweather_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("day_boundary_timezone", mode="after")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        """Reject zone names zoneinfo cannot resolve."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
