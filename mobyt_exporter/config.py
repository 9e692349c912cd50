"""
Mobyt Exporter - Configuration Module
Loads vendor credentials from environment variables and an optional env file.
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Mobyt defines its "last hour" boundary in this zone
MOBYT_TIMEZONE = "Europe/Paris"

DEFAULT_LISTEN_ADDRESS = ":9141"
DEFAULT_METRICS_PATH = "/metrics"
DEFAULT_ENV_FILE = ".env"


class AppSettings(BaseSettings):
    """
    Exporter settings.
    Values loaded from environment variables with MOBYT_ prefix.
    """
    model_config = SettingsConfigDict(env_prefix="MOBYT_", extra="ignore")

    # Vendor account
    endpoint: str = Field(default="", description="Mobyt API base URL")
    username: str = Field(default="", description="Mobyt account username")
    password: str = Field(default="", description="Mobyt account password")

    timezone: str = Field(default=MOBYT_TIMEZONE, description="Reference zone for the history window")
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown time zone {value!r}") from e
        return value

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value!r}")
        return value

    def missing_settings(self) -> List[str]:
        """Names of required environment variables that are not set"""
        missing = []
        for name in ("endpoint", "username", "password"):
            if not getattr(self, name):
                missing.append(f"MOBYT_{name.upper()}")
        return missing


def load_settings(env_file: Optional[str] = None) -> AppSettings:
    """
    Build settings from the environment plus an env file.

    An explicit env_file is loaded when present; otherwise .env in the
    working directory is tried. A missing file is logged, never fatal.
    """
    if env_file:
        logger.info(f"Loading {env_file} env file.")
        if not Path(env_file).is_file():
            logger.error(f"Error loading {env_file} env file.")
            return AppSettings()
        return AppSettings(_env_file=env_file)

    if not Path(DEFAULT_ENV_FILE).is_file():
        logger.info("No .env file found, assume env variables are set.")
        return AppSettings()
    return AppSettings(_env_file=DEFAULT_ENV_FILE)


@lru_cache()
def get_settings(env_file: Optional[str] = None) -> AppSettings:
    """Get cached application settings"""
    return load_settings(env_file)
