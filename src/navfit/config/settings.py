"""
Settings loading helpers.
"""

from __future__ import annotations

import os
from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, ValidationError
from dotenv import load_dotenv

from .models import ConfigError


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class Settings(BaseModel):
    """
    Container for runtime overrides loaded from environment variables.

    Attributes:
        log_level: Logging level name used when the CLI does not pass one.
        web_root: Default output directory when the config does not set one.
        viewport_width: Default viewport width for fitting commands.
    """
    log_level: Optional[str] = Field(default=None, alias="NAVFIT_LOG_LEVEL")
    web_root: Optional[Path] = Field(default=None, alias="NAVFIT_WEB_ROOT")
    viewport_width: Optional[int] = Field(default=None, alias="NAVFIT_VIEWPORT_WIDTH")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings from environment/.env exactly once.

    Returns:
        A Settings object populated from environment variables.

    Raises:
        ConfigError: If an environment value has the wrong type.
    """
    values = {field.alias: os.getenv(field.alias) for field in Settings.model_fields.values()}
    try:
        return Settings(**{key: value for key, value in values.items() if value})
    except ValidationError as exc:
        raise ConfigError(f"Invalid environment settings: {exc}") from exc
