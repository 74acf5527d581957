"""Configuration loading for CandleView.

Settings live in a toml file, by default ``~/.config/candleview/config.toml``::

    [data]
    assume_milliseconds = false

    [[overlays]]
    kind = "sma"
    period = 20
    color = "#f1c40f"
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from candleview.errors import ConfigError
from candleview.indicators import DEFAULT_OVERLAYS
from candleview.models import IndicatorSpec

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CANDLEVIEW_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "candleview" / "config.toml"


class Settings(BaseModel):
    """Runtime settings consumed by the ingestion pipeline and indicators."""

    assume_milliseconds: bool = Field(
        default=False, description="Read digit-only dates as epoch milliseconds"
    )
    overlays: list[IndicatorSpec] = Field(
        default_factory=lambda: list(DEFAULT_OVERLAYS),
        description="Overlays drawn over the candles",
    )

    model_config = {"frozen": True}


def get_config_path(path: Optional[Path] = None) -> Path:
    """Resolve the config path: explicit argument, env var, then default."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from the toml config file.

    A missing file yields default settings.

    Raises:
        ConfigError: If the file is not valid toml or holds invalid values.
    """
    config_path = get_config_path(path)

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return Settings()

    try:
        raw = toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    data: dict = {}
    if "assume_milliseconds" in raw.get("data", {}):
        data["assume_milliseconds"] = raw["data"]["assume_milliseconds"]
    if "overlays" in raw:
        data["overlays"] = raw["overlays"]

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e
