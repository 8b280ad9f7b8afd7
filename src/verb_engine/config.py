"""
Engine configuration.

Settings come from an optional YAML file and are then overridden by
``VERB_ENGINE_*`` environment variables (a ``.env`` file is honoured).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .answers import DEFAULT_REGION_DIALECTS
from .errors import VerbEngineError
from .models import Dialect, Region

logger = logging.getLogger("verb-engine")

ENV_PREFIX = "VERB_ENGINE_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(VerbEngineError):
    """Configuration file or environment value could not be used."""
    pass


class EngineConfig(BaseModel):
    """Runtime policy for resolution and answer checking."""

    accent_insensitive: bool = Field(
        default=False,
        description="Ignore diacritics when checking answers",
    )
    default_region: Region = Field(
        default=Region.LA_GENERAL,
        description="Region used when a caller does not name one",
    )
    region_dialects: dict[Region, frozenset[Dialect]] = Field(
        default_factory=lambda: dict(DEFAULT_REGION_DIALECTS),
        description="Alternate spellings accepted per region",
    )
    strict_integrity: bool = Field(
        default=False,
        description="Raise on the first data-integrity error instead of collecting",
    )

    def dialects_for(self, region: Region) -> frozenset[Dialect]:
        return self.region_dialects.get(region, frozenset())


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got '{raw}'")


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    for key in ("accent_insensitive", "strict_integrity"):
        name = ENV_PREFIX + key.upper()
        raw = os.getenv(name)
        if raw is not None:
            overrides[key] = _parse_bool(name, raw)

    region = os.getenv(ENV_PREFIX + "DEFAULT_REGION")
    if region:
        overrides["default_region"] = region.strip()

    return overrides


def load_config(path: Path | str | None = None, use_env: bool = True) -> EngineConfig:
    """
    Load engine configuration.

    Args:
        path: Optional YAML file with EngineConfig fields at the top level
        use_env: Apply VERB_ENGINE_* environment overrides

    Returns:
        Validated EngineConfig

    Raises:
        ConfigError: If the file is missing, unparseable or not a mapping
        pydantic.ValidationError: If a value has the wrong type
    """
    data: dict[str, Any] = {}

    if path is not None:
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Failed to read config {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config {path} must be a YAML mapping")
        data.update(loaded)

    if use_env:
        if load_dotenv():
            logger.debug("Loaded .env for verb-engine settings")
        data.update(_env_overrides())

    config = EngineConfig.model_validate(data)
    logger.debug(f"Engine config: {config.model_dump()}")
    return config
