"""Reporter configuration: defaults, optional YAML file, CLI overrides."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shadow_expiry.database import DEFAULT_SHADOW_PATH
from shadow_expiry.errors import ConfigError

logger = logging.getLogger(__name__)

# User-level config file, used when no --config is given
USER_CONFIG_PATH = Path.home() / ".config" / "shadow_expiry" / "config.yaml"


class ReporterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    shadow_file: str = DEFAULT_SHADOW_PATH
    strict: bool = False
    workers: int = Field(default=1, ge=1)
    output_format: Literal["text", "yaml", "csv"] = "text"
    include_unexpirable: bool = False

    def merged(self, **overrides: Any) -> ReporterConfig:
        """Return a copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        try:
            return ReporterConfig.model_validate({**self.model_dump(), **updates})
        except ValidationError as exc:
            raise ConfigError(f"Invalid option: {exc}") from exc


def load_config(path: str | Path | None = None) -> ReporterConfig:
    """
    Load the reporter config.

    An explicit *path* must exist. Without one, the user config file is read
    when present and defaults are used otherwise.
    """
    if path is None:
        if not USER_CONFIG_PATH.is_file():
            return ReporterConfig()
        path = USER_CONFIG_PATH

    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Not a YAML mapping: {path}")

    try:
        config = ReporterConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc
    logger.debug("Loaded config from %s", path)
    return config
