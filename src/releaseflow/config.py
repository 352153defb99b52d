"""Unified configuration file (releaseflow_config.yaml).

Example::

    scheduler:
      horizon_months: 18
      hours_per_workday: 7.5
    gantt:
      title: Q3 release
      axis_format: "%b %d"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError
from .scheduler import SchedulingConfig

CONFIG_FILENAME = "releaseflow_config.yaml"


class GanttConfig(BaseModel):
    """Configuration for Mermaid Gantt output."""

    title: str | None = None  # Defaults to the release name
    axis_format: str | None = None  # Mermaid axisFormat, e.g. "%Y-%m-%d"
    tick_interval: str | None = None  # Mermaid tickInterval, e.g. "1week"


class UnifiedConfig(BaseModel):
    """All configuration sections."""

    scheduler: SchedulingConfig = Field(default_factory=SchedulingConfig)
    gantt: GanttConfig = Field(default_factory=GanttConfig)


def load_config(config_path: Path | str) -> UnifiedConfig:
    """Load configuration from a YAML file.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config: {e}") from e

    if data is None:
        return UnifiedConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config must contain a mapping at the root level")

    try:
        return UnifiedConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def discover_config(data_path: Path | None = None, config_path: Path | None = None) -> UnifiedConfig:
    """Find and load configuration, falling back to defaults.

    Search order:
    1. Explicit config_path (must exist)
    2. Directory of the release data file
    3. Current directory
    """
    if config_path is not None:
        return load_config(config_path)

    candidates: list[Path] = []
    if data_path is not None:
        candidates.append(Path(data_path).parent / CONFIG_FILENAME)
    candidates.append(Path(CONFIG_FILENAME))

    for candidate in candidates:
        if candidate.exists():
            return load_config(candidate)
    return UnifiedConfig()
