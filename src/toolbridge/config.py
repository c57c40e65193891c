"""Bridge configuration — which modules and scripts to expose as tools.

Example ``toolbridge.yaml``::

    name: my-tools
    modules:
      - mypkg.commands
    scripts:
      - scripts/Get-Greeting.py
    help_tools: true
    log_level: INFO
    telemetry:
      enabled: false
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError


class ConfigError(Exception):
    """Raised when a configuration file fails parsing or validation."""


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None
    export_to_console: bool = False


class BridgeConfig(BaseModel):
    """Top-level configuration parsed from YAML."""

    name: str = "toolbridge"
    version: str = "0.1.0"
    modules: list[str] = Field(default_factory=list)
    scripts: list[str] = Field(default_factory=list)
    help_tools: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)


class ConfigLoader:
    """Load and validate a YAML file into a :class:`BridgeConfig`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> BridgeConfig:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  Relative script
        paths are resolved against the directory of the config file.

        Raises:
            ConfigError: On YAML parse errors or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")

        try:
            config = BridgeConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc

        base_dir = self._path.parent
        config.scripts = [
            str(p if p.is_absolute() else base_dir / p) for p in map(Path, config.scripts)
        ]
        return config
