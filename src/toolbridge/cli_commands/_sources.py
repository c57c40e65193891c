"""Shared ``--config`` / ``--module`` / ``--script`` handling."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from toolbridge.adapter.registry import ToolRegistry
from toolbridge.config import BridgeConfig, ConfigLoader

F = TypeVar("F", bound=Callable[..., Any])


def source_options(func: F) -> F:
    """Attach the options that choose which tools to load."""
    options = [
        click.option(
            "--config",
            "-c",
            "config_path",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="YAML config listing modules and scripts.",
        ),
        click.option(
            "--module",
            "-m",
            "modules",
            multiple=True,
            help="Import path of a module whose functions become tools (repeatable).",
        ),
        click.option(
            "--script",
            "-s",
            "scripts",
            multiple=True,
            type=click.Path(),
            help="Path of a script whose main() becomes a tool (repeatable).",
        ),
        click.option("--help-tools", is_flag=True, help="Also expose the built-in help tools."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(
    config_path: str | None,
    modules: tuple[str, ...],
    scripts: tuple[str, ...],
    help_tools: bool,
) -> BridgeConfig:
    """Merge the config file (if any) with command-line sources."""
    config = ConfigLoader(Path(config_path)).load() if config_path else BridgeConfig()
    config.modules = [*config.modules, *modules]
    config.scripts = [*config.scripts, *(str(Path(s)) for s in scripts)]
    config.help_tools = config.help_tools or help_tools
    return config


def build_registry(config: BridgeConfig) -> ToolRegistry:
    registry = ToolRegistry()
    registry.load(config)
    return registry


def configure_logging(level: str) -> None:
    """Log to stderr; stdout carries the protocol stream."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
