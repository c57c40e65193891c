"""``toolbridge tools`` — list and call tools without a client."""

from __future__ import annotations

import asyncio
import json
import sys

import click

from toolbridge.cli_commands._output import (
    console,
    err_console,
    print_failures,
    print_tools_json,
    print_tools_table,
)
from toolbridge.cli_commands._sources import build_config, build_registry, source_options


@click.group()
def tools() -> None:
    """Inspect and call tools."""


@tools.command("list")
@source_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
def list_tools(
    config_path: str | None,
    modules: tuple[str, ...],
    scripts: tuple[str, ...],
    help_tools: bool,
    fmt: str,
) -> None:
    """List the tools the given modules and scripts expose."""
    try:
        config = build_config(config_path, modules, scripts, help_tools)
    except Exception as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    registry = build_registry(config)
    print_failures(registry.failures)

    descriptors = registry.list_tools()
    if not descriptors:
        console.print("[yellow]No tools registered.[/yellow]")
        return

    if fmt == "json":
        print_tools_json(descriptors)
    else:
        print_tools_table(descriptors)


@tools.command("call")
@click.argument("name")
@source_options
@click.option(
    "--args",
    "args_json",
    default="{}",
    help="Tool arguments as a JSON object.",
)
def call_tool(
    name: str,
    config_path: str | None,
    modules: tuple[str, ...],
    scripts: tuple[str, ...],
    help_tools: bool,
    args_json: str,
) -> None:
    """Call the tool NAME once and print its content."""
    try:
        arguments = json.loads(args_json)
    except json.JSONDecodeError as exc:
        err_console.print(f"[red]Invalid --args:[/red] {exc}")
        sys.exit(2)
    if not isinstance(arguments, dict):
        err_console.print("[red]Invalid --args:[/red] expected a JSON object")
        sys.exit(2)

    try:
        config = build_config(config_path, modules, scripts, help_tools)
    except Exception as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    registry = build_registry(config)
    print_failures(registry.failures)

    outcome = asyncio.run(registry.call_tool(name, arguments))
    for block in outcome.content:
        click.echo(block.text)
    if outcome.is_error:
        sys.exit(1)
