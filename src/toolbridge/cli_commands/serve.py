"""``toolbridge serve`` — serve tools over MCP on stdin/stdout."""

from __future__ import annotations

import asyncio
import sys

import click

from toolbridge.cli_commands._output import err_console, print_failures
from toolbridge.cli_commands._sources import (
    build_config,
    build_registry,
    configure_logging,
    source_options,
)


@click.command()
@source_options
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level to stderr.")
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
def serve(
    config_path: str | None,
    modules: tuple[str, ...],
    scripts: tuple[str, ...],
    help_tools: bool,
    verbose: bool,
    telemetry: bool,
) -> None:
    """Serve the configured modules and scripts as MCP tools over stdio."""
    from toolbridge.protocols.mcp.server import MCPServer
    from toolbridge.protocols.mcp.transport import StdioServerTransport

    try:
        config = build_config(config_path, modules, scripts, help_tools)
    except Exception as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    configure_logging("DEBUG" if verbose else config.log_level)

    if telemetry or config.telemetry.enabled:
        from toolbridge.utils.telemetry import configure_telemetry

        configure_telemetry(
            service_name=config.name,
            export_to_console=config.telemetry.export_to_console,
            otlp_endpoint=config.telemetry.otlp_endpoint,
        )

    registry = build_registry(config)
    print_failures(registry.failures)
    if len(registry) == 0:
        err_console.print("[red]No tools registered; nothing to serve.[/red]")
        sys.exit(1)

    server = MCPServer(registry, name=config.name, version=config.version)
    try:
        asyncio.run(server.serve(StdioServerTransport()))
    except KeyboardInterrupt:
        pass
