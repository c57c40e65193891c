"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from toolbridge.adapter.tools import RegistrationFailure
    from toolbridge.protocols.mcp.models import ToolDescriptor

console = Console()
err_console = Console(stderr=True)


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Parameters")
    table.add_column("Description")

    for tool in tools:
        properties = tool.input_schema.get("properties", {})
        required = set(tool.input_schema.get("required", []))
        params = ", ".join(f"{p}*" if p in required else p for p in properties) or "-"
        table.add_row(tool.name, params, _truncate(tool.description))

    console.print(table)


def print_tools_json(tools: list[ToolDescriptor]) -> None:
    console.print_json(json.dumps([t.model_dump(by_alias=True) for t in tools]))


def print_failures(failures: list[RegistrationFailure]) -> None:
    """Report registration failures on stderr."""
    for failure in failures:
        err_console.print(f"[yellow]Not registered:[/yellow] {failure.source}: {failure.error}")


def _truncate(text: str, max_len: int = 80) -> str:
    text = " ".join(text.split())
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
