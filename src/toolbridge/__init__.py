"""toolbridge — expose Python modules and scripts as MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from toolbridge.adapter.registry import ToolRegistry as ToolRegistry
    from toolbridge.protocols.mcp.server import MCPServer as MCPServer

_LAZY_EXPORTS = {
    "ToolRegistry": "toolbridge.adapter.registry",
    "MCPServer": "toolbridge.protocols.mcp.server",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'toolbridge' has no attribute {name!r}")
