"""MCP protocol — Model Context Protocol server."""

from toolbridge.protocols.mcp.models import (
    CallOutcome,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    TextContent,
    ToolDescriptor,
)
from toolbridge.protocols.mcp.server import MCPServer
from toolbridge.protocols.mcp.transport import MCPServerTransport, StdioServerTransport

__all__ = [
    "CallOutcome",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPServer",
    "MCPServerTransport",
    "StdioServerTransport",
    "TextContent",
    "ToolDescriptor",
]
