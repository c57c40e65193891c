"""MCPServer — answers ``tools/list`` and ``tools/call`` from a :class:`ToolRegistry`.

Only the request/response mapping lives here; reading and writing messages
is the transport's job (see :mod:`toolbridge.protocols.mcp.transport`).
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from toolbridge import __version__
from toolbridge.protocols.errors import (
    INVALID_REQUEST,
    InvalidParamsError,
    MethodNotFoundError,
    ProtocolError,
)
from toolbridge.protocols.mcp.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse
from toolbridge.utils.telemetry import ATTR_RPC_METHOD, get_tracer

if TYPE_CHECKING:
    from toolbridge.adapter.registry import ToolRegistry
    from toolbridge.protocols.mcp.transport import MCPServerTransport

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

PROTOCOL_VERSION = "2024-11-05"


class MCPServer:
    """Maps JSON-RPC requests onto a :class:`ToolRegistry`.

    Usage::

        server = MCPServer(registry, name="my-tools")
        await server.serve(StdioServerTransport())
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        name: str = "toolbridge",
        version: str = __version__,
    ) -> None:
        self._registry = registry
        self._name = name
        self._version = version

    async def serve(self, transport: MCPServerTransport) -> None:
        """Handle messages from *transport* until it is closed."""
        await transport.connect()
        pending: set[asyncio.Task[None]] = set()
        try:
            while True:
                raw = await transport.receive()
                if raw is None:
                    break
                # Requests are answered concurrently; tools sharing a session
                # are serialized by the session lock.
                task = asyncio.create_task(self._respond(transport, raw))
                pending.add(task)
                task.add_done_callback(pending.discard)
            if pending:
                await asyncio.gather(*pending)
        finally:
            await transport.close()

    async def _respond(self, transport: MCPServerTransport, raw: dict[str, Any]) -> None:
        response = await self.handle(raw)
        if response is not None:
            await transport.send(response.to_wire())

    async def handle(self, raw: dict[str, Any]) -> JsonRpcResponse | None:
        """Answer one decoded message; notifications get ``None``."""
        try:
            request = JsonRpcRequest.model_validate(raw)
        except ValidationError as exc:
            return JsonRpcResponse(
                id=raw.get("id") if isinstance(raw, dict) else None,
                error=JsonRpcError(code=INVALID_REQUEST, message=str(exc)),
            )

        with _tracer.start_as_current_span("toolbridge.rpc") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            try:
                result = await self._dispatch(request)
            except ProtocolError as exc:
                logger.info("Request %s failed: %s", request.method, exc)
                if request.is_notification:
                    return None
                return JsonRpcResponse(
                    id=request.id,
                    error=JsonRpcError(code=exc.code, message=str(exc)),
                )

        if request.is_notification:
            return None
        return JsonRpcResponse(id=request.id, result=result)

    async def _dispatch(self, request: JsonRpcRequest) -> dict[str, Any]:
        method = request.method
        if method == "initialize":
            return self._initialize()
        if method == "ping":
            return {}
        if method == "tools/list":
            return {
                "tools": [
                    tool.model_dump(by_alias=True) for tool in self._registry.list_tools()
                ]
            }
        if method == "tools/call":
            return await self._call_tool(request.params)
        if method.startswith("notifications/"):
            return {}
        raise MethodNotFoundError(method)

    def _initialize(self) -> dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": self._name, "version": self._version},
        }

    async def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidParamsError("tools/call", "'name' must be a non-empty string")
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise InvalidParamsError("tools/call", "'arguments' must be an object")

        outcome = await self._registry.call_tool(name, arguments)
        return outcome.model_dump(by_alias=True)
