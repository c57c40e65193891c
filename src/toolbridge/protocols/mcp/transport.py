"""MCP server transports — where JSON-RPC messages come from and go to.

Each transport satisfies the :class:`MCPServerTransport` protocol, providing
``connect``, ``send``, ``receive``, and ``close`` methods.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import IO, Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class MCPServerTransport(Protocol):
    """Abstract server-side transport for MCP JSON-RPC communication."""

    async def connect(self) -> None: ...
    async def send(self, data: dict[str, Any]) -> None: ...
    async def receive(self) -> dict[str, Any] | None: ...
    async def close(self) -> None: ...


class StdioServerTransport:
    """Serves over stdin/stdout.

    Sends and receives newline-delimited JSON.  ``receive`` returns ``None``
    at end of input.  Lines that are not JSON objects are logged and skipped.
    """

    def __init__(self, stdin: IO[str] | None = None, stdout: IO[str] | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._connected = False

    async def connect(self) -> None:
        self._connected = True

    async def send(self, data: dict[str, Any]) -> None:
        """Write a JSON line to stdout."""
        if not self._connected:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        self._stdout.write(json.dumps(data, separators=(",", ":")) + "\n")
        self._stdout.flush()

    async def receive(self) -> dict[str, Any] | None:
        """Read the next JSON object from stdin; ``None`` at end of input."""
        if not self._connected:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        loop = asyncio.get_running_loop()
        while True:
            line = await loop.run_in_executor(None, self._stdin.readline)
            if not line:
                return None
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as exc:
                logger.warning("Ignoring malformed message: %s", exc)
                continue
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring non-object message: %r", line[:80])

    async def close(self) -> None:
        self._connected = False
