"""Protocol layer — the MCP server surface."""

from toolbridge.protocols.errors import (
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
)

__all__ = [
    "InvalidParamsError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "ProtocolError",
]
