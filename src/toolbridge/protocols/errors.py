"""Shared error types for the protocol layer.

Each error carries the JSON-RPC error code it is reported with.
"""

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code = INTERNAL_ERROR


class InvalidRequestError(ProtocolError):
    """The message is not a valid JSON-RPC request."""

    code = INVALID_REQUEST


class MethodNotFoundError(ProtocolError):
    """The requested method is not supported by this server."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InvalidParamsError(ProtocolError):
    """The request parameters do not fit the method."""

    code = INVALID_PARAMS

    def __init__(self, method: str, detail: str = "") -> None:
        self.method = method
        self.detail = detail
        super().__init__(f"Invalid params for {method}" + (f": {detail}" if detail else ""))
