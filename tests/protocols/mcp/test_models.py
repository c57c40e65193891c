"""Tests for MCP message models."""

from __future__ import annotations

from toolbridge.protocols.mcp.models import (
    CallOutcome,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolDescriptor,
)


class TestJsonRpcRequest:
    def test_notification(self) -> None:
        assert JsonRpcRequest(method="notifications/initialized").is_notification
        assert not JsonRpcRequest(method="ping", id=0).is_notification

    def test_params_default(self) -> None:
        assert JsonRpcRequest(method="ping", id="a").params == {}


class TestJsonRpcResponse:
    def test_result_on_wire(self) -> None:
        wire = JsonRpcResponse(id=1, result={"ok": True}).to_wire()
        assert wire == {"jsonrpc": "2.0", "id": 1, "result": {"ok": True}}

    def test_empty_result_kept(self) -> None:
        assert JsonRpcResponse(id=1).to_wire()["result"] == {}

    def test_error_on_wire(self) -> None:
        wire = JsonRpcResponse(id=2, error=JsonRpcError(code=-32601, message="nope")).to_wire()
        assert "result" not in wire
        assert wire["error"] == {"code": -32601, "message": "nope"}


class TestToolDescriptor:
    def test_alias(self) -> None:
        descriptor = ToolDescriptor(name="t", description="d", input_schema={"type": "object"})
        assert descriptor.model_dump(by_alias=True) == {
            "name": "t",
            "description": "d",
            "inputSchema": {"type": "object"},
        }

    def test_validate_by_alias(self) -> None:
        descriptor = ToolDescriptor.model_validate(
            {"name": "t", "description": "d", "inputSchema": {"type": "object"}}
        )
        assert descriptor.input_schema == {"type": "object"}


class TestCallOutcome:
    def test_from_text(self) -> None:
        outcome = CallOutcome.from_text("hi", is_error=True)
        assert outcome.model_dump(by_alias=True) == {
            "content": [{"type": "text", "text": "hi"}],
            "isError": True,
        }

    def test_empty(self) -> None:
        outcome = CallOutcome.empty()
        assert outcome.content == []
        assert outcome.text == ""
        assert not outcome.is_error
