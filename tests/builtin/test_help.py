"""Tests for the help tools."""

from __future__ import annotations

from toolbridge.adapter.registry import HELP_MODULE, ToolRegistry
from toolbridge.builtin.help import get_help_for_command, get_help_for_parameter


class TestGetHelpForCommand:
    def test_function_help(self) -> None:
        text = get_help_for_command("sample_commands.greet")
        assert "Help on" in text
        assert "Return a greeting." in text

    def test_unknown_command(self) -> None:
        text = get_help_for_command("no_such_module_xyz.thing")
        assert text.startswith("Failed to retrieve the help content")
        assert "no_such_module_xyz.thing" in text
        assert "passed-in command name, and if so" in text


class TestGetHelpForParameter:
    def test_required_parameter(self) -> None:
        text = get_help_for_parameter("sample_commands.greet", ["name"])
        assert text.startswith("-name <")
        assert "Who to greet." in text
        assert "Required?      true" in text
        assert "Default value" not in text

    def test_several_parameters(self) -> None:
        text = get_help_for_parameter("sample_commands.repeat", ["separator", "shout"])
        assert "-separator <" in text
        assert "Default value  ' '" in text
        assert "-shout <" in text
        assert "Required?      false" in text

    def test_unknown_parameter(self) -> None:
        text = get_help_for_parameter("sample_commands.greet", ["nope"])
        assert text.startswith("Failed to retrieve the help content")
        assert "no parameter named 'nope'" in text
        assert "parameter name(s)" in text


async def test_exposed_as_tools() -> None:
    registry = ToolRegistry()
    registry.register_module(HELP_MODULE)
    outcome = await registry.call_tool(
        "get_help_for_parameter",
        {"command": "sample_commands.greet", "parameters": ["name"]},
    )
    assert not outcome.is_error
    assert "Who to greet." in outcome.text
