"""ToolRegistry — the ``tools/list`` / ``tools/call`` surface over all tools."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from toolbridge.adapter.errors import DuplicateToolError, RegistrationError
from toolbridge.adapter.tools import (
    CommandTool,
    ModuleTools,
    RegistrationFailure,
    ScriptTool,
    error_outcome,
)

if TYPE_CHECKING:
    import asyncio
    from pathlib import Path

    from toolbridge.config import BridgeConfig
    from toolbridge.protocols.mcp.models import CallOutcome, ToolDescriptor

logger = logging.getLogger(__name__)

HELP_MODULE = "toolbridge.builtin.help"


class ToolRegistry:
    """Maintains a name-to-tool map and dispatches calls.

    Usage::

        registry = ToolRegistry()
        registry.register_module("mypkg.commands")
        registry.register_script("scripts/Get-Greeting.py")

        tools = registry.list_tools()
        outcome = await registry.call_tool("Get_Greeting", {"name": "Ada"})
    """

    def __init__(self) -> None:
        self._tools: dict[str, CommandTool] = {}
        self.failures: list[RegistrationFailure] = []

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register_tool(self, tool: CommandTool) -> None:
        """Add *tool*; its name must be unique.

        Raises:
            DuplicateToolError: A tool with the same name exists.
        """
        name = tool.descriptor.name
        if name in self._tools:
            raise DuplicateToolError(name)
        self._tools[name] = tool
        logger.debug("Registered tool %s", name)

    def register_module(self, module_name: str) -> list[str]:
        """Register every exported function of *module_name*.

        Per-function failures are recorded in :attr:`failures` and skipped.

        Raises:
            RegistrationError: The module cannot be imported or exports nothing.
        """
        module_tools = ModuleTools(module_name)
        tools = module_tools.get_tools()
        self.failures.extend(module_tools.failures)

        names: list[str] = []
        for tool in tools:
            try:
                self.register_tool(tool)
            except DuplicateToolError as exc:
                logger.warning("Skipping %s.%s: %s", module_name, tool.name, exc)
                self.failures.append(RegistrationFailure(source=module_name, error=str(exc)))
                continue
            names.append(tool.name)
        return names

    def register_script(self, script_path: str | Path) -> str:
        """Register a standalone script tool.

        Raises:
            RegistrationError: The script cannot be resolved or described.
        """
        tool = ScriptTool(script_path)
        self.register_tool(tool)
        return tool.name

    def load(self, config: BridgeConfig) -> list[RegistrationFailure]:
        """Register everything *config* names.

        A module or script that fails to register is logged and skipped so the
        rest still load.  Returns the failures from this call.
        """
        start = len(self.failures)
        sources: list[tuple[str, Any]] = [("module", m) for m in config.modules]
        if config.help_tools:
            sources.append(("module", HELP_MODULE))
        sources.extend(("script", s) for s in config.scripts)

        for kind, source in sources:
            try:
                if kind == "module":
                    self.register_module(source)
                else:
                    self.register_script(source)
            except RegistrationError as exc:
                logger.warning("Cannot register %s %s: %s", kind, source, exc)
                self.failures.append(RegistrationFailure(source=str(source), error=str(exc)))
        return self.failures[start:]

    def get(self, name: str) -> CommandTool | None:
        return self._tools.get(name)

    def list_tools(self) -> list[ToolDescriptor]:
        """Descriptors of all registered tools, in registration order."""
        return [tool.descriptor for tool in self._tools.values()]

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> CallOutcome:
        """Route a call to the named tool.

        An unknown name produces an error outcome rather than raising.
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.info("Call to unknown tool %s", name)
            return error_outcome(name, f"The tool '{name}' cannot be found")
        return await tool.invoke(arguments, cancel_event=cancel_event)
