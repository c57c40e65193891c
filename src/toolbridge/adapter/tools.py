"""Tool façades — a synthesized descriptor plus an invocation entry point.

Two variants:

- :class:`ModuleFunctionTool`: one per exported function of a module.
  All tools from the same module share one session (the module namespace),
  so a function's change to module state is seen by the others.
  :class:`ModuleTools` builds them and owns the shared :class:`SessionGuard`.
- :class:`ScriptTool`: a standalone ``.py`` script loaded into a private
  namespace; its ``main`` function is the command.

Both variants serialize calls on their session.
"""

from __future__ import annotations

import asyncio
import importlib
import importlib.util
import inspect
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError

from toolbridge.adapter.errors import (
    CommandNotFoundError,
    NoExportedCommandsError,
    ParameterBindingError,
    RegistrationError,
)
from toolbridge.adapter.marshal import marshal
from toolbridge.adapter.metadata import CommandMetadata, read_command
from toolbridge.adapter.schema import synthesize
from toolbridge.adapter.session import ExecutionSession, SessionGuard
from toolbridge.protocols.mcp.models import CallOutcome
from toolbridge.utils.telemetry import (
    ATTR_TOOL_IS_ERROR,
    ATTR_TOOL_NAME,
    ATTR_TOOL_SESSION,
    get_tracer,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from toolbridge.protocols.mcp.models import ToolDescriptor

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

SCRIPT_ENTRY_POINT = "main"

_ERROR_TEMPLATE = """\
Failed to run the tool '{tool}' due to the following error:
```
{error}
```
Check to see if it's caused by the passed-in command name or parameter name(s), and if so, please try again."""


@runtime_checkable
class CommandTool(Protocol):
    """An invocable tool exposed to the protocol layer."""

    @property
    def descriptor(self) -> ToolDescriptor: ...

    async def invoke(
        self,
        arguments: dict[str, Any] | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> CallOutcome: ...


class RegistrationFailure(BaseModel):
    """A command that could not be registered, and why."""

    source: str
    error: str


def error_outcome(tool: str, error: object) -> CallOutcome:
    """The error :class:`CallOutcome` reported for a failed invocation."""
    return CallOutcome.from_text(_ERROR_TEMPLATE.format(tool=tool, error=error), is_error=True)


class _SessionTool:
    """Shared invocation path: convert, lock, bind, execute, marshal."""

    def __init__(self, command: str, metadata: CommandMetadata, guard: SessionGuard) -> None:
        self._command = command
        self._metadata = metadata
        self._guard = guard
        self._descriptor = synthesize(metadata)
        self._adapters: dict[str, TypeAdapter[Any] | None] = {
            p.name: _argument_adapter(p.annotation) for p in metadata.parameters
        }

    @property
    def descriptor(self) -> ToolDescriptor:
        return self._descriptor

    @property
    def name(self) -> str:
        return self._descriptor.name

    @property
    def metadata(self) -> CommandMetadata:
        return self._metadata

    async def invoke(
        self,
        arguments: dict[str, Any] | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> CallOutcome:
        """Run the command with *arguments* and marshal what it returns.

        Failures come back as an error outcome; only cancellation (signalled
        through *cancel_event* before the session is touched) raises.
        """
        if cancel_event is not None and cancel_event.is_set():
            raise asyncio.CancelledError(f"Call to {self.name} cancelled")

        with _tracer.start_as_current_span("toolbridge.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, self.name)
            span.set_attribute(ATTR_TOOL_SESSION, self._guard.name)
            try:
                converted = self._convert(arguments or {})
                outcome: CallOutcome = await self._guard.invoke(self._command, converted, marshal)
            except Exception as exc:  # noqa: BLE001
                logger.info("Tool %s failed: %s", self.name, exc)
                outcome = error_outcome(self.name, exc)
            span.set_attribute(ATTR_TOOL_IS_ERROR, outcome.is_error)
            return outcome

    def _convert(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Coerce JSON argument values to the parameter annotations.

        Names that are not parameters pass through untouched; the call
        itself rejects them.
        """
        converted: dict[str, Any] = {}
        for name, value in arguments.items():
            adapter = self._adapters.get(name)
            if adapter is None:
                converted[name] = value
                continue
            try:
                converted[name] = adapter.validate_python(value)
            except ValidationError as exc:
                raise ParameterBindingError(self._metadata.name, name, str(exc)) from exc
        return converted


def _argument_adapter(annotation: Any) -> TypeAdapter[Any] | None:
    if annotation is Any:
        return None
    try:
        return TypeAdapter(annotation)
    except Exception:  # noqa: BLE001
        # No pydantic schema for this type; values are passed as decoded.
        return None


# ---------------------------------------------------------------------------
# Module-scoped variant
# ---------------------------------------------------------------------------


class ModuleFunctionTool(_SessionTool):
    """An exported module function, invoked on the module's shared session."""

    def __init__(self, func_name: str, func: Callable[..., Any], guard: SessionGuard) -> None:
        super().__init__(func_name, read_command(func, name=func_name), guard)


class ModuleTools:
    """The exported functions of one module, sharing one session.

    Usage::

        module_tools = ModuleTools("mypkg.commands")
        for tool in module_tools.get_tools():
            registry.register_tool(tool)
    """

    def __init__(self, module_name: str) -> None:
        if not module_name:
            msg = "module_name must not be empty"
            raise ValueError(msg)
        try:
            self._module = importlib.import_module(module_name)
        except Exception as exc:
            raise CommandNotFoundError(module_name, f"the module failed to import: {exc}") from exc
        self._name = module_name
        self._guard = SessionGuard(ExecutionSession(vars(self._module), name=module_name))
        self.failures: list[RegistrationFailure] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def guard(self) -> SessionGuard:
        return self._guard

    def exported_functions(self) -> dict[str, Callable[..., Any]]:
        """``__all__`` when the module defines it, else its own public functions."""
        exported = getattr(self._module, "__all__", None)
        if exported is not None:
            found = {name: getattr(self._module, name, None) for name in exported}
            return {name: obj for name, obj in found.items() if inspect.isroutine(obj)}
        return {
            name: obj
            for name, obj in vars(self._module).items()
            if not name.startswith("_")
            and inspect.isfunction(obj)
            and obj.__module__ == self._module.__name__
        }

    def get_tools(self) -> list[ModuleFunctionTool]:
        """Build one tool per exported function.

        A function that cannot be described is logged, recorded in
        :attr:`failures` and skipped.

        Raises:
            NoExportedCommandsError: The module exports no functions.
        """
        functions = self.exported_functions()
        if not functions:
            raise NoExportedCommandsError(self._name)

        tools: list[ModuleFunctionTool] = []
        for func_name, func in functions.items():
            try:
                tools.append(ModuleFunctionTool(func_name, func, self._guard))
            except RegistrationError as exc:
                logger.warning("Skipping %s.%s: %s", self._name, func_name, exc)
                self.failures.append(
                    RegistrationFailure(source=f"{self._name}.{func_name}", error=str(exc))
                )
        return tools


# ---------------------------------------------------------------------------
# Standalone-script variant
# ---------------------------------------------------------------------------


class ScriptTool(_SessionTool):
    """A ``.py`` script whose ``main`` function is the command.

    The script is loaded once at construction as a private module that is
    never added to ``sys.modules``; its namespace is the tool's session for
    every later call.  The tool is named after the file stem, and ``main``'s
    docstring (or the script's module docstring) documents it.
    """

    def __init__(self, script_path: str | Path) -> None:
        if not str(script_path):
            msg = "script_path must not be empty"
            raise ValueError(msg)
        path = Path(script_path)
        if not path.is_file():
            raise CommandNotFoundError(str(path), "the script cannot be found")

        source = path.read_text(encoding="utf-8")
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise CommandNotFoundError(str(path), "the script cannot be loaded as Python source")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except (Exception, SystemExit) as exc:
            raise CommandNotFoundError(str(path), f"the script failed to load: {exc}") from exc
        namespace: dict[str, Any] = vars(module)

        func = namespace.get(SCRIPT_ENTRY_POINT)
        if not callable(func):
            raise CommandNotFoundError(
                str(path), f"the script defines no '{SCRIPT_ENTRY_POINT}' function"
            )

        metadata = read_command(func, name=path.stem, source=source, doc=namespace.get("__doc__"))
        self._path = path
        super().__init__(
            SCRIPT_ENTRY_POINT,
            metadata,
            SessionGuard(ExecutionSession(namespace, name=str(path))),
        )

    @property
    def path(self) -> Path:
        return self._path
