"""Tool adapter — commands described, invoked and marshalled as tools."""

from toolbridge.adapter.errors import (
    AdapterError,
    CommandFailedError,
    CommandNotFoundError,
    DuplicateToolError,
    InvocationError,
    MissingDocumentationError,
    NoExportedCommandsError,
    ParameterBindingError,
    RegistrationError,
    SerializationError,
    UnsupportedShapeError,
)
from toolbridge.adapter.registry import ToolRegistry
from toolbridge.adapter.tools import (
    CommandTool,
    ModuleFunctionTool,
    ModuleTools,
    RegistrationFailure,
    ScriptTool,
)

__all__ = [
    "AdapterError",
    "CommandFailedError",
    "CommandNotFoundError",
    "CommandTool",
    "DuplicateToolError",
    "InvocationError",
    "MissingDocumentationError",
    "ModuleFunctionTool",
    "ModuleTools",
    "NoExportedCommandsError",
    "ParameterBindingError",
    "RegistrationError",
    "RegistrationFailure",
    "ScriptTool",
    "SerializationError",
    "ToolRegistry",
    "UnsupportedShapeError",
]
