"""Schema Synthesizer — turns :class:`CommandMetadata` into a tool descriptor.

The input schema is a JSON-Schema object with one property per parameter,
``required`` listing exactly the mandatory ones, and
``additionalProperties: false``.

Optional parameters advertise a ``default``.  It is documentation only:
the command is always called without the argument when the client omits it,
so the command's own default applies.  The advertised value is picked by the
first matching rule:

1. a literal default in the command's source
2. ``0`` for integer parameters
3. ``""`` for text parameters
4. the default-constructed value of the annotation (``False``, ``[]``, ...)
"""

from __future__ import annotations

import enum
import re
import typing
from typing import Any, Literal

from pydantic import BaseModel, TypeAdapter
from pydantic_core import to_jsonable_python

from toolbridge.adapter.errors import UnsupportedShapeError
from toolbridge.adapter.metadata import CommandMetadata, ParameterMetadata, SemanticType
from toolbridge.protocols.mcp.models import ToolDescriptor

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_]")


def tool_name(command_name: str) -> str:
    """Normalize a command name to a protocol-safe tool name.

    >>> tool_name("Get-Greeting")
    'Get_Greeting'
    """
    return _UNSAFE_NAME_CHARS.sub("_", command_name)


def synthesize(metadata: CommandMetadata, *, name: str | None = None) -> ToolDescriptor:
    """Build the :class:`ToolDescriptor` for *metadata*.

    Raises:
        UnsupportedShapeError: The command has more than one argument shape,
            or two parameter types need different schemas under one name.
    """
    if metadata.shape_count > 1:
        raise UnsupportedShapeError(
            metadata.name, f"{metadata.shape_count} overloaded signatures"
        )
    if metadata.shape_problem:
        raise UnsupportedShapeError(metadata.name, metadata.shape_problem)

    properties: dict[str, Any] = {}
    required: list[str] = []
    definitions: dict[str, Any] = {}

    for param in metadata.parameters:
        schema = parameter_schema(param)
        for def_name, definition in schema.pop("$defs", {}).items():
            if definitions.setdefault(def_name, definition) != definition:
                raise UnsupportedShapeError(
                    metadata.name, f"different parameter types share the schema name '{def_name}'"
                )
        properties[param.name] = schema
        if param.mandatory:
            required.append(param.name)

    input_schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }
    if required:
        input_schema["required"] = required
    if definitions:
        input_schema["$defs"] = definitions

    return ToolDescriptor(
        name=name or tool_name(metadata.name),
        description=metadata.description,
        input_schema=input_schema,
    )


def parameter_schema(param: ParameterMetadata) -> dict[str, Any]:
    """JSON schema for one parameter: type, description and advertised default."""
    schema = json_schema_for(param.annotation)
    schema.pop("title", None)
    schema["description"] = param.description
    if not param.mandatory:
        schema["default"] = resolve_default(param)
    return schema


def json_schema_for(annotation: Any) -> dict[str, Any]:
    """Canonical JSON schema of *annotation*; ``{}`` (any value) when it has none."""
    if annotation is Any:
        return {}
    try:
        return TypeAdapter(annotation).json_schema()
    except Exception:  # noqa: BLE001
        # Arbitrary classes have no JSON schema; accept any value.
        return {}


def resolve_default(param: ParameterMetadata) -> Any:
    """The default advertised for an optional parameter."""
    if param.static_default is not None:
        return _jsonable(param.static_default.value)
    if param.semantic_type is SemanticType.INTEGER:
        return 0
    if param.semantic_type is SemanticType.TEXT:
        return ""
    if param.semantic_type is SemanticType.BOOLEAN:
        return False
    return _jsonable(zero_value(param.annotation))


def zero_value(annotation: Any) -> Any:
    """Default-constructed value of *annotation*, or ``None`` when it has none."""
    origin = typing.get_origin(annotation)
    if origin is Literal:
        return typing.get_args(annotation)[0]
    if origin is not None:
        # Unions (Optional[...]) default to None; generics construct their origin.
        annotation = origin if isinstance(origin, type) else None
    if not isinstance(annotation, type):
        return None
    if issubclass(annotation, enum.Enum):
        first = next(iter(annotation), None)
        return first.name if first is not None else None
    if issubclass(annotation, BaseModel):
        try:
            return annotation().model_dump(mode="json")
        except Exception:  # noqa: BLE001
            return None
    try:
        return annotation()
    except Exception:  # noqa: BLE001
        return None


def _jsonable(value: Any) -> Any:
    try:
        return to_jsonable_python(value)
    except Exception:  # noqa: BLE001
        return None
