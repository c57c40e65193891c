"""Help lookups for Python commands, exposed as tools.

Registered through the module variant like any other module, so both tools
share this module's session.
"""

from __future__ import annotations

import inspect
import pydoc
from typing import Annotated, Any

from toolbridge.adapter.docstrings import parse_docstring

__all__ = ["get_help_for_command", "get_help_for_parameter"]

_COMMAND_ERROR = """\
Failed to retrieve the help content due to the following error:
```
{0}
```
Check to see if it's caused by the passed-in command name, and if so, please try again."""

_PARAMETER_ERROR = """\
Failed to retrieve the help content due to the following error:
```
{0}
```
Check to see if it's caused by the passed-in command name or parameter name(s), and if so, please try again."""


def get_help_for_command(
    command: Annotated[str, "The dotted name of a Python function, class or module to get help for."],
) -> str:
    """Get help content for a Python command."""
    try:
        target = _locate(command)
        return pydoc.render_doc(target, title="Help on %s", renderer=pydoc.plaintext)
    except Exception as exc:  # noqa: BLE001
        return _COMMAND_ERROR.format(exc)


def get_help_for_parameter(
    command: Annotated[str, "The dotted name of a Python function."],
    parameters: Annotated[list[str], "The names of one or more parameters of the specified function."],
) -> str:
    """Get help content about one or more parameters of a Python function."""
    try:
        target = _locate(command)
        signature = inspect.signature(target)
        docs = parse_docstring(inspect.getdoc(target))
        sections: list[str] = []
        for name in parameters:
            param = signature.parameters.get(name)
            if param is None:
                msg = f"The command '{command}' has no parameter named '{name}'"
                raise LookupError(msg)
            sections.append(_describe(param, docs.params.get(name, "")))
        return "\n\n".join(sections)
    except Exception as exc:  # noqa: BLE001
        return _PARAMETER_ERROR.format(exc)


def _locate(command: str) -> Any:
    target = pydoc.locate(command)
    if target is None:
        msg = f"No Python object named '{command}' was found"
        raise LookupError(msg)
    return target


def _describe(param: inspect.Parameter, description: str) -> str:
    annotation = param.annotation
    if annotation is inspect.Parameter.empty:
        type_name = "Any"
    elif isinstance(annotation, type):
        type_name = annotation.__name__
    else:
        type_name = str(annotation)

    lines = [f"-{param.name} <{type_name}>"]
    if description:
        lines.append(f"    {description}")
    lines.append("")
    lines.append(f"    Required?      {str(param.default is inspect.Parameter.empty).lower()}")
    if param.default is not inspect.Parameter.empty:
        lines.append(f"    Default value  {param.default!r}")
    return "\n".join(lines)
