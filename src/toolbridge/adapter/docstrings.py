"""Docstring parsing for command documentation.

Understands the two layouts used across Python code bases:

Google style::

    Args:
        name: The user name.
        count (int): How many times.
            Continuation lines are folded in.

numpy style::

    Parameters
    ----------
    name : str
        The user name.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass, field

_GOOGLE_SECTIONS = ("args", "arguments", "parameters", "params", "keyword args", "kwargs")
_OTHER_GOOGLE_SECTIONS = (
    "returns",
    "return",
    "yields",
    "raises",
    "examples",
    "example",
    "notes",
    "note",
    "usage",
    "attributes",
    "see also",
    "warning",
    "warnings",
    "todo",
)
_GOOGLE_PARAM = re.compile(r"^\*{0,2}(?P<name>\w+)\s*(\([^)]*\))?\s*:\s*(?P<text>.*)$")
_NUMPY_PARAM = re.compile(r"^\*{0,2}(?P<name>\w+)\s*(:.*)?$")
_UNDERLINE = re.compile(r"^-{3,}$")


@dataclass
class Docstring:
    """Parsed documentation: overall description and per-parameter help."""

    summary: str = ""
    params: dict[str, str] = field(default_factory=dict)


def parse_docstring(text: str | None) -> Docstring:
    """Split *text* into a description and a ``{parameter: help}`` map."""
    if not text:
        return Docstring()

    lines = inspect.cleandoc(text).splitlines()
    summary: list[str] = []
    params: dict[str, str] = {}

    i = 0
    in_sections = False
    while i < len(lines):
        line = lines[i]
        stripped = line.strip()
        heading = stripped.rstrip(":").lower()

        # numpy: "Parameters" followed by "----------"
        if i + 1 < len(lines) and _UNDERLINE.match(lines[i + 1].strip()):
            in_sections = True
            if heading in _GOOGLE_SECTIONS:
                i = _parse_numpy_params(lines, i + 2, params)
            else:
                i = _skip_numpy_section(lines, i + 2)
            continue

        if stripped.endswith(":") and line == stripped:
            if heading in _GOOGLE_SECTIONS:
                in_sections = True
                i = _parse_google_params(lines, i + 1, params)
                continue
            if heading in _OTHER_GOOGLE_SECTIONS:
                in_sections = True
                i = _skip_indented(lines, i + 1)
                continue

        if not in_sections:
            summary.append(line)
        i += 1

    return Docstring(summary="\n".join(summary).strip(), params=params)


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _parse_google_params(lines: list[str], start: int, params: dict[str, str]) -> int:
    i = start
    current: str | None = None
    base_indent: int | None = None
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            i += 1
            continue
        indent = _indent(line)
        if indent == 0:
            break
        if base_indent is None:
            base_indent = indent
        if indent == base_indent:
            match = _GOOGLE_PARAM.match(line.strip())
            if match is None:
                current = None
            else:
                current = match.group("name")
                params[current] = match.group("text").strip()
        elif current is not None:
            params[current] = f"{params[current]} {line.strip()}".strip()
        i += 1
    return i


def _parse_numpy_params(lines: list[str], start: int, params: dict[str, str]) -> int:
    i = start
    current: str | None = None
    while i < len(lines):
        line = lines[i]
        if i + 1 < len(lines) and _UNDERLINE.match(lines[i + 1].strip()) and _indent(line) == 0:
            break
        if not line.strip():
            i += 1
            continue
        if _indent(line) == 0:
            match = _NUMPY_PARAM.match(line.strip())
            current = match.group("name") if match else None
            if current is not None:
                params[current] = ""
        elif current is not None:
            params[current] = f"{params[current]} {line.strip()}".strip()
        i += 1
    return i


def _skip_numpy_section(lines: list[str], start: int) -> int:
    i = start
    while i < len(lines):
        if i + 1 < len(lines) and _UNDERLINE.match(lines[i + 1].strip()) and _indent(lines[i]) == 0:
            break
        i += 1
    return i


def _skip_indented(lines: list[str], start: int) -> int:
    i = start
    while i < len(lines) and (not lines[i].strip() or _indent(lines[i]) > 0):
        i += 1
    return i
