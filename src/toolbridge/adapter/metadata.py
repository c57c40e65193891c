"""Metadata Reader — what a command accepts and how it is documented.

Reads a callable's signature, annotations and documentation into a
:class:`CommandMetadata` value.  Nothing here imports or executes user code
beyond what :mod:`inspect` needs; the callable is expected to be resolved
already (module attribute or script namespace entry).

Documentation sources, first match wins per parameter:

1. ``Annotated[T, "help text"]`` or ``Annotated[T, Field(description=...)]``
2. the ``Args:`` / ``Parameters`` section of the docstring
"""

from __future__ import annotations

import ast
import enum
import inspect
import textwrap
import types
import typing
from dataclasses import dataclass, field
from typing import Any, Union

from toolbridge.adapter.docstrings import parse_docstring
from toolbridge.adapter.errors import CommandNotFoundError, MissingDocumentationError


class SemanticType(str, enum.Enum):
    """Closed set of categories used to pick a zero-value default."""

    INTEGER = "integer"
    TEXT = "text"
    BOOLEAN = "boolean"
    OTHER = "other"


@dataclass(frozen=True)
class StaticDefault:
    """A default whose value is a literal in the command's source."""

    value: Any


@dataclass
class ParameterMetadata:
    """One exposed parameter of a command."""

    name: str
    annotation: Any
    semantic_type: SemanticType
    description: str
    mandatory: bool
    static_default: StaticDefault | None = None


@dataclass
class CommandMetadata:
    """Everything the schema synthesizer needs to describe a command.

    ``shape_count`` is the number of alternate argument shapes (overloads).
    ``shape_problem`` is set when the signature has a shape that cannot be
    expressed as named arguments (variadic or positional-only parameters).
    """

    name: str
    description: str
    parameters: list[ParameterMetadata] = field(default_factory=list)
    shape_count: int = 1
    shape_problem: str = ""


def read_command(
    func: Any,
    name: str | None = None,
    *,
    source: str | None = None,
    doc: str | None = None,
) -> CommandMetadata:
    """Build :class:`CommandMetadata` for *func*.

    *source*, when given, is the full text of the file defining *func*
    (used for script commands); otherwise the source is looked up with
    :func:`inspect.getsource` when available.
    *doc* is used when *func* has no docstring of its own (a script's module
    docstring).

    Raises:
        CommandNotFoundError: *func* is missing or not callable.
        MissingDocumentationError: No description for the command or one of
            its exposed parameters.
    """
    command = name or getattr(func, "__name__", None) or repr(func)
    if func is None or not callable(func):
        raise CommandNotFoundError(command)

    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as exc:
        raise CommandNotFoundError(command, f"cannot read its signature ({exc})") from exc

    docs = parse_docstring(inspect.getdoc(func) or doc)
    if not docs.summary:
        raise MissingDocumentationError(command)

    hints = _type_hints(func)
    static_defaults = _static_defaults(func, source)

    parameters: list[ParameterMetadata] = []
    problems: list[str] = []
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            problems.append(f"variadic parameter '*{param.name}'")
            continue
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            problems.append(f"variadic parameter '**{param.name}'")
            continue
        if param.kind is inspect.Parameter.POSITIONAL_ONLY:
            problems.append(f"positional-only parameter '{param.name}'")
            continue

        annotation = hints.get(param.name, param.annotation)
        if annotation is inspect.Parameter.empty:
            annotation = Any
        base, annotated_help = _split_annotated(annotation)

        description = annotated_help or docs.params.get(param.name, "")
        if not description:
            raise MissingDocumentationError(command, param.name)

        mandatory = param.default is inspect.Parameter.empty
        parameters.append(
            ParameterMetadata(
                name=param.name,
                annotation=base,
                semantic_type=semantic_type_of(base),
                description=description,
                mandatory=mandatory,
                static_default=None if mandatory else static_defaults.get(param.name),
            )
        )

    return CommandMetadata(
        name=command,
        description=docs.summary,
        parameters=parameters,
        shape_count=max(1, len(_overloads(func))),
        shape_problem="; ".join(problems),
    )


def semantic_type_of(annotation: Any) -> SemanticType:
    """Map an annotation to its :class:`SemanticType`.

    ``Optional[T]`` is categorised as ``T``; enums are always ``OTHER``.
    """
    target = _strip_optional(annotation)
    if typing.get_origin(target) is not None or not isinstance(target, type):
        return SemanticType.OTHER
    if issubclass(target, enum.Enum):
        return SemanticType.OTHER
    if issubclass(target, bool):
        return SemanticType.BOOLEAN
    if issubclass(target, int):
        return SemanticType.INTEGER
    if issubclass(target, str):
        return SemanticType.TEXT
    return SemanticType.OTHER


def _strip_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _type_hints(func: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func, include_extras=True)
    except Exception:  # noqa: BLE001
        # Unresolvable forward references: fall back to raw annotations.
        return {}


def _split_annotated(annotation: Any) -> tuple[Any, str]:
    """Return ``(base_type, help_text)`` for an ``Annotated`` hint."""
    if typing.get_origin(annotation) is not typing.Annotated:
        return annotation, ""
    base, *extras = typing.get_args(annotation)
    for extra in extras:
        if isinstance(extra, str) and extra.strip():
            return base, extra.strip()
        description = getattr(extra, "description", None)
        if isinstance(description, str) and description.strip():
            return base, description.strip()
    return base, ""


def _overloads(func: Any) -> list[Any]:
    try:
        return typing.get_overloads(func)
    except AttributeError:
        # Callables without __module__/__qualname__ (partials) have no overloads.
        return []


# ---------------------------------------------------------------------------
# Static default resolution
# ---------------------------------------------------------------------------


def _static_defaults(func: Any, source: str | None) -> dict[str, StaticDefault]:
    """Literal defaults of *func* read from its source, keyed by parameter name."""
    if source is None:
        try:
            source = textwrap.dedent(inspect.getsource(func))
        except (OSError, TypeError):
            return {}
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return {}

    node = _find_function(tree, getattr(func, "__name__", ""))
    if node is None:
        return {}

    args = node.args
    positional = [*args.posonlyargs, *args.args]
    pairs: list[tuple[str, ast.expr | None]] = list(
        zip(
            [a.arg for a in positional[len(positional) - len(args.defaults) :]],
            args.defaults,
        )
    )
    pairs.extend(zip([a.arg for a in args.kwonlyargs], args.kw_defaults))

    defaults: dict[str, StaticDefault] = {}
    for param_name, expr in pairs:
        if expr is None:
            continue
        try:
            defaults[param_name] = StaticDefault(ast.literal_eval(expr))
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
            continue
    return defaults


def _find_function(tree: ast.Module, name: str) -> ast.FunctionDef | ast.AsyncFunctionDef | None:
    func_types = (ast.FunctionDef, ast.AsyncFunctionDef)
    for stmt in reversed(tree.body):
        if isinstance(stmt, func_types) and stmt.name == name:
            return stmt
    for node in ast.walk(tree):
        if isinstance(node, func_types) and node.name == name:
            return node
    return None
