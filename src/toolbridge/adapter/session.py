"""Session Invoker — one stateful namespace, one pipeline at a time.

An :class:`ExecutionSession` is a namespace dict (a module's ``__dict__`` or
a script's private globals) that persists across calls, plus the single
command pipeline queued against it.  It is never handed out directly:
:class:`SessionGuard` owns it and every access goes through a lock, so a
command's side effects are visible to the next command and two pipelines
never interleave.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, TypeVar

from toolbridge.adapter.errors import (
    CommandFailedError,
    CommandNotFoundError,
    ParameterBindingError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Pipeline:
    command: str
    parameters: dict[str, Any] = field(default_factory=dict)


class ExecutionSession:
    """Interpreter state shared by every command resolved from *namespace*."""

    def __init__(self, namespace: dict[str, Any], *, name: str = "") -> None:
        self._namespace = namespace
        self._name = name or str(namespace.get("__name__", "session"))
        self._pipeline: _Pipeline | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def has_pending(self) -> bool:
        return self._pipeline is not None

    def resolve(self, command: str) -> Callable[..., Any]:
        """Look up *command* in the namespace; raise if it is not callable."""
        func = self._namespace.get(command)
        if func is None or not callable(func):
            raise CommandNotFoundError(command)
        return func

    def add_command(self, command: str) -> None:
        if self._pipeline is not None:
            msg = f"A command is already queued on session '{self._name}'"
            raise RuntimeError(msg)
        self._pipeline = _Pipeline(command)

    def add_parameter(self, name: str, value: Any) -> None:
        if self._pipeline is None:
            msg = "No command queued"
            raise RuntimeError(msg)
        self._pipeline.parameters[name] = value

    def clear(self) -> None:
        """Drop any queued command."""
        self._pipeline = None

    async def execute(self) -> list[Any]:
        """Run the queued command and return its results in order.

        Awaitable results are awaited and iterables are drained here, so a
        failure part-way through discards everything produced so far.
        """
        if self._pipeline is None:
            msg = "No command queued"
            raise RuntimeError(msg)
        pipeline = self._pipeline
        func = self.resolve(pipeline.command)

        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            signature = None
        if signature is not None:
            try:
                signature.bind(**pipeline.parameters)
            except TypeError as exc:
                raise ParameterBindingError(pipeline.command, None, str(exc)) from exc

        try:
            value = func(**pipeline.parameters)
            if inspect.isawaitable(value):
                value = await value
            if inspect.isasyncgen(value):
                return [item async for item in value]
            return list(_unroll(value))
        except (Exception, SystemExit) as exc:
            raise CommandFailedError(pipeline.command, f"{type(exc).__name__}: {exc}") from exc


def _unroll(value: Any) -> Iterator[Any]:
    """Flatten a return value into the result sequence.

    ``None`` is no output; lists, tuples, generators and other iterators are
    their items; strings, bytes, mappings and everything else are one item.
    """
    if value is None:
        return
    if isinstance(value, (list, tuple, Iterator)):
        yield from value
        return
    yield value


class SessionGuard:
    """Exclusive owner of an :class:`ExecutionSession`.

    The raw session is never exposed; :meth:`invoke` holds the session lock
    for binding, execution and marshalling.  Calls on different guards run
    independently.
    """

    def __init__(self, session: ExecutionSession) -> None:
        self._session = session
        self._lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return self._session.name

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    async def invoke(
        self,
        command: str,
        arguments: dict[str, Any] | None = None,
        marshal: Callable[[list[Any]], T] | None = None,
    ) -> Any:
        """Bind *arguments* by name, run *command* and return its results.

        When *marshal* is given it is applied to the results before the lock
        is released, and its return value is returned instead.

        Raises:
            CommandNotFoundError: *command* does not resolve in the session.
            ParameterBindingError: The arguments do not fit the signature.
            CommandFailedError: The command raised.
        """
        async with self._lock:
            self._session.clear()
            try:
                self._session.add_command(command)
                for name, value in (arguments or {}).items():
                    self._session.add_parameter(name, value)
                logger.debug("Invoking %s on session %s", command, self._session.name)
                results = await self._session.execute()
            finally:
                self._session.clear()
            return results if marshal is None else marshal(results)

