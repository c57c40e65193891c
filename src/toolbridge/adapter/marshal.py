"""Result Marshaller — command results to ``tools/call`` content.

A single plain string is returned verbatim.  Anything else is serialized
with :func:`to_json`: compact, enums as their names, and objects
nested more than 5 levels below a result rendered with ``str()``.
"""

from __future__ import annotations

import base64
import dataclasses
import datetime
import enum
import json
import logging
import math
from collections.abc import Iterable, Mapping
from decimal import Decimal
from pathlib import PurePath
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from toolbridge.adapter.errors import SerializationError
from toolbridge.protocols.mcp.models import CallOutcome

logger = logging.getLogger(__name__)

JSON_DEPTH = 5


def marshal(results: list[Any]) -> CallOutcome:
    """Convert a command's result sequence into a :class:`CallOutcome`.

    A serialization failure yields an error outcome carrying the failure text.
    """
    if not results:
        return CallOutcome.empty()

    if len(results) == 1 and _is_plain_text(results[0]):
        return CallOutcome.from_text(results[0])

    try:
        if len(results) == 1:
            text = to_json(results[0])
        else:
            # The results array itself does not count against the depth limit.
            text = to_json(results, depth=JSON_DEPTH + 1)
    except SerializationError as exc:
        logger.info("Result serialization failed: %s", exc)
        return CallOutcome.from_text(str(exc), is_error=True)
    return CallOutcome.from_text(text)


def to_json(value: Any, *, depth: int = JSON_DEPTH) -> str:
    """Serialize *value* to compact JSON.

    Raises:
        SerializationError: *value* cannot be converted.
    """
    try:
        return json.dumps(
            to_jsonable(value, depth=depth),
            separators=(",", ":"),
            ensure_ascii=False,
        )
    except SerializationError:
        raise
    except Exception as exc:  # noqa: BLE001
        # Properties and __iter__ of user objects run arbitrary code.
        raise SerializationError(str(exc)) from exc


def to_jsonable(value: Any, *, depth: int = JSON_DEPTH) -> Any:
    """Convert *value* into plain JSON data.

    Containers up to *depth* levels below *value* are expanded; anything
    deeper is rendered with ``str()``.
    """
    if isinstance(value, enum.Enum):
        return value.name
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return value.total_seconds()
    if isinstance(value, (Decimal, UUID, PurePath, complex)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")

    if depth < 0:
        return _as_text(value)

    if isinstance(value, BaseModel):
        value = {name: getattr(value, name) for name in type(value).model_fields}
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}

    if isinstance(value, Mapping):
        return {_key(k): to_jsonable(v, depth=depth - 1) for k, v in value.items()}
    if isinstance(value, Iterable):
        return [to_jsonable(item, depth=depth - 1) for item in value]
    attrs = getattr(value, "__dict__", None)
    if isinstance(attrs, dict):
        return {
            k: to_jsonable(v, depth=depth - 1) for k, v in attrs.items() if not k.startswith("_")
        }
    return _as_text(value)


def _key(key: Any) -> str:
    return key.name if isinstance(key, enum.Enum) else str(key)


def _is_plain_text(value: Any) -> bool:
    return isinstance(value, str) and not isinstance(value, enum.Enum)


def _as_text(value: Any) -> str:
    try:
        return str(value)
    except Exception as exc:
        raise SerializationError(f"{type(value).__name__} cannot be rendered: {exc}") from exc
