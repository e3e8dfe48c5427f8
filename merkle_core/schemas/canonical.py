"""
Schemas - Canonicalization
File: canonical.py

Purpose: Deterministic serialization of leaf values before hashing.

Python's built-in hash() is salted per process for str and bytes, so leaf
digests are never derived from it. Every leaf value is first rendered to a
canonical JSON string, and the UTF-8 bytes of that string are hashed.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

import dataclasses
import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC; aware ones are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 with Z suffix for UTC.

    Returns:
        ISO-8601 formatted string (e.g., "2026-01-27T21:35:00Z").
    """
    utc_dt = ensure_utc(dt)
    if utc_dt.microsecond == 0:
        return utc_dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _validate_float(value: float, path: str = "") -> None:
    """Reject NaN and Infinity, which have no canonical JSON form."""
    if not math.isfinite(value):
        raise CanonicalizationException(
            message=f"Non-finite float value encountered: {value}",
            details={"path": path, "value": str(value)},
        )


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any supported Python value.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value (or something nested in it)
            has no deterministic representation.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        # Must check bool before int since bool is subclass of int
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        _validate_float(value, path)
        return value

    if isinstance(value, str):
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, Enum):
        return canonicalize_value(value.value, path)

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True)
        return canonicalize_value(dumped, path)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return canonicalize_value(dataclasses.asdict(value), path)

    if isinstance(value, dict):
        return _canonicalize_mapping(value, path)

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, (set, frozenset)):
        # Sets have no order of their own; order by canonical encoding
        items = [canonicalize_value(item, f"{path}{{}}") for item in value]
        return sorted(
            items,
            key=lambda item: json.dumps(
                item, sort_keys=True, separators=CANONICAL_JSON_SEPARATORS
            ),
        )

    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def _canonicalize_mapping(value: dict, path: str) -> dict[str, Any]:
    """
    Canonicalize a mapping with string keys.

    None values are kept, so {"a": None} and {} encode differently.
    Non-string keys are rejected: JSON would turn 1 and "1" into the
    same key.
    """
    result: dict[str, Any] = {}
    for k, v in value.items():
        if isinstance(k, Enum):
            k = k.value
        if not isinstance(k, str):
            raise CanonicalizationException(
                message=f"Mapping keys must be strings, got {type(k).__name__}",
                details={"path": path, "key": repr(k)},
            )
        key = str(k)
        if key in result:
            raise CanonicalizationException(
                message=f"Duplicate mapping key after canonicalization: {key!r}",
                details={"path": path, "key": key},
            )
        # Keys are sorted during JSON serialization
        result[key] = canonicalize_value(v, f"{path}.{key}" if path else key)
    return result


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to canonical JSON string.

    The output has sorted keys, no extra whitespace, None values kept as
    null, datetimes as ISO-8601 with Z suffix, enums as their values,
    bytes as lowercase hex and no NaN/Infinity floats. Mapping keys must
    be strings.

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> dumps_canonical({"b": 2, "a": 1})
        '{"a":1,"b":2}'
        >>> dumps_canonical(7)
        '7'
    """
    try:
        canonicalized = canonicalize_value(obj)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def encode_leaf_value(value: Any) -> bytes:
    """
    Return the bytes that get hashed for a leaf value.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized,
            or its text is not valid UTF-8 (e.g. a lone surrogate)
    """
    text = dumps_canonical(value)
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CanonicalizationException(
            message=f"Leaf text is not encodable as UTF-8: {e.reason}",
            details={"type": type(value).__name__, "position": e.start},
        ) from e
