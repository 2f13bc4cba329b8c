"""
Shared helpers for IncidentFlow data models.

This module provides identifier generation, timestamp helpers and the
serialization functions used by every entity's ``to_dict``/``to_json``.
Entities are plain dataclasses; they do not share a common base class
because their identifier spaces differ (integer incidents, string tasks).
"""

import json
import os
import time
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from incidentflow.exceptions import IdentifierError

# Bit layout of a version 7 UUID (RFC 9562).
_UUID7_TIMESTAMP_MASK = (1 << 48) - 1
_UUID7_VERSION_MASK = 0xF << 76
_UUID7_VARIANT_MASK = 0x3 << 62


def generate_uuid() -> str:
    """Generate a new random UUID4 string."""
    return str(uuid.uuid4())


def generate_uuid7() -> str:
    """
    Generate a time-ordered UUID7 string.

    The first 48 bits hold the Unix time in milliseconds so IDs sort
    approximately by creation time; the remaining bits come from the
    operating system entropy source.

    Returns:
        Canonical UUID string with version 7 and RFC 4122 variant bits.

    Raises:
        IdentifierError: If no entropy source is available.
    """
    try:
        random_bits = int.from_bytes(os.urandom(10), "big")
    except NotImplementedError as e:
        raise IdentifierError(
            "entropy source unavailable for time-ordered ID",
            details={"generator": "uuid7"},
        ) from e

    timestamp_ms = time.time_ns() // 1_000_000
    value = ((timestamp_ms & _UUID7_TIMESTAMP_MASK) << 80) | random_bits
    value = (value & ~_UUID7_VERSION_MASK) | (0x7 << 76)
    value = (value & ~_UUID7_VARIANT_MASK) | (0x2 << 62)
    return str(uuid.UUID(int=value))


def utc_now() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def serialize_value(value: Any, exclude_none: bool = False) -> Any:
    """
    Serialize a single value to a JSON-compatible type.

    Args:
        value: Value to serialize.
        exclude_none: If True, exclude None values in nested dicts/lists.

    Returns:
        JSON-compatible representation of the value.
    """
    if isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, dict):
        result = {}
        for k, v in value.items():
            if exclude_none and v is None:
                continue
            result[k] = serialize_value(v, exclude_none)
        return result
    elif isinstance(value, (list, tuple)):
        return [serialize_value(item, exclude_none) for item in value]
    elif hasattr(value, "to_dict"):
        return value.to_dict(exclude_none)
    elif hasattr(value, "value"):
        # Handle enums
        return value.value
    return value


def model_to_dict(instance: Any, exclude_none: bool = False) -> dict[str, Any]:
    """
    Convert a dataclass instance to a dictionary.

    Args:
        instance: A dataclass instance to convert.
        exclude_none: If True, exclude keys with None values from the output.

    Returns:
        A dictionary representation of the instance with all fields serialized
        to JSON-compatible types.
    """
    result = asdict(instance)
    return {
        k: serialize_value(v, exclude_none)
        for k, v in result.items()
        if not (exclude_none and v is None)
    }


def model_to_json(
    instance: Any, indent: int | None = None, exclude_none: bool = False
) -> str:
    """
    Convert a dataclass instance to a JSON string.

    Args:
        instance: A dataclass instance to convert.
        indent: Number of spaces for indentation. If None, output is compact.
        exclude_none: If True, exclude keys with None values from the output.

    Returns:
        A JSON string representation of the instance.
    """
    return json.dumps(model_to_dict(instance, exclude_none), indent=indent)
