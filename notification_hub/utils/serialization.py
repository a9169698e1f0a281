"""Canonical conversions for notification payload values."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any


def stringify_value(value: Any) -> str:
    """Return the canonical string form of a payload value.

    Booleans become ``true``/``false``, integral floats drop the trailing
    ``.0``, temporal values use ISO 8601, ``None`` becomes an empty string and
    mappings or sequences are rendered as compact JSON.
    """

    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, (int, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if _is_container(value):
        return json.dumps(to_json_compatible(value), separators=(",", ":"), ensure_ascii=False)
    return str(value)


def to_json_compatible(value: Any) -> Any:
    """Return ``value`` with every nested leaf converted to a JSON type.

    Leaves JSON already understands are kept; the rest use
    :func:`stringify_value`.
    """

    if isinstance(value, Mapping):
        return {str(key): to_json_compatible(item) for key, item in value.items()}
    if _is_container(value):
        return [to_json_compatible(item) for item in value]
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    return stringify_value(value)


def _is_container(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


__all__ = ["stringify_value", "to_json_compatible"]
