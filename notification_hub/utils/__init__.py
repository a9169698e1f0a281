"""Utility helpers for reusable functionality."""

from .datetime import (
    epoch_millis,
    from_storage_datetime,
    get_app_timezone,
    now_in_app_timezone,
    to_storage_datetime,
)
from .serialization import stringify_value, to_json_compatible

__all__ = [
    "epoch_millis",
    "from_storage_datetime",
    "get_app_timezone",
    "now_in_app_timezone",
    "stringify_value",
    "to_json_compatible",
    "to_storage_datetime",
]
