"""Errors surfaced synchronously by the dispatch engine."""

from __future__ import annotations

from collections.abc import Mapping

from notification_hub.domain.entities import NotificationChannel


class NotificationError(Exception):
    """Base class for dispatch failures visible to the caller."""


class InvalidEventError(NotificationError):
    """Raised when the event has no registered configuration."""

    def __init__(self, event: str) -> None:
        self.event = event
        super().__init__(f"Invalid event type: {event}")


class RecordCreationError(NotificationError):
    """Raised when one or more channel records could not be stored.

    No delivery is attempted for the dispatch. Records stored before the
    failure stay ``pending``.
    """

    def __init__(self, failures: Mapping[NotificationChannel, BaseException]) -> None:
        self.failures = dict(failures)
        channels = ", ".join(channel.value for channel in self.failures)
        super().__init__(f"Failed to create notification records for: {channels}")


__all__ = ["InvalidEventError", "NotificationError", "RecordCreationError"]
