"""Aggregate application use cases."""

from .notifications import InvalidEventError, NotificationDispatcher, TemplateResolver

__all__ = [
    "InvalidEventError",
    "NotificationDispatcher",
    "TemplateResolver",
]
