"""Static classification of the events that may trigger a notification."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .notification import NotificationPriority


@dataclass(frozen=True)
class EventConfig:
    """Notification type and priority attached to every record of an event."""

    type: str
    priority: NotificationPriority


EVENT_CONFIGS: Mapping[str, EventConfig] = MappingProxyType(
    {
        "order_placed": EventConfig(type="order", priority=NotificationPriority.NORMAL),
        "order_shipped": EventConfig(type="order", priority=NotificationPriority.NORMAL),
        "order_delivered": EventConfig(type="order", priority=NotificationPriority.LOW),
        "payment_failed": EventConfig(type="payment", priority=NotificationPriority.HIGH),
        "password_reset": EventConfig(type="security", priority=NotificationPriority.URGENT),
        "welcome": EventConfig(type="account", priority=NotificationPriority.LOW),
    }
)


def get_event_config(event: str) -> EventConfig | None:
    """Return the configuration registered for ``event`` if any."""

    return EVENT_CONFIGS.get(event)


__all__ = ["EVENT_CONFIGS", "EventConfig", "get_event_config"]
