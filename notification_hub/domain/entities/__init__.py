"""Domain entities exposed by the application."""

from .event_config import EVENT_CONFIGS, EventConfig, get_event_config
from .notification import (
    NOTIFICATION_CHANNELS,
    NotificationChannel,
    NotificationPriority,
    NotificationRecord,
    NotificationStatus,
)
from .template import Payload, PayloadValue, Template, TemplateSet
from .user import UserContact

__all__ = [
    "EVENT_CONFIGS",
    "EventConfig",
    "get_event_config",
    "NOTIFICATION_CHANNELS",
    "NotificationChannel",
    "NotificationPriority",
    "NotificationRecord",
    "NotificationStatus",
    "Payload",
    "PayloadValue",
    "Template",
    "TemplateSet",
    "UserContact",
]
