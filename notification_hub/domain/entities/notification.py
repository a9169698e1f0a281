"""Domain entity representing one tracked delivery of a notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationChannel(str, Enum):
    """Delivery media every notification is fanned out to."""

    EMAIL = "email"
    SMS = "sms"
    IN_APP = "in_app"
    PUSH = "push"


class NotificationStatus(str, Enum):
    """Lifecycle of a notification record."""

    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not NotificationStatus.PENDING


class NotificationPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


NOTIFICATION_CHANNELS: tuple[NotificationChannel, ...] = (
    NotificationChannel.EMAIL,
    NotificationChannel.SMS,
    NotificationChannel.IN_APP,
    NotificationChannel.PUSH,
)


@dataclass
class NotificationRecord:
    """Message rendered for a single channel and its delivery outcome.

    ``idempotency_key`` is unique per channel and is the only key used to
    deduplicate creation and to address status updates. ``id`` is a storage
    identifier only.
    """

    id: str
    user_id: str
    event: str
    type: str
    channel: NotificationChannel
    title: str
    message: str
    priority: NotificationPriority
    idempotency_key: str
    status: NotificationStatus = NotificationStatus.PENDING
    is_read: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    failure_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "NOTIFICATION_CHANNELS",
    "NotificationChannel",
    "NotificationPriority",
    "NotificationRecord",
    "NotificationStatus",
]
