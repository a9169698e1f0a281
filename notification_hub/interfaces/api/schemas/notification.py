"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from notification_hub.domain.entities import (
    NotificationChannel,
    NotificationPriority,
    NotificationStatus,
)


class SendNotificationRequest(BaseModel):
    """Payload used to fan an event out to every channel of a user."""

    user_id: str = Field(..., min_length=1, max_length=64)
    event: str = Field(..., min_length=1, max_length=100)
    payload: dict[str, Any] = Field(default_factory=dict)
    idempotency_key: str | None = Field(
        default=None,
        min_length=1,
        max_length=200,
        description="Caller supplied key; repeated dispatches with the same key send once",
    )


class NotificationAccepted(BaseModel):
    status: str = "accepted"


class NotificationRecordRead(BaseModel):
    """Representation of one channel record delivered to the client."""

    id: str
    user_id: str
    event: str
    type: str
    channel: NotificationChannel
    title: str
    message: str
    priority: NotificationPriority
    status: NotificationStatus
    failure_reason: str | None = None
    is_read: bool
    idempotency_key: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["NotificationAccepted", "NotificationRecordRead", "SendNotificationRequest"]
