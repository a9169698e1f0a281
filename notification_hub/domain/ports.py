"""Capabilities the dispatch engine consumes from its collaborators.

Every port is synchronous; the dispatcher runs the calls in worker threads.
"""

from __future__ import annotations

from typing import Mapping, Protocol

from notification_hub.domain.entities import (
    NotificationRecord,
    NotificationStatus,
    TemplateSet,
    UserContact,
)


class UserContactLookup(Protocol):
    def get(self, user_id: str) -> UserContact | None: ...


class PushTokenLookup(Protocol):
    def get(self, user_id: str) -> str | None: ...


class EmailTransport(Protocol):
    def send(self, address: str, body: str, subject: str) -> bool:
        """Return ``True`` when the provider accepted the message."""


class SmsTransport(Protocol):
    def send(self, phone_number: str, body: str) -> bool:
        """Return ``True`` when the provider accepted the message."""


class PushTransport(Protocol):
    def send(self, token: str, title: str, body: str, data: Mapping[str, str]) -> None:
        """Deliver a push message, raising on any failure."""


class RecordStore(Protocol):
    def create(self, record: NotificationRecord) -> NotificationRecord:
        """Store ``record`` unless its idempotency key exists.

        Returns the stored record, which is the pre-existing one when the key
        was already taken.
        """

    def update_status(
        self,
        idempotency_key: str,
        status: NotificationStatus,
        reason: str | None = None,
    ) -> None: ...


class TemplateSource(Protocol):
    def lookup(self, event: str) -> TemplateSet | None: ...


__all__ = [
    "EmailTransport",
    "PushTokenLookup",
    "PushTransport",
    "RecordStore",
    "SmsTransport",
    "TemplateSource",
    "UserContactLookup",
]
