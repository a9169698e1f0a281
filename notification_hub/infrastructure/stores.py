"""Adapters exposing the SQL repositories through the dispatcher ports.

Each call opens and closes its own session so concurrent delivery tasks never
share one.
"""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session

from notification_hub.domain.entities import (
    NotificationRecord,
    NotificationStatus,
    UserContact,
)
from notification_hub.infrastructure.repositories import (
    NotificationRepository,
    PushTokenRepository,
    UserRepository,
)

SessionFactory = Callable[[], Session]


class SqlAlchemyRecordStore:
    """Record store backed by :class:`NotificationRepository`."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def create(self, record: NotificationRecord) -> NotificationRecord:
        with self._session_factory() as session:
            return NotificationRepository(session).create_if_absent(record)

    def update_status(
        self,
        idempotency_key: str,
        status: NotificationStatus,
        reason: str | None = None,
    ) -> None:
        with self._session_factory() as session:
            NotificationRepository(session).update_status(idempotency_key, status, reason)


class SqlAlchemyUserContactLookup:
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def get(self, user_id: str) -> UserContact | None:
        with self._session_factory() as session:
            return UserRepository(session).get_contact(user_id)


class SqlAlchemyPushTokenLookup:
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def get(self, user_id: str) -> str | None:
        with self._session_factory() as session:
            return PushTokenRepository(session).get_token(user_id)


__all__ = [
    "SqlAlchemyPushTokenLookup",
    "SqlAlchemyRecordStore",
    "SqlAlchemyUserContactLookup",
]
