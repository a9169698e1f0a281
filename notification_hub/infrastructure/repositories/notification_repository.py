"""Persistence helpers for notification records."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notification_hub.domain.entities import (
    NotificationChannel,
    NotificationPriority,
    NotificationRecord,
    NotificationStatus,
)
from notification_hub.infrastructure.models import NotificationRecordModel
from notification_hub.utils import (
    from_storage_datetime,
    now_in_app_timezone,
    to_json_compatible,
    to_storage_datetime,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`NotificationRecord` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int | None = 50,
    ) -> Sequence[NotificationRecord]:
        query = self.session.query(NotificationRecordModel)
        query = query.filter(NotificationRecordModel.user_id == user_id)
        query = query.order_by(
            NotificationRecordModel.created_at.desc(),
            NotificationRecordModel.channel.asc(),
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get_by_idempotency_key(self, idempotency_key: str) -> NotificationRecord | None:
        model = self._get_model(idempotency_key)
        return self._to_entity(model) if model else None

    def create_if_absent(self, record: NotificationRecord) -> NotificationRecord:
        """Insert ``record`` unless its idempotency key is already stored.

        The stored record is returned in both cases, so callers can tell a
        duplicate apart by comparing identifiers.
        """

        existing = self._get_model(record.idempotency_key)
        if existing is not None:
            return self._to_entity(existing)

        model = NotificationRecordModel()
        self._apply_entity_to_model(model, record)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            existing = self._get_model(record.idempotency_key)
            if existing is None:
                raise
            return self._to_entity(existing)
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(
        self,
        idempotency_key: str,
        status: NotificationStatus,
        reason: str | None = None,
    ) -> NotificationRecord:
        model = self._get_model(idempotency_key)
        if model is None:
            msg = f"Notification with idempotency key {idempotency_key} not found"
            raise ValueError(msg)
        model.status = NotificationStatus(status).value
        model.failure_reason = reason if status is NotificationStatus.FAILED else None
        model.updated_at = to_storage_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, idempotency_key: str) -> NotificationRecordModel | None:
        return (
            self.session.query(NotificationRecordModel)
            .filter(NotificationRecordModel.idempotency_key == idempotency_key)
            .one_or_none()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationRecordModel, record: NotificationRecord
    ) -> None:
        model.id = record.id
        model.idempotency_key = record.idempotency_key
        model.user_id = record.user_id
        model.event = record.event
        model.type = record.type
        model.channel = record.channel.value
        model.title = record.title
        model.message = record.message
        model.priority = record.priority.value
        model.status = record.status.value
        model.failure_reason = record.failure_reason
        model.is_read = record.is_read
        model.metadata_json = to_json_compatible(record.metadata)
        model.created_at = to_storage_datetime(
            record.created_at or now_in_app_timezone()
        )
        model.updated_at = to_storage_datetime(record.updated_at)

    @staticmethod
    def _to_entity(model: NotificationRecordModel) -> NotificationRecord:
        return NotificationRecord(
            id=model.id,
            user_id=model.user_id,
            event=model.event,
            type=model.type,
            channel=NotificationChannel(model.channel),
            title=model.title,
            message=model.message,
            priority=NotificationPriority(model.priority),
            idempotency_key=model.idempotency_key,
            status=NotificationStatus(model.status),
            is_read=bool(model.is_read),
            metadata=dict(model.metadata_json or {}),
            failure_reason=model.failure_reason,
            created_at=from_storage_datetime(model.created_at),
            updated_at=from_storage_datetime(model.updated_at),
        )


__all__ = ["NotificationRepository"]
