"""Endpoints to dispatch notifications and inspect their delivery status."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from notification_hub.application.use_cases.notifications import (
    InvalidEventError,
    NotificationDispatcher,
    RecordCreationError,
)
from notification_hub.domain.entities import NotificationRecord
from notification_hub.infrastructure.repositories import NotificationRepository
from notification_hub.interfaces.api.dependencies import get_db, get_dispatcher
from notification_hub.interfaces.api.schemas import (
    NotificationAccepted,
    NotificationRecordRead,
    SendNotificationRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _record_to_schema(record: NotificationRecord) -> NotificationRecordRead:
    return NotificationRecordRead(
        id=record.id,
        user_id=record.user_id,
        event=record.event,
        type=record.type,
        channel=record.channel,
        title=record.title,
        message=record.message,
        priority=record.priority,
        status=record.status,
        failure_reason=record.failure_reason,
        is_read=record.is_read,
        idempotency_key=record.idempotency_key,
        metadata=record.metadata or {},
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.post(
    "/",
    response_model=NotificationAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
async def send_notification(
    notification: SendNotificationRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> NotificationAccepted:
    """Record the notification on every channel and start delivering it."""

    try:
        await dispatcher.dispatch(
            notification.user_id,
            notification.event,
            notification.payload,
            notification.idempotency_key,
        )
    except InvalidEventError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RecordCreationError as exc:
        logger.error(
            "Dispatch of %s for %s aborted: %s", notification.event, notification.user_id, exc
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification records could not be stored",
        ) from exc
    return NotificationAccepted()


@router.get("/users/{user_id}", response_model=list[NotificationRecordRead])
def list_user_notifications(
    user_id: str,
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
) -> list[NotificationRecordRead]:
    """Return the most recent channel records of ``user_id``."""

    records = NotificationRepository(db).list_for_user(user_id, limit=limit)
    return [_record_to_schema(record) for record in records]


@router.get("/records/{idempotency_key}", response_model=NotificationRecordRead)
def get_notification_record(
    idempotency_key: str,
    db: Session = Depends(get_db),
) -> NotificationRecordRead:
    """Return the channel record addressed by ``idempotency_key``."""

    record = NotificationRepository(db).get_by_idempotency_key(idempotency_key)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification record not found",
        )
    return _record_to_schema(record)
