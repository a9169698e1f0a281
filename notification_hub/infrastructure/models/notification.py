"""SQLAlchemy model for persisted notification records."""

from sqlalchemy import Boolean, Column, DateTime, JSON, String, Text
from sqlalchemy.sql import expression

from notification_hub.infrastructure.database import Base


class NotificationRecordModel(Base):
    """Database representation of one channel delivery of a notification."""

    __tablename__ = "notification_record"

    id = Column(String(32), primary_key=True)
    idempotency_key = Column(String(255), nullable=False, unique=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    event = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)
    channel = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False, default="")
    message = Column(Text, nullable=False)
    priority = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, index=True)
    failure_reason = Column(Text, nullable=True)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    metadata_json = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False)
    updated_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationRecordModel"]
