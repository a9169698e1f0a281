"""SQLAlchemy models for user contact details and push tokens."""

from sqlalchemy import Column, DateTime, String, func

from notification_hub.infrastructure.database import Base


class UserModel(Base):
    """Contact addresses of a notification recipient."""

    __tablename__ = "user"

    id = Column(String(64), primary_key=True)
    email = Column(String(120), nullable=True)
    phone_number = Column(String(32), nullable=True)
    fcm_token = Column(String(255), nullable=True)


class UserTokenModel(Base):
    """Push token registered by a device outside the user profile."""

    __tablename__ = "user_token"

    user_id = Column(String(64), primary_key=True)
    token = Column(String(255), nullable=True)
    updated_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel", "UserTokenModel"]
