"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository
from .push_token_repository import PushTokenRepository
from .user_repository import UserRepository

__all__ = [
    "NotificationRepository",
    "PushTokenRepository",
    "UserRepository",
]
