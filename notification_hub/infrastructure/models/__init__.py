"""ORM models used by the application infrastructure."""

from .notification import NotificationRecordModel
from .user import UserModel, UserTokenModel

__all__ = [
    "NotificationRecordModel",
    "UserModel",
    "UserTokenModel",
]
