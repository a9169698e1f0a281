from .notification import (
    NotificationAccepted,
    NotificationRecordRead,
    SendNotificationRequest,
)

__all__ = [
    "NotificationAccepted",
    "NotificationRecordRead",
    "SendNotificationRequest",
]
