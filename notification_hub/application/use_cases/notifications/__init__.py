"""Public helpers for fanning out notifications."""

from .dispatch import (
    CREATION_INCOMPLETE_REASON,
    DEFAULT_PUSH_TITLE,
    NO_EMAIL_REASON,
    NO_PHONE_REASON,
    NO_PUSH_TOKEN_REASON,
    NotificationDispatcher,
    build_idempotency_key,
)
from .errors import InvalidEventError, NotificationError, RecordCreationError
from .templates import (
    DEFAULT_TEMPLATE_SET,
    TemplateResolver,
    render_template,
    stringify_value,
)

__all__ = [
    "CREATION_INCOMPLETE_REASON",
    "DEFAULT_PUSH_TITLE",
    "NO_EMAIL_REASON",
    "NO_PHONE_REASON",
    "NO_PUSH_TOKEN_REASON",
    "NotificationDispatcher",
    "build_idempotency_key",
    "InvalidEventError",
    "NotificationError",
    "RecordCreationError",
    "DEFAULT_TEMPLATE_SET",
    "TemplateResolver",
    "render_template",
    "stringify_value",
]
