"""Domain entity representing the contact details of a user."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserContact:
    """Addresses a notification can be delivered to."""

    id: str
    email: str | None = None
    phone_number: str | None = None
    fcm_token: str | None = None


__all__ = ["UserContact"]
