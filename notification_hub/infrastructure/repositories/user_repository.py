"""Persistence layer for user contact data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notification_hub.domain.entities import UserContact
from notification_hub.infrastructure.models import UserModel


class UserRepository:
    """Read and register the contact details of notification recipients."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_contact(self, user_id: str) -> UserContact | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def save_contact(self, contact: UserContact) -> UserContact:
        model = self.session.get(UserModel, contact.id) or UserModel(id=contact.id)
        model.email = contact.email
        model.phone_number = contact.phone_number
        model.fcm_token = contact.fcm_token
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> UserContact:
        return UserContact(
            id=model.id,
            email=model.email or None,
            phone_number=model.phone_number or None,
            fcm_token=model.fcm_token or None,
        )


__all__ = ["UserRepository"]
