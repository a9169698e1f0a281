"""Persistence layer for device push tokens."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notification_hub.infrastructure.models import UserTokenModel


class PushTokenRepository:
    """Look up the push token registered for a user outside the profile."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_token(self, user_id: str) -> str | None:
        model = self.session.get(UserTokenModel, user_id)
        if model is None:
            return None
        return model.token or None

    def save_token(self, user_id: str, token: str) -> None:
        model = self.session.get(UserTokenModel, user_id) or UserTokenModel(user_id=user_id)
        model.token = token
        self.session.add(model)
        self.session.commit()


__all__ = ["PushTokenRepository"]
