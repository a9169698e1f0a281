"""FastAPI dependency utilities."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session, sessionmaker

from notification_hub.application.use_cases.notifications import (
    NotificationDispatcher,
    TemplateResolver,
)
from notification_hub.config import Settings
from notification_hub.infrastructure.email import SendGridEmailTransport
from notification_hub.infrastructure.push import FcmPushTransport
from notification_hub.infrastructure.sms import TwilioSmsTransport
from notification_hub.infrastructure.stores import (
    SqlAlchemyPushTokenLookup,
    SqlAlchemyRecordStore,
    SqlAlchemyUserContactLookup,
)
from notification_hub.infrastructure.templates import StaticTemplateSource


def build_dispatcher(settings: Settings, session_factory: sessionmaker) -> NotificationDispatcher:
    """Wire the dispatcher with the SQL stores and the configured transports."""

    return NotificationDispatcher(
        users=SqlAlchemyUserContactLookup(session_factory),
        push_tokens=SqlAlchemyPushTokenLookup(session_factory),
        records=SqlAlchemyRecordStore(session_factory),
        templates=TemplateResolver(StaticTemplateSource()),
        email=SendGridEmailTransport(settings),
        sms=TwilioSmsTransport(settings),
        push=FcmPushTransport(settings),
    )


def get_dispatcher(request: Request) -> NotificationDispatcher:
    """Return the dispatcher shared by the running application."""

    return request.app.state.dispatcher


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session from the application's factory and close it afterwards."""

    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
