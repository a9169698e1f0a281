"""Shared fixtures and in-memory collaborators for the test-suite."""

from __future__ import annotations

import os
import sys
import tempfile
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Mapping

import pytest

# Ensure the project root (which contains the ``notification_hub`` package) is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "notification_hub_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["APP_TIMEZONE"] = "UTC"
for _name in ("SENDGRID_API_KEY", "SENDGRID_SENDER"):
    os.environ.pop(_name, None)

from notification_hub.application.use_cases.notifications import (  # noqa: E402
    NotificationDispatcher,
    TemplateResolver,
)
from notification_hub.domain.entities import (  # noqa: E402
    NotificationChannel,
    NotificationRecord,
    NotificationStatus,
    UserContact,
)
from notification_hub.infrastructure.templates import StaticTemplateSource  # noqa: E402

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryRecordStore:
    """Record store keeping records in a dict keyed by idempotency key."""

    def __init__(self, *, failing_channels: set[NotificationChannel] | None = None) -> None:
        self.records: dict[str, NotificationRecord] = {}
        self.updates: list[tuple[str, NotificationStatus, str | None]] = []
        self.failing_channels = failing_channels or set()
        self.fail_updates = False
        self._lock = threading.Lock()

    def create(self, record: NotificationRecord) -> NotificationRecord:
        if record.channel in self.failing_channels:
            raise RuntimeError(f"store unavailable for {record.channel.value}")
        with self._lock:
            existing = self.records.get(record.idempotency_key)
            if existing is not None:
                return existing
            self.records[record.idempotency_key] = replace(record)
            return record

    def update_status(
        self,
        idempotency_key: str,
        status: NotificationStatus,
        reason: str | None = None,
    ) -> None:
        if self.fail_updates:
            raise RuntimeError("store unavailable")
        with self._lock:
            self.updates.append((idempotency_key, status, reason))
            record = self.records[idempotency_key]
            record.status = status
            record.failure_reason = reason

    def by_channel(self) -> dict[NotificationChannel, NotificationRecord]:
        return {record.channel: record for record in self.records.values()}


class InMemoryUsers:
    def __init__(self, *contacts: UserContact) -> None:
        self.contacts = {contact.id: contact for contact in contacts}
        self.lookups: list[str] = []

    def get(self, user_id: str) -> UserContact | None:
        self.lookups.append(user_id)
        return self.contacts.get(user_id)


class InMemoryPushTokens:
    def __init__(self, tokens: Mapping[str, str] | None = None) -> None:
        self.tokens = dict(tokens or {})

    def get(self, user_id: str) -> str | None:
        return self.tokens.get(user_id)


class RecordingEmailTransport:
    def __init__(self, result: bool = True, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    def send(self, address: str, body: str, subject: str) -> bool:
        self.calls.append((address, body, subject))
        if self.error is not None:
            raise self.error
        return self.result


class RecordingSmsTransport:
    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.calls: list[tuple[str, str]] = []

    def send(self, phone_number: str, body: str) -> bool:
        self.calls.append((phone_number, body))
        return self.result


class RecordingPushTransport:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, str, str, dict[str, str]]] = []

    def send(self, token: str, title: str, body: str, data: Mapping[str, str]) -> None:
        self.calls.append((token, title, body, dict(data)))
        if self.error is not None:
            raise self.error


@dataclass
class DispatchHarness:
    """Dispatcher wired to in-memory collaborators that tests can inspect."""

    users: InMemoryUsers = field(
        default_factory=lambda: InMemoryUsers(
            UserContact(
                id="user-1",
                email="ann@example.com",
                phone_number="+15550100",
                fcm_token="profile-token",
            )
        )
    )
    push_tokens: InMemoryPushTokens = field(default_factory=InMemoryPushTokens)
    records: InMemoryRecordStore = field(default_factory=InMemoryRecordStore)
    email: RecordingEmailTransport = field(default_factory=RecordingEmailTransport)
    sms: RecordingSmsTransport = field(default_factory=RecordingSmsTransport)
    push: RecordingPushTransport = field(default_factory=RecordingPushTransport)
    clock: Callable[[], datetime] = lambda: FIXED_NOW

    def build(self) -> NotificationDispatcher:
        return NotificationDispatcher(
            users=self.users,
            push_tokens=self.push_tokens,
            records=self.records,
            templates=TemplateResolver(StaticTemplateSource()),
            email=self.email,
            sms=self.sms,
            push=self.push,
            clock=self.clock,
        )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def harness() -> DispatchHarness:
    return DispatchHarness()
