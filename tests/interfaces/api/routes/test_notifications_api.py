"""Integration tests for the notification API endpoints."""

from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from notification_hub.domain.entities import (
    NotificationChannel,
    NotificationPriority,
    NotificationRecord,
    NotificationStatus,
)
from notification_hub.infrastructure.repositories import NotificationRepository
from notification_hub.main import create_app


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture()
def client(harness, engine):
    """Return a test client whose dispatcher uses in-memory collaborators."""

    app = create_app(dispatcher=harness.build(), bind=engine)
    with TestClient(app) as test_client:
        yield test_client


def _store_record(engine, key: str, user_id: str = "user-1") -> NotificationRecord:
    record = NotificationRecord(
        id=uuid4().hex,
        user_id=user_id,
        event="order_shipped",
        type="order",
        channel=NotificationChannel.SMS,
        title="",
        message="Order A-1 shipped",
        priority=NotificationPriority.NORMAL,
        idempotency_key=key,
    )
    with sessionmaker(bind=engine)() as session:
        repository = NotificationRepository(session)
        repository.create_if_absent(record)
        repository.update_status(key, NotificationStatus.FAILED, "No Phone")
    return record


def test_send_notification_accepts_and_records_every_channel(client, harness) -> None:
    response = client.post(
        "/notifications/",
        json={
            "user_id": "user-1",
            "event": "order_shipped",
            "payload": {"orderId": "A-1", "carrier": "UPS"},
            "idempotency_key": "api-1",
        },
    )

    assert response.status_code == 202
    assert response.json() == {"status": "accepted"}
    assert set(harness.records.records) == {
        f"api-1_{channel.value}" for channel in NotificationChannel
    }


def test_send_notification_rejects_unknown_event(client, harness) -> None:
    response = client.post(
        "/notifications/",
        json={"user_id": "user-1", "event": "not_an_event", "payload": {}},
    )

    assert response.status_code == 400
    assert "not_an_event" in response.json()["detail"]
    assert harness.records.records == {}


def test_send_notification_for_unknown_user_is_accepted(client, harness) -> None:
    response = client.post(
        "/notifications/",
        json={"user_id": "ghost", "event": "order_shipped"},
    )

    assert response.status_code == 202
    assert harness.records.records == {}


def test_send_notification_reports_storage_failure(client, harness) -> None:
    harness.records.failing_channels.add(NotificationChannel.PUSH)

    response = client.post(
        "/notifications/",
        json={"user_id": "user-1", "event": "order_shipped", "idempotency_key": "api-2"},
    )

    assert response.status_code == 503


def test_send_notification_validates_body(client) -> None:
    response = client.post("/notifications/", json={"event": "order_shipped"})

    assert response.status_code == 422


def test_get_record_by_idempotency_key(client, engine) -> None:
    stored = _store_record(engine, "lookup_sms")

    response = client.get("/notifications/records/lookup_sms")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == stored.id
    assert data["channel"] == "sms"
    assert data["status"] == "failed"
    assert data["failure_reason"] == "No Phone"
    assert data["is_read"] is False

    assert client.get("/notifications/records/missing").status_code == 404


def test_list_user_notifications(client, engine) -> None:
    _store_record(engine, "a_sms")
    _store_record(engine, "b_sms")
    _store_record(engine, "c_sms", user_id="user-2")

    response = client.get("/notifications/users/user-1")

    assert response.status_code == 200
    assert sorted(item["idempotency_key"] for item in response.json()) == ["a_sms", "b_sms"]
    assert len(client.get("/notifications/users/user-1?limit=1").json()) == 1


def test_lifespan_creates_tables_on_the_given_engine(client, engine) -> None:
    tables = set(inspect(engine).get_table_names())

    assert {"notification_record", "user", "user_token"} <= tables
