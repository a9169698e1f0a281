"""Unit tests for the SendGrid email transport."""

from __future__ import annotations

import json
import types

import pytest

from notification_hub.config import Settings
from notification_hub.infrastructure import email as email_module


class _StubSendGridAPIClient:
    """Stand-in for ``SendGridAPIClient`` capturing the sent message."""

    sent: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        type(self).sent.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


def _configured_settings() -> Settings:
    return Settings(sendgrid_api_key="SG.fake", sendgrid_sender="sender@example.com")


def test_send_email_without_configuration() -> None:
    """When SendGrid settings are missing the helper should exit early."""

    settings = Settings(sendgrid_api_key=None, sendgrid_sender=None)

    result = email_module.send_email(
        "Subject", "<p>Body</p>", "user@example.com", settings=settings
    )

    assert result is False


def test_transport_sends_message(monkeypatch: pytest.MonkeyPatch) -> None:
    """A successful SendGrid response should return ``True``."""

    class SuccessfulClient(_StubSendGridAPIClient):
        sent: list = []

    monkeypatch.setattr(email_module, "SendGridAPIClient", SuccessfulClient)
    transport = email_module.SendGridEmailTransport(_configured_settings())

    assert transport.send("user@example.com", "<p>Body</p>", "Subject") is True
    assert len(SuccessfulClient.sent) == 1
    mail = SuccessfulClient.sent[0].get()
    assert mail["subject"] == "Subject"
    assert mail["from"]["email"] == "sender@example.com"


def test_transport_reports_rejected_response(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Non-2xx responses should return ``False`` and log the SendGrid errors."""

    class RejectingClient(_StubSendGridAPIClient):
        def send(self, message):
            body = json.dumps({"errors": [{"message": "Invalid recipient", "field": "to"}]})
            return types.SimpleNamespace(status_code=400, body=body.encode())

    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)
    transport = email_module.SendGridEmailTransport(_configured_settings())

    with caplog.at_level("ERROR"):
        assert transport.send("user@example.com", "<p>Body</p>", "Subject") is False

    assert "status 400" in caplog.text
    assert "to: Invalid recipient" in caplog.text


def test_send_email_logs_forbidden_error(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Forbidden errors raised by the client should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient(_StubSendGridAPIClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email(
            "Subject", "<p>Body</p>", "user@example.com", settings=_configured_settings()
        )

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_settings_require_complete_sendgrid_pair() -> None:
    with pytest.raises(ValueError):
        Settings(sendgrid_api_key="SG.fake", sendgrid_sender=None)
    with pytest.raises(ValueError):
        Settings(sendgrid_api_key="SG.fake", sendgrid_sender="not-an-email")
