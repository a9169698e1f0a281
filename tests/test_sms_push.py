"""Tests for the Twilio SMS and FCM push transports."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from notification_hub.config import Settings
from notification_hub.infrastructure.push import FcmPushTransport, PushDeliveryError
from notification_hub.infrastructure.sms import SMS_MAX_LENGTH, TwilioSmsTransport


def _sms_settings() -> Settings:
    return Settings(
        twilio_account_sid="AC123",
        twilio_auth_token="secret",
        twilio_from_number="+15550000",
    )


def _push_settings() -> Settings:
    return Settings(fcm_project_id="demo-project", fcm_service_account_file="sa.json")


def test_sms_posts_message_to_twilio() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(201, json={"sid": "SM1"})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    transport = TwilioSmsTransport(_sms_settings(), client=client)

    assert transport.send("+15550100", "x" * (SMS_MAX_LENGTH + 10)) is True

    request = requests[0]
    assert request.url.path == "/2010-04-01/Accounts/AC123/Messages.json"
    assert request.headers["Authorization"].startswith("Basic ")
    form = dict(httpx.QueryParams(request.content.decode()))
    assert form["To"] == "+15550100"
    assert form["From"] == "+15550000"
    assert len(form["Body"]) == SMS_MAX_LENGTH


def test_sms_returns_false_on_http_error(caplog: pytest.LogCaptureFixture) -> None:
    client = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(400, text="bad number"))
    )
    transport = TwilioSmsTransport(_sms_settings(), client=client)

    with caplog.at_level("ERROR"):
        assert transport.send("+1", "hello") is False

    assert "status 400" in caplog.text


def test_sms_without_configuration_skips_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not run
        raise AssertionError("no request expected")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    transport = TwilioSmsTransport(Settings(), client=client)

    assert transport.send("+15550100", "hello") is False


def test_push_sends_v1_message_with_cached_token() -> None:
    requests: list[httpx.Request] = []
    issued: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"name": "projects/demo-project/messages/1"})

    def token_provider(path: str) -> tuple[str, datetime]:
        issued.append(path)
        return "access-token", datetime.now(timezone.utc) + timedelta(hours=1)

    transport = FcmPushTransport(
        _push_settings(),
        client=httpx.Client(transport=httpx.MockTransport(handler)),
        token_provider=token_provider,
    )

    transport.send("device-token", "Order shipped", "On its way", {"orderId": "A-1"})
    transport.send("device-token", "Order shipped", "On its way", {})

    assert issued == ["sa.json"]
    assert requests[0].url.path == "/v1/projects/demo-project/messages:send"
    assert requests[0].headers["Authorization"] == "Bearer access-token"
    body = json.loads(requests[0].content)
    assert body["message"] == {
        "token": "device-token",
        "notification": {"title": "Order shipped", "body": "On its way"},
        "data": {"orderId": "A-1"},
    }


def test_push_raises_on_rejected_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": {"message": "Requested entity was not found."}})

    transport = FcmPushTransport(
        _push_settings(),
        client=httpx.Client(transport=httpx.MockTransport(handler)),
        token_provider=lambda path: ("t", datetime.now(timezone.utc) + timedelta(hours=1)),
    )

    with pytest.raises(PushDeliveryError, match="404: Requested entity was not found"):
        transport.send("stale-token", "t", "b", {})


def test_push_without_configuration_raises() -> None:
    transport = FcmPushTransport(Settings(), client=httpx.Client())

    with pytest.raises(PushDeliveryError, match="configuration incomplete"):
        transport.send("device-token", "t", "b", {})
