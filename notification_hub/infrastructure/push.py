"""Push transport delivering messages through the FCM HTTP v1 API."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone

import httpx
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from notification_hub.config import Settings, get_settings

logger = logging.getLogger(__name__)

FCM_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"
_TOKEN_REFRESH_MARGIN = timedelta(minutes=5)


class PushDeliveryError(RuntimeError):
    """Raised when FCM does not accept a push message."""


def _service_account_token(path: str) -> tuple[str, datetime]:
    credentials = service_account.Credentials.from_service_account_file(
        path, scopes=[FCM_SCOPE]
    )
    credentials.refresh(Request())
    if credentials.expiry is None:
        return credentials.token, datetime.now(timezone.utc) + timedelta(minutes=55)
    # google-auth reports naive UTC expiries
    return credentials.token, credentials.expiry.replace(tzinfo=timezone.utc)


class FcmPushTransport:
    """Send push notifications to a single device token.

    OAuth access tokens are cached until shortly before they expire.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: httpx.Client | None = None,
        token_provider: Callable[[str], tuple[str, datetime]] = _service_account_token,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client or httpx.Client(timeout=self._settings.push_timeout_seconds)
        self._token_provider = token_provider
        self._access_token: str | None = None
        self._token_expiry: datetime | None = None
        self._token_lock = threading.Lock()

    def send(self, token: str, title: str, body: str, data: Mapping[str, str]) -> None:
        settings = self._settings
        if not settings.push_enabled:
            raise PushDeliveryError("FCM configuration incomplete")

        payload = {
            "message": {
                "token": token,
                "notification": {"title": title, "body": body},
                "data": dict(data),
            }
        }
        url = FCM_SEND_URL.format(project_id=settings.fcm_project_id)
        headers = {"Authorization": f"Bearer {self._get_access_token()}"}

        try:
            response = self._client.post(url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise PushDeliveryError(
                f"FCM responded with status {exc.response.status_code}: {_error_detail(exc.response)}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PushDeliveryError(f"FCM request failed: {exc}") from exc

        logger.debug("FCM accepted push message for token %s...", token[:8])

    def close(self) -> None:
        self._client.close()

    def _get_access_token(self) -> str:
        with self._token_lock:
            now = datetime.now(timezone.utc)
            if (
                self._access_token
                and self._token_expiry
                and now < self._token_expiry - _TOKEN_REFRESH_MARGIN
            ):
                return self._access_token
            try:
                token, expiry = self._token_provider(self._settings.fcm_service_account_file)
            except Exception as exc:
                raise PushDeliveryError(f"Failed to get FCM access token: {exc}") from exc
            self._access_token, self._token_expiry = token, expiry
            return token


def _error_detail(response: httpx.Response) -> str:
    try:
        return str(response.json().get("error", {}).get("message") or response.text[:200])
    except ValueError:
        return response.text[:200]


__all__ = ["FCM_SEND_URL", "FcmPushTransport", "PushDeliveryError"]
