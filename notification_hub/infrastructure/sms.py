"""SMS transport delivering messages through the Twilio REST API."""

from __future__ import annotations

import logging

import httpx

from notification_hub.config import Settings, get_settings

logger = logging.getLogger(__name__)

SMS_MAX_LENGTH = 1600


class TwilioSmsTransport:
    """Send SMS messages with Twilio's ``Messages`` endpoint."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client or httpx.Client(timeout=self._settings.sms_timeout_seconds)

    def send(self, phone_number: str, body: str) -> bool:
        settings = self._settings
        if not settings.sms_enabled:
            logger.info("Twilio configuration incomplete; skipping SMS delivery")
            return False

        url = f"{settings.twilio_api_url}/Accounts/{settings.twilio_account_sid}/Messages.json"
        try:
            response = self._client.post(
                url,
                auth=(settings.twilio_account_sid, settings.twilio_auth_token),
                data={
                    "From": settings.twilio_from_number,
                    "To": phone_number,
                    "Body": body[:SMS_MAX_LENGTH],
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Twilio rejected SMS to %s with status %s: %s",
                phone_number,
                exc.response.status_code,
                exc.response.text[:200],
            )
            return False
        except httpx.HTTPError as exc:
            logger.error("Error sending SMS via Twilio to %s: %s", phone_number, exc)
            return False

        logger.debug("Twilio accepted SMS to %s with status %s", phone_number, response.status_code)
        return True

    def close(self) -> None:
        self._client.close()


__all__ = ["SMS_MAX_LENGTH", "TwilioSmsTransport"]
