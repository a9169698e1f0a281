"""Fan a notification event out to every channel and track each delivery."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Optional
from uuid import uuid4

import anyio
from anyio import to_thread

from notification_hub.domain.entities import (
    EVENT_CONFIGS,
    NOTIFICATION_CHANNELS,
    EventConfig,
    NotificationChannel,
    NotificationRecord,
    NotificationStatus,
    Payload,
    TemplateSet,
    UserContact,
)
from notification_hub.domain.ports import (
    EmailTransport,
    PushTokenLookup,
    PushTransport,
    RecordStore,
    SmsTransport,
    UserContactLookup,
)
from notification_hub.utils import epoch_millis, now_in_app_timezone, stringify_value

from .errors import InvalidEventError, RecordCreationError
from .templates import TemplateResolver

logger = logging.getLogger(__name__)

NO_EMAIL_REASON = "No Email"
NO_PHONE_REASON = "No Phone"
NO_PUSH_TOKEN_REASON = "No FCM token"
CREATION_INCOMPLETE_REASON = "Record creation incomplete"
DEFAULT_PUSH_TITLE = "Notification"

Outcome = tuple[NotificationStatus, Optional[str]]


def build_idempotency_key(base: str, channel: NotificationChannel) -> str:
    return f"{base}_{channel.value}"


class NotificationDispatcher:
    """Create one tracked record per channel and deliver them independently.

    ``dispatch`` returns as soon as every record is stored. Deliveries run as
    separate tasks on the event loop and report their outcome only through the
    record store. Use :meth:`drain` to wait for outstanding deliveries.
    """

    def __init__(
        self,
        *,
        users: UserContactLookup,
        push_tokens: PushTokenLookup,
        records: RecordStore,
        templates: TemplateResolver,
        email: EmailTransport,
        sms: SmsTransport,
        push: PushTransport,
        event_configs: Mapping[str, EventConfig] = EVENT_CONFIGS,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._users = users
        self._push_tokens = push_tokens
        self._records = records
        self._templates = templates
        self._email = email
        self._sms = sms
        self._push = push
        self._event_configs = event_configs
        self._clock = clock
        self._deliveries: set[asyncio.Task[None]] = set()

    @property
    def pending_deliveries(self) -> int:
        return len(self._deliveries)

    async def dispatch(
        self,
        user_id: str,
        event: str,
        payload: Payload | None = None,
        idempotency_key: str | None = None,
    ) -> None:
        """Validate ``event``, store the channel records and launch delivery.

        Raises :class:`InvalidEventError` before any side effect when the event
        is unknown and :class:`RecordCreationError` when a record cannot be
        stored; the sibling records this call did store are then closed as
        ``failed`` and nothing is delivered. An unknown user is logged and
        ignored.
        """

        config = self._event_configs.get(event)
        if config is None:
            raise InvalidEventError(event)

        user = await to_thread.run_sync(self._users.get, user_id)
        if user is None:
            logger.warning("User not found: %s; skipping event %s", user_id, event)
            return

        template_set = self._templates.resolve(event)
        records = self.build_records(
            user_id=user_id,
            event=event,
            config=config,
            template_set=template_set,
            payload=payload or {},
            idempotency_key=idempotency_key,
        )
        for record in await self._create_records(records):
            self._schedule_delivery(record, user)

    def build_records(
        self,
        *,
        user_id: str,
        event: str,
        config: EventConfig,
        template_set: TemplateSet,
        payload: Payload,
        idempotency_key: str | None,
    ) -> list[NotificationRecord]:
        """Return one pending record per channel."""

        created_at = self._clock()
        base_key = idempotency_key or f"{user_id}_{event}_{epoch_millis(created_at)}"
        records: list[NotificationRecord] = []
        for channel in NOTIFICATION_CHANNELS:
            template = template_set.for_channel(channel)
            records.append(
                NotificationRecord(
                    id=uuid4().hex,
                    user_id=user_id,
                    event=event,
                    type=config.type,
                    channel=channel,
                    title=self._templates.render_title(template, payload),
                    message=self._templates.render(template.body, payload),
                    priority=config.priority,
                    idempotency_key=build_idempotency_key(base_key, channel),
                    status=NotificationStatus.PENDING,
                    is_read=False,
                    metadata=dict(payload),
                    created_at=created_at,
                )
            )
        return records

    async def drain(self) -> None:
        """Wait until every scheduled delivery has finished."""

        while self._deliveries:
            await asyncio.gather(*tuple(self._deliveries), return_exceptions=True)

    async def _create_records(
        self, records: Sequence[NotificationRecord]
    ) -> list[NotificationRecord]:
        stored: dict[NotificationChannel, NotificationRecord] = {}
        failures: dict[NotificationChannel, BaseException] = {}

        async def _create(record: NotificationRecord) -> None:
            try:
                stored[record.channel] = await to_thread.run_sync(
                    self._records.create, record
                )
            except Exception as exc:
                logger.exception(
                    "Failed to store %s notification %s",
                    record.channel.value,
                    record.idempotency_key,
                )
                failures[record.channel] = exc

        async with anyio.create_task_group() as task_group:
            for record in records:
                task_group.start_soon(_create, record)

        if failures:
            for record in records:
                created = stored.get(record.channel)
                if created is not None and created.id == record.id:
                    await self._update_status(
                        record.idempotency_key,
                        NotificationStatus.FAILED,
                        CREATION_INCOMPLETE_REASON,
                    )
            raise RecordCreationError(failures)

        fresh: list[NotificationRecord] = []
        for record in records:
            if stored[record.channel].id != record.id:
                logger.info(
                    "Notification %s already recorded; skipping delivery",
                    record.idempotency_key,
                )
                continue
            fresh.append(record)
        return fresh

    def _schedule_delivery(self, record: NotificationRecord, user: UserContact) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            self._deliver(record, user), name=f"deliver:{record.idempotency_key}"
        )
        self._deliveries.add(task)
        task.add_done_callback(self._deliveries.discard)

    async def _deliver(self, record: NotificationRecord, user: UserContact) -> None:
        try:
            status, reason = await self._attempt(record, user)
        except Exception as exc:
            logger.exception(
                "Failed to send %s for %s", record.channel.value, record.idempotency_key
            )
            status, reason = NotificationStatus.FAILED, str(exc) or type(exc).__name__

        logger.info(
            "Notification %s finished with status %s", record.idempotency_key, status.value
        )
        await self._update_status(record.idempotency_key, status, reason)

    async def _attempt(self, record: NotificationRecord, user: UserContact) -> Outcome:
        channel = record.channel
        if channel is NotificationChannel.EMAIL:
            if not user.email:
                return NotificationStatus.FAILED, NO_EMAIL_REASON
            sent = await to_thread.run_sync(
                self._email.send, user.email, record.message, record.title
            )
            return _outcome(sent)

        if channel is NotificationChannel.SMS:
            if not user.phone_number:
                return NotificationStatus.FAILED, NO_PHONE_REASON
            sent = await to_thread.run_sync(self._sms.send, user.phone_number, record.message)
            return _outcome(sent)

        if channel is NotificationChannel.IN_APP:
            return NotificationStatus.SENT, None

        if channel is NotificationChannel.PUSH:
            token = user.fcm_token or await to_thread.run_sync(
                self._push_tokens.get, record.user_id
            )
            if not token:
                return NotificationStatus.FAILED, NO_PUSH_TOKEN_REASON
            data = {str(key): stringify_value(value) for key, value in record.metadata.items()}
            await to_thread.run_sync(
                self._push.send,
                token,
                record.title or DEFAULT_PUSH_TITLE,
                record.message or "",
                data,
            )
            return NotificationStatus.SENT, None

        raise ValueError(f"Unsupported channel: {channel}")

    async def _update_status(
        self, idempotency_key: str, status: NotificationStatus, reason: str | None
    ) -> None:
        try:
            await to_thread.run_sync(
                self._records.update_status, idempotency_key, status, reason
            )
        except Exception:
            logger.exception("Failed to record status %s for %s", status.value, idempotency_key)


def _outcome(sent: bool) -> Outcome:
    return (NotificationStatus.SENT, None) if sent else (NotificationStatus.FAILED, None)


__all__ = [
    "CREATION_INCOMPLETE_REASON",
    "DEFAULT_PUSH_TITLE",
    "NO_EMAIL_REASON",
    "NO_PHONE_REASON",
    "NO_PUSH_TOKEN_REASON",
    "NotificationDispatcher",
    "build_idempotency_key",
]
