"""Resolve per-channel templates for an event and interpolate payloads."""

from __future__ import annotations

import logging
import re

from notification_hub.domain.entities import (
    NotificationChannel,
    Payload,
    Template,
    TemplateSet,
)
from notification_hub.domain.ports import TemplateSource
from notification_hub.utils import stringify_value

logger = logging.getLogger(__name__)

_PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]*)\}\}")

DEFAULT_TEMPLATE_SET = TemplateSet(
    {
        NotificationChannel.EMAIL: Template(
            subject="Notification",
            body="<p>You have a new notification.</p>",
        ),
        NotificationChannel.SMS: Template(body="You have a new notification."),
        NotificationChannel.IN_APP: Template(body="You have a new notification."),
        NotificationChannel.PUSH: Template(
            subject="Notification",
            body="You have a new notification.",
        ),
    }
)


def render_template(template: str, payload: Payload) -> str:
    """Replace ``{{key}}`` placeholders with values from ``payload``.

    Placeholders without a matching payload key are removed. Substituted values
    are inserted verbatim and never scanned for further placeholders.
    """

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in payload:
            return stringify_value(payload[key])
        return ""

    return _PLACEHOLDER_PATTERN.sub(_substitute, template)


class TemplateResolver:
    """Look up the template set of an event with a default fallback."""

    def __init__(
        self,
        source: TemplateSource,
        *,
        default: TemplateSet = DEFAULT_TEMPLATE_SET,
    ) -> None:
        self._source = source
        self._default = default

    def resolve(self, event: str) -> TemplateSet:
        template_set = self._source.lookup(event)
        if template_set is None:
            logger.warning(
                "No template found for event %s; using the default template set", event
            )
            return self._default
        return template_set

    @staticmethod
    def render(template: str, payload: Payload) -> str:
        return render_template(template, payload)

    @staticmethod
    def render_title(template: Template, payload: Payload) -> str:
        """Render the subject of ``template`` or return ``""`` when it has none."""

        if template.subject:
            return render_template(template.subject, payload)
        return ""


__all__ = [
    "DEFAULT_TEMPLATE_SET",
    "TemplateResolver",
    "render_template",
    "stringify_value",
]
