"""Domain entities describing per-channel message templates."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from types import MappingProxyType
from typing import Union

from .notification import NOTIFICATION_CHANNELS, NotificationChannel

PayloadScalar = Union[str, int, float, bool, Decimal, datetime, date, time, None]
PayloadValue = Union[PayloadScalar, Mapping[str, "PayloadValue"], Sequence["PayloadValue"]]
Payload = Mapping[str, PayloadValue]


@dataclass(frozen=True)
class Template:
    """Body of a message and, optionally, its subject line."""

    body: str
    subject: str | None = None


class TemplateSet:
    """Read-only mapping from channel to :class:`Template`.

    The ``in_app`` template is mandatory because it backs every channel that
    does not define its own template.
    """

    __slots__ = ("_templates",)

    def __init__(self, templates: Mapping[NotificationChannel | str, Template]) -> None:
        normalized = {
            NotificationChannel(channel): template
            for channel, template in templates.items()
        }
        if NotificationChannel.IN_APP not in normalized:
            raise ValueError("A template set requires an in_app template")
        self._templates = MappingProxyType(normalized)

    @property
    def templates(self) -> Mapping[NotificationChannel, Template]:
        return self._templates

    def for_channel(self, channel: NotificationChannel) -> Template:
        """Return the template for ``channel`` falling back to ``in_app``."""

        template = self._templates.get(channel)
        if template is None:
            return self._templates[NotificationChannel.IN_APP]
        return template

    def has_channel(self, channel: NotificationChannel) -> bool:
        return channel in self._templates

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TemplateSet):
            return NotImplemented
        return dict(self._templates) == dict(other._templates)

    def __hash__(self) -> int:
        return hash(frozenset(self._templates.items()))

    def __repr__(self) -> str:
        channels = ", ".join(
            channel.value for channel in NOTIFICATION_CHANNELS if channel in self._templates
        )
        return f"TemplateSet({channels})"


__all__ = ["Payload", "PayloadValue", "Template", "TemplateSet"]
