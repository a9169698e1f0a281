"""Static catalog of the per-channel templates of every registered event."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from notification_hub.domain.entities import NotificationChannel, Template, TemplateSet

EMAIL = NotificationChannel.EMAIL
SMS = NotificationChannel.SMS
IN_APP = NotificationChannel.IN_APP
PUSH = NotificationChannel.PUSH

TEMPLATES: Mapping[str, TemplateSet] = MappingProxyType(
    {
        "order_placed": TemplateSet(
            {
                EMAIL: Template(
                    subject="Order {{orderId}} confirmed",
                    body=(
                        "<p>Hi {{name}},</p>"
                        "<p>We received your order <strong>{{orderId}}</strong> "
                        "for a total of {{total}}.</p>"
                    ),
                ),
                SMS: Template(body="Order {{orderId}} confirmed. Total: {{total}}."),
                IN_APP: Template(
                    subject="Order confirmed",
                    body="Your order {{orderId}} has been placed.",
                ),
                PUSH: Template(
                    subject="Order confirmed",
                    body="Order {{orderId}} is being prepared.",
                ),
            }
        ),
        "order_shipped": TemplateSet(
            {
                EMAIL: Template(
                    subject="Your order {{orderId}} is on its way",
                    body=(
                        "<p>Hi {{name}},</p>"
                        "<p>Order <strong>{{orderId}}</strong> shipped with {{carrier}}. "
                        "Tracking number: {{trackingNumber}}.</p>"
                    ),
                ),
                SMS: Template(
                    body="Order {{orderId}} shipped via {{carrier}}. Tracking: {{trackingNumber}}"
                ),
                IN_APP: Template(
                    subject="Order shipped",
                    body="Order {{orderId}} has shipped.",
                ),
                PUSH: Template(
                    subject="Order shipped",
                    body="Order {{orderId}} is on its way.",
                ),
            }
        ),
        "order_delivered": TemplateSet(
            {
                EMAIL: Template(
                    subject="Order {{orderId}} delivered",
                    body="<p>Hi {{name}},</p><p>Order <strong>{{orderId}}</strong> was delivered.</p>",
                ),
                SMS: Template(body="Order {{orderId}} was delivered."),
                IN_APP: Template(
                    subject="Order delivered",
                    body="Order {{orderId}} was delivered. Enjoy!",
                ),
            }
        ),
        "payment_failed": TemplateSet(
            {
                EMAIL: Template(
                    subject="Payment for order {{orderId}} failed",
                    body=(
                        "<p>Hi {{name}},</p>"
                        "<p>We could not process the payment of {{amount}} for order "
                        "<strong>{{orderId}}</strong>: {{reason}}.</p>"
                    ),
                ),
                SMS: Template(body="Payment of {{amount}} for order {{orderId}} failed."),
                IN_APP: Template(
                    subject="Payment failed",
                    body="Payment for order {{orderId}} failed. Please update your payment method.",
                ),
                PUSH: Template(
                    subject="Payment failed",
                    body="Action needed for order {{orderId}}.",
                ),
            }
        ),
        "password_reset": TemplateSet(
            {
                EMAIL: Template(
                    subject="Reset your password",
                    body=(
                        "<p>Hi {{name}},</p>"
                        "<p>Use the code <strong>{{code}}</strong> to reset your password. "
                        "It expires in {{expiresInMinutes}} minutes.</p>"
                    ),
                ),
                SMS: Template(body="Your password reset code is {{code}}."),
                IN_APP: Template(body="A password reset was requested for your account."),
            }
        ),
        "welcome": TemplateSet(
            {
                EMAIL: Template(
                    subject="Welcome, {{name}}!",
                    body="<p>Hi {{name}},</p><p>Thanks for joining us.</p>",
                ),
                IN_APP: Template(subject="Welcome", body="Welcome aboard, {{name}}!"),
            }
        ),
    }
)


class StaticTemplateSource:
    """Template source reading from an in-process mapping."""

    def __init__(self, templates: Mapping[str, TemplateSet] = TEMPLATES) -> None:
        self._templates = templates

    def lookup(self, event: str) -> TemplateSet | None:
        return self._templates.get(event)


__all__ = ["StaticTemplateSource", "TEMPLATES"]
