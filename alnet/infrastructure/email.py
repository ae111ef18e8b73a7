"""Transactional email delivery through SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from alnet.config import get_settings
from alnet.domain.entities import Notification, NotificationType

logger = logging.getLogger(__name__)

_HEADER_GRADIENT = "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"

_EMAIL_HEADINGS: dict[NotificationType, str] = {
    NotificationType.CONNECTION_REQUEST: "New Connection Request",
    NotificationType.CONNECTION_ACCEPTED: "Connection Accepted",
    NotificationType.NEW_MESSAGE: "New Message",
    NotificationType.MESSAGE_REPLY: "New Reply",
    NotificationType.NEW_JOB_POSTING: "New Job Opportunity",
    NotificationType.EVENT_REMINDER: "Event Reminder",
    NotificationType.SYSTEM_ANNOUNCEMENT: "Announcement",
}


class EmailNotConfiguredError(RuntimeError):
    """Raised when SendGrid credentials are missing."""


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    return None


def email_configured() -> bool:
    settings = get_settings()
    return bool(settings.sendgrid_api_key and settings.sendgrid_sender)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials.

    Returns ``False`` when SendGrid rejected the message or could not be
    reached. Raises :class:`EmailNotConfiguredError` when no credentials are
    set so callers can tell "skipped" apart from "failed".
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        raise EmailNotConfiguredError("SendGrid configuration incomplete")

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        details = _extract_sendgrid_error_details(getattr(exc, "body", None))
        logger.error(
            "SendGrid API request failed with status %s: %s",
            getattr(exc, "status_code", None),
            details or exc,
        )
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        logger.error(
            "SendGrid API responded with status %s: %s",
            status_code,
            _extract_sendgrid_error_details(getattr(response, "body", None)),
        )
        return False

    return True


def build_notification_email(
    notification: Notification, *, recipient_name: str
) -> tuple[str, str]:
    """Render the subject and HTML body used to mirror ``notification``."""

    settings = get_settings()
    heading = _EMAIL_HEADINGS.get(NotificationType(notification.type), notification.title)
    parts = [
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">',
        f'<div style="background: {_HEADER_GRADIENT}; padding: 20px; text-align: center;">',
        f'<h1 style="color: white; margin: 0; font-size: 24px;">{escape(heading)}</h1>',
        "</div>",
        '<div style="padding: 30px; background: #f8f9fa;">',
        f"<p>Hi {escape(recipient_name)},</p>",
        f"<p><strong>{escape(notification.title)}</strong></p>",
        f"<p>{escape(notification.message)}</p>",
    ]
    if notification.action_url:
        link = notification.action_url
        if link.startswith("/"):
            link = settings.public_base_url.rstrip("/") + link
        label = notification.action_label or "Open AlNet"
        parts.append(
            f'<a href="{escape(link, quote=True)}" style="display: inline-block; '
            "background: #667eea; color: white; padding: 12px 24px; "
            f'text-decoration: none; border-radius: 6px;">{escape(label)}</a>'
        )
    parts.extend(["</div>", "</div>"])
    return f"AlNet: {notification.title}", "".join(parts)


__all__ = [
    "EmailNotConfiguredError",
    "build_notification_email",
    "email_configured",
    "send_email",
]
