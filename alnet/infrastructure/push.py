"""Mobile/web push delivery through an Expo-compatible HTTP gateway."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from alnet.config import get_settings

logger = logging.getLogger(__name__)


class PushNotConfiguredError(RuntimeError):
    """Raised when no push gateway URL is configured."""


class PushDeliveryError(RuntimeError):
    """Raised when the gateway rejected a push message."""


def push_configured() -> bool:
    return bool(get_settings().push_gateway_url)


def build_push_message(
    *,
    token: str,
    title: str,
    body: str,
    data: dict[str, Any] | None = None,
    priority: str = "default",
) -> dict[str, Any]:
    return {
        "to": token,
        "title": title,
        "body": body,
        "data": data or {},
        "priority": priority,
        "sound": "default",
    }


def send_push(message: dict[str, Any], *, client: httpx.Client | None = None) -> dict[str, Any]:
    """POST ``message`` to the push gateway and return its ticket payload.

    ``client`` may be supplied to reuse a connection pool across jobs.
    """

    settings = get_settings()
    if not settings.push_gateway_url:
        raise PushNotConfiguredError("PUSH_GATEWAY_URL is not configured")

    headers = {"Accept": "application/json", "Content-Type": "application/json"}
    if settings.push_gateway_token:
        headers["Authorization"] = f"Bearer {settings.push_gateway_token}"

    owns_client = client is None
    http = client or httpx.Client(timeout=settings.push_timeout_seconds)
    try:
        response = http.post(settings.push_gateway_url, headers=headers, json=message)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.error(
            "Push gateway responded with status %s: %s",
            exc.response.status_code,
            exc.response.text,
        )
        raise PushDeliveryError(
            f"Push gateway responded with status {exc.response.status_code}"
        ) from exc
    except httpx.RequestError as exc:
        logger.error("Push gateway request failed: %s", exc)
        raise PushDeliveryError(f"Push gateway request failed: {exc}") from exc
    finally:
        if owns_client:
            http.close()

    try:
        payload = response.json()
    except ValueError:
        payload = {}
    ticket = payload.get("data") if isinstance(payload, dict) else None
    if isinstance(ticket, dict) and ticket.get("status") == "error":
        raise PushDeliveryError(ticket.get("message") or "Push ticket reported an error")
    return payload if isinstance(payload, dict) else {}


__all__ = [
    "PushDeliveryError",
    "PushNotConfiguredError",
    "build_push_message",
    "push_configured",
    "send_push",
]
