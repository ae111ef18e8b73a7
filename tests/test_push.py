"""Tests for the push gateway client."""

import httpx
import pytest

from alnet.infrastructure import push as push_module


class DummySettings:
    push_gateway_url = "https://push.example.com/send"
    push_gateway_token = "secret"
    push_timeout_seconds = 5.0


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_send_push_posts_message_with_bearer_token(monkeypatch):
    monkeypatch.setattr(push_module, "get_settings", lambda: DummySettings())
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = request.read()
        return httpx.Response(200, json={"data": {"status": "ok", "id": "ticket-1"}})

    message = push_module.build_push_message(token="tok", title="Hi", body="There")
    result = push_module.send_push(message, client=_client(handler))

    assert result == {"data": {"status": "ok", "id": "ticket-1"}}
    assert seen["url"] == "https://push.example.com/send"
    assert seen["auth"] == "Bearer secret"
    assert b'"to":"tok"' in seen["body"].replace(b" ", b"")


def test_error_ticket_raises(monkeypatch):
    monkeypatch.setattr(push_module, "get_settings", lambda: DummySettings())

    def handler(request):
        return httpx.Response(
            200, json={"data": {"status": "error", "message": "DeviceNotRegistered"}}
        )

    with pytest.raises(push_module.PushDeliveryError, match="DeviceNotRegistered"):
        push_module.send_push({"to": "tok"}, client=_client(handler))


def test_http_errors_raise(monkeypatch):
    monkeypatch.setattr(push_module, "get_settings", lambda: DummySettings())

    with pytest.raises(push_module.PushDeliveryError, match="status 503"):
        push_module.send_push(
            {"to": "tok"}, client=_client(lambda request: httpx.Response(503, text="busy"))
        )


def test_unconfigured_gateway(monkeypatch):
    class EmptySettings(DummySettings):
        push_gateway_url = None

    monkeypatch.setattr(push_module, "get_settings", lambda: EmptySettings())

    assert push_module.push_configured() is False
    with pytest.raises(push_module.PushNotConfiguredError):
        push_module.send_push({"to": "tok"})
