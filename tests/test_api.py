"""
Tests for the chat HTTP API.
"""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from conftest import KOPI_ORDER_REPLY

from app.main import ContextFormatter, app
from app.wiring.dependencies import get_catalog, get_chat_use_case


@pytest.fixture
def client(use_case, catalog):
    app.dependency_overrides[get_chat_use_case] = lambda: use_case
    app.dependency_overrides[get_catalog] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


def _open(client) -> str:
    resp = client.post("/api/v1/chats", json={"kind": "store", "store_name": "Kopi Curug"})
    assert resp.status_code == 201
    return resp.json()["id"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_stores(client):
    stores = client.get("/api/v1/stores").json()
    assert stores[0]["name"] == "Kopi Curug"
    assert stores[0]["products"] == [{"name": "Kopi Bubuk", "price": 25000, "stock": 20}]


def test_checkout_flow(client, completion):
    completion.replies = [KOPI_ORDER_REPLY]
    session_id = _open(client)

    resp = client.post(f"/api/v1/chats/{session_id}/messages", json={"text": "saya mau beli kopi 2"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["session"]["state"] == "order_proposed"
    reply = body["turns"][-1]
    assert reply["affordance"] == "cart_summary"
    assert reply["order_proposal"]["total"] == 50000
    assert reply["order_proposal"]["items"][0] == {
        "name": "Kopi Bubuk",
        "unit_price": 25000,
        "quantity": 2,
        "subtotal": 50000,
    }
    assert "raw_text" not in reply
    assert body["payment_instruction"]

    resp = client.post(f"/api/v1/chats/{session_id}/payment-proof")
    assert resp.status_code == 200
    body = resp.json()
    assert body["session"]["state"] == "awaiting_manual_confirmation"
    assert body["turns"][-1]["affordance"] == "pending_confirmation"

    resp = client.get(f"/api/v1/chats/{session_id}")
    assert len(resp.json()["turns"]) == 5


def test_error_mapping(client):
    assert client.post("/api/v1/chats", json={"kind": "store", "store_name": "Nope"}).status_code == 404
    assert client.get("/api/v1/chats/missing").status_code == 404
    assert client.post("/api/v1/chats/missing/messages", json={"text": "halo"}).status_code == 404

    session_id = _open(client)
    assert client.post(f"/api/v1/chats/{session_id}/messages", json={"text": "   "}).status_code == 422
    assert client.post(f"/api/v1/chats/{session_id}/payment-proof").status_code == 409


def test_provider_failure_is_a_normal_reply(client, completion):
    from app.application.exceptions import CompletionTransportError

    completion.replies = [CompletionTransportError("connection reset")]
    session_id = _open(client)

    resp = client.post(f"/api/v1/chats/{session_id}/messages", json={"text": "halo"})
    assert resp.status_code == 200
    reply = resp.json()["turns"][-1]
    assert reply["is_fallback"] is True
    assert "connection reset" not in reply["text"]


def test_clear_and_close(client, completion):
    session_id = _open(client)
    client.post(f"/api/v1/chats/{session_id}/messages", json={"text": "halo"})

    resp = client.delete(f"/api/v1/chats/{session_id}/messages")
    assert resp.status_code == 200
    assert resp.json()["turns"] == []
    assert resp.json()["state"] == "browsing"

    assert client.delete(f"/api/v1/chats/{session_id}").status_code == 204
    assert client.delete(f"/api/v1/chats/{session_id}").status_code == 404


def test_log_records_carry_chat_context():
    formatter = ContextFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "Chat turn completed", None, None)
    record.session_id = "abc"
    record.state = "order_proposed"
    record.store = ""

    assert formatter.format(record) == "INFO Chat turn completed | session_id=abc state=order_proposed"
    plain = logging.LogRecord("app", logging.INFO, __file__, 1, "plain", None, None)
    assert formatter.format(plain) == "INFO plain"
