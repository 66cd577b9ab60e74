"""Tests for the identity provider webhook."""

import hashlib
import hmac
import json

import pytest
from sqlalchemy import select

from salonbook.core.config import settings
from salonbook.models.user import User
from salonbook.services.users import verify_signature

USER_CREATED = {
    "type": "user.created",
    "data": {
        "id": "user_abc",
        "first_name": "Mai",
        "email_addresses": [{"email_address": "mai@example.com"}],
    },
}


def sign(body: bytes, secret: str) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


@pytest.mark.asyncio
async def test_user_created_mirrors_account(client, db):
    response = await client.post("/api/v1/webhooks/identity", json=USER_CREATED)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    user = (await db.execute(select(User).where(User.external_id == "user_abc"))).scalar_one()
    assert user.id == body["userId"]
    assert user.email == "mai@example.com"
    assert user.name == "Mai"


@pytest.mark.asyncio
async def test_repeated_delivery_is_idempotent(client, db):
    first = (await client.post("/api/v1/webhooks/identity", json=USER_CREATED)).json()
    second = (await client.post("/api/v1/webhooks/identity", json=USER_CREATED)).json()
    assert first["userId"] == second["userId"]

    users = (await db.execute(select(User))).scalars().all()
    assert len(users) == 1


@pytest.mark.asyncio
async def test_other_events_ignored(client, db):
    response = await client.post("/api/v1/webhooks/identity", json={"type": "user.deleted", "data": {"id": "x"}})
    assert response.status_code == 200
    assert response.json() == {"message": "Ignored"}
    assert (await db.execute(select(User))).scalars().all() == []


@pytest.mark.asyncio
async def test_missing_user_id_rejected(client):
    response = await client.post("/api/v1/webhooks/identity", json={"type": "user.created", "data": {}})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_non_json_body_rejected(client):
    response = await client.post(
        "/api/v1/webhooks/identity", content=b"not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_signature_checked_when_secret_configured(client, monkeypatch):
    monkeypatch.setattr(settings, "IDENTITY_WEBHOOK_SECRET", "whsec_test")
    body = json.dumps(USER_CREATED).encode()

    response = await client.post(
        "/api/v1/webhooks/identity", content=body, headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 401

    response = await client.post(
        "/api/v1/webhooks/identity",
        content=body,
        headers={"Content-Type": "application/json", "X-Webhook-Signature": sign(body, "wrong")},
    )
    assert response.status_code == 401

    response = await client.post(
        "/api/v1/webhooks/identity",
        content=body,
        headers={"Content-Type": "application/json", "X-Webhook-Signature": sign(body, "whsec_test")},
    )
    assert response.status_code == 200


def test_verify_signature():
    body = b'{"type":"user.created"}'
    assert verify_signature(body, sign(body, "s3cret"), "s3cret")
    assert not verify_signature(body, sign(body, "other"), "s3cret")
    assert not verify_signature(body, None, "s3cret")


@pytest.mark.asyncio
@pytest.mark.parametrize("data", [
    "x",
    ["user_abc"],
    {"id": 42},
    {"id": "user_abc", "email_addresses": ["mai@example.com"]},
    {"id": "user_abc", "email_addresses": {"email_address": "mai@example.com"}},
    {"id": "user_abc", "first_name": {"given": "Mai"}},
])
async def test_malformed_event_data_rejected(client, db, data):
    response = await client.post("/api/v1/webhooks/identity", json={"type": "user.created", "data": data})
    assert response.status_code == 400
    assert "error" in response.json()
    assert (await db.execute(select(User))).scalars().all() == []
