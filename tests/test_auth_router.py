from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from revcart.app import create_app


@pytest.fixture()
def client(db_env, outbox):
    with TestClient(create_app()) as test_client:
        yield test_client


REGISTER_BODY = {
    "full_name": "Bruno Costa",
    "email": "bruno@example.com",
    "password": "Passw0rd!",
    "phone": "555-0199",
}


def test_register_verify_login_flow(client, outbox):
    resp = client.post("/api/auth/register", json=REGISTER_BODY)
    assert resp.status_code == 201
    assert resp.json() == {"success": True, "message": "User registered. Please verify OTP sent to your email."}
    assert resp.headers["X-Content-Type-Options"] == "nosniff"

    resp = client.post("/api/auth/login", json={"email": "bruno@example.com", "password": "Passw0rd!"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Email not verified"}

    code = outbox["bruno@example.com"][0]
    resp = client.post("/api/auth/verify-otp", json={"email": "bruno@example.com", "otp": code})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Email verified successfully"

    resp = client.post("/api/auth/login", json={"email": "bruno@example.com", "password": "Passw0rd!"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["email"] == "bruno@example.com"
    assert body["data"]["name"] == "Bruno Costa"
    assert body["data"]["role"] == "CUSTOMER"
    assert body["data"]["token"]


def test_duplicate_registration_is_400(client):
    assert client.post("/api/auth/register", json=REGISTER_BODY).status_code == 201
    resp = client.post("/api/auth/register", json=REGISTER_BODY)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email already registered"


def test_invalid_payload_is_422_envelope(client):
    resp = client.post("/api/auth/verify-otp", json={"email": "not-an-email", "otp": "12ab"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request data"
    assert len(body["errors"]) == 2


def test_forgot_password_unknown_email_is_404(client):
    resp = client.post("/api/auth/forgot-password", params={"email": "ghost@example.com"})
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "User not found"}

    resp = client.post("/api/auth/resend-otp", params={"email": "bad address"})
    assert resp.status_code == 422


def test_query_email_is_validated_like_body_email(client, outbox):
    for path in ("/api/auth/resend-otp", "/api/auth/forgot-password"):
        resp = client.post(path, params={"email": "not-an-email"})
        assert resp.status_code == 422
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Invalid request data"
        assert body["errors"]
    assert outbox == {}

    resp = client.post("/api/auth/resend-otp", params={"email": "  mixed@example.com "})
    assert resp.status_code == 200
    assert "mixed@example.com" in outbox


def test_reset_password_flow(client, outbox):
    client.post("/api/auth/register", json=REGISTER_BODY)
    client.post("/api/auth/verify-otp", json={"email": "bruno@example.com", "otp": outbox["bruno@example.com"][0]})

    resp = client.post("/api/auth/resend-otp", params={"email": "bruno@example.com"})
    assert resp.json()["message"] == "OTP resent successfully"
    resp = client.post("/api/auth/forgot-password", params={"email": "bruno@example.com"})
    assert resp.json()["message"] == "OTP sent to your email"

    code = outbox["bruno@example.com"][-1]
    resp = client.post(
        "/api/auth/reset-password",
        json={"email": "bruno@example.com", "otp": code, "new_password": "Brand-New-1"},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["email"] == "bruno@example.com"
    assert data["full_name"] == "Bruno Costa"
    assert "password_hash" not in data

    old = client.post("/api/auth/login", json={"email": "bruno@example.com", "password": "Passw0rd!"})
    assert old.status_code == 400
    assert old.json()["message"] == "Invalid email or password"
    new = client.post("/api/auth/login", json={"email": "bruno@example.com", "password": "Brand-New-1"})
    assert new.status_code == 200
