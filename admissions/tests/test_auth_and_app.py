"""
Test Firebase token handling and the assembled application.
"""

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from utils import auth_utils


def test_verify_firebase_token_returns_uid_and_role(monkeypatch):
    monkeypatch.setattr(
        auth_utils.id_token, "verify_firebase_token",
        lambda token, request, audience=None: {"sub": "abc", "user_id": "abc", "role": "admin"},
    )
    assert auth_utils.verify_firebase_token("token") == {"uid": "abc", "role": "admin"}


def test_verify_firebase_token_defaults_role(monkeypatch):
    monkeypatch.setattr(
        auth_utils.id_token, "verify_firebase_token",
        lambda token, request, audience=None: {"sub": "abc"},
    )
    assert auth_utils.verify_firebase_token("token") == {"uid": "abc", "role": "student"}


def test_missing_token_is_401():
    with pytest.raises(HTTPException) as exc:
        auth_utils.firebase_user(authorization=None)
    assert exc.value.status_code == 401


def test_invalid_token_is_403(monkeypatch):
    def reject(token, request, audience=None):
        raise ValueError("Token expired")

    monkeypatch.setattr(auth_utils.id_token, "verify_firebase_token", reject)
    with pytest.raises(HTTPException) as exc:
        auth_utils.firebase_user(authorization="Bearer expired-token")
    assert exc.value.status_code == 403


def test_app_health_and_state():
    import main

    client = TestClient(main.app)
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert len(main.app.state.catalog) == 51
    assert main.app.state.chat_orchestrator.store is main.app.state.store
