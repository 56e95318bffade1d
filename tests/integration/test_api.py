"""API tests against the real app with the unit of work swapped for the in-memory fake."""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from messaging_service.api.deps import get_uow
from messaging_service.app import create_app
from messaging_service.application.exceptions import StorageError
from messaging_service.config import settings
from tests.conftest import FakeUoW, make_message, make_user


def _make_token(sub: int, *, expires_in: timedelta = timedelta(hours=1)) -> str:
    now = datetime.now(timezone.utc)
    return jwt.encode(
        {"sub": str(sub), "iat": now, "exp": now + expires_in},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app_with_uow():
    app = create_app()
    uow = FakeUoW()
    uow.add_users(make_user(1, name="Alice", alias="quiet_fox"), make_user(2, name="Bob"))

    async def _override():
        yield uow

    app.dependency_overrides[get_uow] = _override
    return app, uow


@pytest.fixture
def client(app_with_uow):
    app, _ = app_with_uow
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def uow(app_with_uow):
    _, uow = app_with_uow
    return uow


def _register(client: TestClient, email: str, name: str) -> tuple[int, str]:
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": "correct horse", "name": name},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    return data["user"]["id"], data["token"]


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.headers["X-Request-ID"]


def test_request_id_is_echoed(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"


def test_end_to_end_conversation(client):
    a_id, a_token = _register(client, "a@example.com", "A")
    b_id, b_token = _register(client, "b@example.com", "B")

    sent = client.post(
        "/api/v1/messages",
        headers=_auth(a_token),
        json={"recipient_id": b_id, "content": "hello"},
    )
    assert sent.status_code == 201
    assert sent.json()["is_read"] is False
    assert "email" not in sent.json()["sender"]

    convs = client.get("/api/v1/messages/conversations", headers=_auth(b_token)).json()
    assert len(convs) == 1
    assert convs[0]["user"]["id"] == a_id
    assert convs[0]["last_message"]["content"] == "hello"
    assert convs[0]["unread_count"] == 1

    thread = client.get(f"/api/v1/messages/{a_id}", headers=_auth(b_token))
    assert thread.status_code == 200
    assert [m["content"] for m in thread.json()["messages"]] == ["hello"]
    assert thread.json()["other_user"]["name"] == "A"

    convs = client.get("/api/v1/messages/conversations", headers=_auth(b_token)).json()
    assert convs[0]["unread_count"] == 0


def test_login_and_me(client):
    _register(client, "c@example.com", "C")

    resp = client.post(
        "/api/v1/auth/login",
        json={"email": "C@example.com", "password": "correct horse"},
    )
    assert resp.status_code == 200
    token = resp.json()["token"]

    me = client.get("/api/v1/auth/me", headers=_auth(token))
    assert me.status_code == 200
    assert me.json()["email"] == "c@example.com"
    assert "password_hash" not in me.json()


def test_login_bad_password(client):
    _register(client, "d@example.com", "D")

    resp = client.post(
        "/api/v1/auth/login",
        json={"email": "d@example.com", "password": "wrong"},
    )
    assert resp.status_code == 401
    assert resp.json()["error"] == "unauthorized"


def test_register_duplicate_email(client):
    _register(client, "e@example.com", "E")

    resp = client.post(
        "/api/v1/auth/register",
        json={"email": "E@example.com", "password": "x", "name": "E2"},
    )
    assert resp.status_code == 409
    assert resp.json()["error"] == "conflict"


def test_send_to_self_is_rejected(client, uow):
    resp = client.post(
        "/api/v1/messages",
        headers=_auth(_make_token(1)),
        json={"recipient_id": 1, "content": "me"},
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"
    assert uow.messages._messages == []


def test_send_missing_content(client, uow):
    resp = client.post(
        "/api/v1/messages",
        headers=_auth(_make_token(1)),
        json={"recipient_id": 2},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Recipient ID and content are required"


def test_send_to_unknown_recipient(client):
    resp = client.post(
        "/api/v1/messages",
        headers=_auth(_make_token(1)),
        json={"recipient_id": 99, "content": "anyone?"},
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_mark_read_permissions(client, uow):
    msg = make_message(sender_id=1, recipient_id=2)
    uow.add_messages(msg)

    by_sender = client.patch(f"/api/v1/messages/{msg.id}/read", headers=_auth(_make_token(1)))
    assert by_sender.status_code == 403

    by_recipient = client.patch(f"/api/v1/messages/{msg.id}/read", headers=_auth(_make_token(2)))
    again = client.patch(f"/api/v1/messages/{msg.id}/read", headers=_auth(_make_token(2)))
    assert by_recipient.status_code == 200
    assert again.status_code == 200
    assert again.json()["is_read"] is True


def test_mark_read_unknown_message(client):
    resp = client.patch(
        f"/api/v1/messages/{uuid.uuid4()}/read",
        headers=_auth(_make_token(2)),
    )
    assert resp.status_code == 404


def test_thread_with_unknown_user(client):
    resp = client.get("/api/v1/messages/404", headers=_auth(_make_token(1)))
    assert resp.status_code == 404


def test_search_users(client):
    resp = client.get("/api/v1/users", params={"search": "fox"}, headers=_auth(_make_token(2)))
    assert resp.status_code == 200
    users = resp.json()
    assert [u["id"] for u in users] == [1]
    assert "email" not in users[0]


def test_get_user(client):
    resp = client.get("/api/v1/users/2", headers=_auth(_make_token(1)))
    assert resp.status_code == 200
    assert resp.json()["name"] == "Bob"


def test_unauthorized_without_token(client):
    resp = client.get("/api/v1/messages/conversations")
    assert resp.status_code == 401


def test_expired_token_rejected(client):
    token = _make_token(1, expires_in=timedelta(seconds=-10))
    resp = client.get("/api/v1/messages/conversations", headers=_auth(token))
    assert resp.status_code == 401


def test_token_for_deleted_user_rejected(client):
    resp = client.get("/api/v1/messages/conversations", headers=_auth(_make_token(555)))
    assert resp.status_code == 401


def test_storage_failure_is_reported_generically(client, uow):
    async def _broken(_message):
        raise StorageError("MessageWriterRepo.create failed: OperationalError")

    uow.messages_w.create = _broken

    resp = client.post(
        "/api/v1/messages",
        headers=_auth(_make_token(1)),
        json={"recipient_id": 2, "content": "lost"},
    )
    assert resp.status_code == 500
    assert resp.json()["error"] == "storage_error"
    assert "OperationalError" not in resp.json()["detail"]


def test_missing_token_has_error_kind(client):
    resp = client.get("/api/v1/messages/conversations")
    assert resp.status_code == 401
    assert resp.json()["error"] == "unauthorized"
    assert resp.json()["detail"] == "No token provided. Please authenticate."
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_invalid_token_has_error_kind(client):
    resp = client.get("/api/v1/messages/conversations", headers=_auth("not-a-jwt"))
    assert resp.status_code == 401
    assert resp.json()["error"] == "unauthorized"
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_malformed_body_has_error_kind(client, uow):
    resp = client.post(
        "/api/v1/messages",
        headers=_auth(_make_token(1)),
        json={"recipient_id": "abc", "content": "hi"},
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"
    assert "recipient_id" in resp.json()["detail"]
    assert uow.messages._messages == []


@pytest.mark.parametrize(
    "method,path",
    [
        ("patch", "/api/v1/messages/not-a-uuid/read"),
        ("get", "/api/v1/messages/99999999999999999999"),
        ("get", "/api/v1/messages/0"),
        ("get", "/api/v1/users/99999999999999999999"),
    ],
)
def test_malformed_path_has_error_kind(client, method, path):
    resp = getattr(client, method)(path, headers=_auth(_make_token(1)))
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"
    assert isinstance(resp.json()["detail"], str)


def test_recipient_id_out_of_range_rejected(client, uow):
    resp = client.post(
        "/api/v1/messages",
        headers=_auth(_make_token(1)),
        json={"recipient_id": 2**63, "content": "hi"},
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"
    assert uow.messages._messages == []


def test_token_subject_out_of_range_rejected(client):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": str(2**64), "iat": now, "exp": now + timedelta(hours=1)},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    resp = client.get("/api/v1/messages/conversations", headers=_auth(token))
    assert resp.status_code == 401
    assert resp.json()["error"] == "unauthorized"


def test_unknown_route_has_error_kind(client):
    resp = client.get("/api/v1/nowhere")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"
