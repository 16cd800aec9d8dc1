import datetime as dt

import pytest
from sqlalchemy import select

from opencase_api.auth import AuthService, Authenticated, resolve_auth
from opencase_api.auth.schemas import LoginRequest, RegisterRequest
from opencase_api.auth.service import verify_password, workspace_slug_for
from opencase_api.db import Session as SessionRecord
from opencase_api.db import User, WorkspaceMember
from opencase_api.errors import ApiError

from conftest import bearer, make_session, make_user


def _register(service, email="Ada@Example.com", name="Ada Lovelace", password="password123"):
    return service.register(RegisterRequest(email=email, password=password, name=name))


def test_workspace_slug_for():
    assert workspace_slug_for("Ada Lovelace", "0123456789abcdef") == "ada-lovelace-abcdef"
    assert workspace_slug_for("!!!", "0123456789abcdef") == "my-workspace-abcdef"
    assert workspace_slug_for("x" * 80, "abcdef123456") == "x" * 50 + "-123456"


def test_register_creates_user_session_and_workspace(db_session):
    service = AuthService(session=db_session)

    result = _register(service)

    user = db_session.execute(select(User)).scalar_one()
    assert user.email == "ada@example.com"
    assert verify_password("password123", user.password_hash)
    assert result.user.id == user.id
    assert len(result.session.token) == 64

    membership = db_session.execute(select(WorkspaceMember)).scalar_one()
    assert membership.user_id == user.id
    assert membership.role == "owner"
    assert membership.workspace.name == "Ada Lovelace's Workspace"
    assert membership.workspace.slug == f"ada-lovelace-{user.id[-6:]}"

    assert isinstance(resolve_auth(db_session, f"Bearer {result.session.token}"), Authenticated)


def test_register_duplicate_email_rejected(db_session):
    service = AuthService(session=db_session)
    _register(service)

    with pytest.raises(ApiError) as excinfo:
        _register(service, email="ada@example.com", name="Other")

    assert excinfo.value.status_code == 400
    assert excinfo.value.code == "EMAIL_EXISTS"


def test_login_success_and_failures(db_session):
    service = AuthService(session=db_session)
    make_user(db_session, "ada@example.com", "Ada", password="correct-horse")

    result = service.login(LoginRequest(email="ADA@example.com", password="correct-horse"))
    assert result.user.email == "ada@example.com"

    for email, password in [("ada@example.com", "wrong"), ("nobody@example.com", "correct-horse")]:
        with pytest.raises(ApiError) as excinfo:
            service.login(LoginRequest(email=email, password=password))
        assert excinfo.value.status_code == 401
        assert excinfo.value.message == "Invalid email or password"


def test_logout_removes_session(db_session):
    service = AuthService(session=db_session)
    user = make_user(db_session, "ada@example.com", "Ada")
    make_session(db_session, user, "tok-ada")

    service.logout("tok-ada")

    assert db_session.execute(select(SessionRecord)).first() is None


def test_clean_expired_sessions(db_session):
    service = AuthService(session=db_session)
    user = make_user(db_session, "ada@example.com", "Ada")
    make_session(db_session, user, "tok-live")
    make_session(db_session, user, "tok-old-1", expires_in=dt.timedelta(days=-1))
    make_session(db_session, user, "tok-old-2", expires_in=dt.timedelta(hours=-2))

    removed = service.clean_expired_sessions()

    assert removed == 2
    tokens = db_session.execute(select(SessionRecord.token)).scalars().all()
    assert tokens == ["tok-live"]


def test_register_login_me_logout_flow(client):
    registered = client.post(
        "/api/auth/register",
        json={"email": "grace@example.com", "password": "password123", "name": "Grace"},
    )
    assert registered.status_code == 201
    data = registered.json()["data"]
    assert data["user"]["avatarUrl"] is None
    assert "expiresAt" in data["session"]

    login = client.post(
        "/api/auth/login",
        json={"email": "grace@example.com", "password": "password123"},
    )
    assert login.status_code == 200
    token = login.json()["data"]["session"]["token"]

    me = client.get("/api/auth/me", headers=bearer(token))
    assert me.status_code == 200
    assert me.json()["data"]["user"]["email"] == "grace@example.com"

    workspaces = client.get("/api/workspaces", headers=bearer(token))
    assert [w["name"] for w in workspaces.json()["data"]] == ["Grace's Workspace"]

    logout = client.post("/api/auth/logout", headers=bearer(token))
    assert logout.json() == {"data": {"success": True}}

    after = client.get("/api/auth/me", headers=bearer(token))
    assert after.status_code == 401
    assert after.json()["error"]["message"] == "Not authenticated"


def test_logout_without_session(client):
    response = client.post("/api/auth/logout")

    assert response.status_code == 401
    assert response.json()["error"] == {"code": "UNAUTHORIZED", "message": "Not authenticated"}


def test_register_validation_error_envelope(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "not-an-email", "password": "short", "name": ""},
    )

    assert response.status_code == 400
    body = response.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    fields = {tuple(err["loc"])[-1] for err in body["details"]["errors"]}
    assert {"email", "password", "name"} <= fields


@pytest.mark.parametrize("email", ["a..b@example..com", "ada@", "@example.com", "ada example@example.com"])
def test_register_rejects_malformed_email(client, db_session, email):
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": "password123", "name": "Ada"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert db_session.execute(select(User)).first() is None
