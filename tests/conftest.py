"""
Test configuration and fixtures for the test suite
"""
import datetime as dt
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from opencase_api.app import create_app
from opencase_api.auth.service import hash_password
from opencase_api.config import AppSettings
from opencase_api.db import (
    Database,
    Project,
    Session,
    User,
    Workspace,
    WorkspaceMember,
    init_engine,
    utcnow,
)

TEST_SECRET = "x" * 32


@pytest.fixture()
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        NODE_ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'opencase.db'}",
        JWT_SECRET=TEST_SECRET,
    )


@pytest.fixture()
def database(settings: AppSettings):
    db = Database(init_engine(settings.DATABASE_URL))
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture()
def db_session(database: Database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture()
def client(settings: AppSettings, database: Database):
    app = create_app(settings, database=database)
    with TestClient(app) as test_client:
        yield test_client


def make_user(session, email: str, name: str, password: str = "password123") -> User:
    user = User(email=email, name=name, password_hash=hash_password(password))
    session.add(user)
    session.commit()
    return user


def make_session(session, user: User, token: str, *, expires_in: dt.timedelta = dt.timedelta(hours=1)) -> Session:
    record = Session(user_id=user.id, token=token, expires_at=utcnow() + expires_in)
    session.add(record)
    session.commit()
    return record


def make_workspace(session, name: str, slug: str, members=(), project_count: int = 0) -> Workspace:
    """Create a workspace with ``members`` given as (user, role) pairs."""
    workspace = Workspace(name=name, slug=slug)
    for user, role in members:
        workspace.members.append(WorkspaceMember(user_id=user.id, role=role))
    for index in range(project_count):
        workspace.projects.append(Project(name=f"Project {index}", slug=f"project-{index}"))
    session.add(workspace)
    session.commit()
    return workspace


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
