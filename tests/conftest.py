# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"

from roadmap_votes.core.security import create_access_token, hash_password
from roadmap_votes.db.session import Base, configure_sqlite
from roadmap_votes.db.session import get_db as app_get_session
from roadmap_votes.main import app as fastapi_app
from roadmap_votes.models import Feature, User
from roadmap_votes.models.user import PENDING_APPROVAL
from roadmap_votes.schemas.feature import FeatureCreate
from roadmap_votes.services import api_key_service, feature_service, user_service

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = configure_sqlite(
        create_engine(
            TEST_DB_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits only release savepoints inside an outer transaction."""
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(
        bind=connection,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    user, _ = user_service.ensure_admin(
        db_session,
        email="admin@example.com",
        name="Admin",
        password="admin-password",
    )
    return user


@pytest.fixture()
def member_user(db_session: Session) -> User:
    """An approved, non-admin dashboard account."""
    user = User(
        email="member@example.com",
        name="Member",
        password_hash=hash_password("member-password"),
        role="user",
        banned=False,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def pending_user(db_session: Session) -> User:
    user = User(
        email="pending@example.com",
        name="Pending",
        password_hash=hash_password("pending-password"),
        role="user",
        banned=True,
        ban_reason=PENDING_APPROVAL,
    )
    db_session.add(user)
    db_session.commit()
    return user


def _bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, {'role': user.role})}"}


@pytest.fixture()
def admin_headers(admin_user: User) -> dict[str, str]:
    return _bearer(admin_user)


@pytest.fixture()
def member_headers(member_user: User) -> dict[str, str]:
    return _bearer(member_user)


@pytest.fixture()
def api_key_headers(db_session: Session, admin_user: User) -> dict[str, str]:
    """Headers carrying a freshly issued public API key."""
    _, raw_key = api_key_service.issue_key(db_session, admin_user, "test key")
    return {"x-api-key": raw_key}


@pytest.fixture()
def feature(db_session: Session) -> Feature:
    return feature_service.create_feature(
        db_session,
        FeatureCreate(title="Dark mode", description="A darker theme for the app"),
    )


@pytest.fixture()
def other_feature(db_session: Session) -> Feature:
    return feature_service.create_feature(
        db_session,
        FeatureCreate(title="CSV export", description="Export votes as CSV", status="in-progress"),
    )
