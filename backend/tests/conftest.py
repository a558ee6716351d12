import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from taskportal.api.deps import db, session_manager
from taskportal.core.security import TokenCodec, hash_password
from taskportal.db.base import Base
from taskportal.main import app
from taskportal.models.user import User
from taskportal.services.session import SessionManager

TEST_SECRET = "api-test-secret"


@pytest.fixture()
def session_factory():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(eng)
    factory = sessionmaker(bind=eng, autoflush=False, autocommit=False, future=True)

    def _db():
        s = factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[db] = _db
    app.dependency_overrides[session_manager] = lambda: SessionManager(TokenCodec(TEST_SECRET), secure=False)
    try:
        yield factory
    finally:
        app.dependency_overrides.clear()
        eng.dispose()


@pytest.fixture()
def users(session_factory):
    s = session_factory()
    try:
        rows = [
            User(username="admin", password_hash=hash_password("admin123"), role="admin", position=None),
            User(username="alice", password_hash=hash_password("alice123"), role="staff", position="media_buyer"),
            User(username="bob", password_hash=hash_password("bob1234"), role="staff", position="graphic_design"),
        ]
        s.add_all(rows)
        s.commit()
        return {u.username: u.id for u in rows}
    finally:
        s.close()


@pytest.fixture()
def make_client(session_factory):
    def _make(username: str | None = None, password: str | None = None) -> TestClient:
        client = TestClient(app)
        if username is not None:
            r = client.post("/auth/login", json={"username": username, "password": password})
            assert r.status_code == 200, r.text
        return client
    return _make
