"""Pytest fixtures — throwaway SQLite database for fast, isolated tests."""
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.database import Base, get_db
from app.main import app

# Import all models so they register with Base.metadata
from app.models.group import Group                  # noqa: F401
from app.models.invite import Invite                # noqa: F401
from app.models.category import Category, Nominee   # noqa: F401
from app.models.ballot import Ballot, Vote          # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # WAL for concurrent readers, foreign keys for ON DELETE CASCADE
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session, closed after the test."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: drive the API and return plain dicts
# ---------------------------------------------------------------------------
def error_of(resp) -> str:
    """Machine-stable reason of an error response."""
    return resp.json()["detail"]["error"]


def create_test_group(client: TestClient, title: str = "Oscars Night", max_members: int = 4,
                      host_name: str = "Host") -> dict:
    """Helper — POST /api/groups; adds the host token parsed from the admin link."""
    resp = client.post("/api/groups", json={
        "title": title,
        "max_members": max_members,
        "host_name": host_name,
    })
    assert resp.status_code == 201, resp.text
    data = resp.json()
    data["host_token"] = data["admin_link"].split("k=", 1)[1]
    return data


def issue_test_invites(client: TestClient, group: dict, count: int) -> list[dict]:
    """Helper — POST /api/groups/{code}/invites and return the created invites."""
    resp = client.post(
        f"/api/groups/{group['code']}/invites",
        params={"k": group["host_token"]},
        json={"count": count},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def apply_test_setup(client: TestClient, group: dict, keys: list[str]) -> dict:
    """Helper — POST /api/groups/{code}/setup."""
    resp = client.post(
        f"/api/groups/{group['code']}/setup",
        params={"k": group["host_token"]},
        json={"category_keys": keys},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def ballot_context(client: TestClient, group: dict, token: str) -> dict:
    """Helper — GET /api/groups/{code}/vote for an invite token."""
    resp = client.get(f"/api/groups/{group['code']}/vote", params={"t": token})
    assert resp.status_code == 200, resp.text
    return resp.json()


def full_ballot(context: dict, pick: int = 0) -> list[dict]:
    """One vote per category for the nominee at position ``pick``."""
    return [
        {"category_id": c["id"], "nominee_id": c["nominees"][pick]["id"]}
        for c in context["categories"]
    ]


def submit(client: TestClient, group: dict, token: str, votes: list[dict]):
    """Helper — POST /api/groups/{code}/vote, returns the raw response."""
    return client.post(
        f"/api/groups/{group['code']}/vote",
        params={"t": token},
        json={"votes": votes},
    )


def cast_test_ballot(client: TestClient, group: dict, token: str, pick: int = 0) -> dict:
    """Helper — vote for nominee ``pick`` in every category; asserts success."""
    context = ballot_context(client, group, token)
    resp = submit(client, group, token, full_ballot(context, pick))
    assert resp.status_code == 201, resp.text
    return resp.json()


def reveal_group(client: TestClient, group: dict):
    """Helper — POST /api/groups/{code}/reveal, returns the raw response."""
    return client.post(f"/api/groups/{group['code']}/reveal", params={"k": group["host_token"]})
