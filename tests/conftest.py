"""
- Spins up temp test DB
- Create tables before tests run
- Provide a db_session fixture and override FastAPI's get_db so routes use the test session.
- Give every test a fresh in-memory GameStore.
- Provide a client fixture (TestClient(app)) that already has the overrides applied.
"""
import os
import random
import pytest
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set before the app is imported: no dev startup hooks, no file-backed DB
os.environ["APP_ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from masterand.db import Base, get_db
from masterand.main import app, get_game_store
from masterand.store import GameStore
from masterand import models  # noqa: F401

# Use SQLite in-memory for tests (fast, isolated)
TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"

PALETTE_4 = ("red", "green", "blue", "yellow")
PALETTE_6 = ("red", "green", "blue", "yellow", "magenta", "cyan")


@pytest.fixture(scope="session")
def engine():
    # StaticPool + check_same_thread=False lets Starlette's TestClient and SQLAlchemy
    # share ONE in-memory SQLite database across threads.
    engine = create_engine(
        TEST_DATABASE_URL,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(engine) -> Generator:
    """Provide a clean session per test with rollback."""
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    db = TestingSessionLocal()
    try:
        yield db
        db.rollback()
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _clean_db(engine):
    """The recorder commits, so wipe rows before each test."""
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM game_results"))
        conn.execute(text("DELETE FROM players"))
    yield


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def game_store() -> GameStore:
    return GameStore()


@pytest.fixture(autouse=True)
def override_dep(db_session, game_store):
    """Force the app to use our test session and a fresh game store for every request."""
    def _get_db_for_tests():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db_for_tests
    app.dependency_overrides[get_game_store] = lambda: game_store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)
