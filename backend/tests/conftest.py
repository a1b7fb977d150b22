from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from core.deps import get_waitlist_store
from core.exceptions import StorageError
from db.base_class import Base
from db.session import get_db
from main import app
from services.waitlist_store import InMemoryWaitlistStore


class FailingStore:
    def count_entries(self) -> int:
        raise StorageError("connection refused")

    def find_entry_by_email(self, email: str):
        raise StorageError("connection refused")

    def create_entry(self, data):
        raise StorageError("connection refused")


@pytest.fixture
def memory_store() -> InMemoryWaitlistStore:
    return InMemoryWaitlistStore()


@pytest.fixture
def client(memory_store):
    app.dependency_overrides[get_waitlist_store] = lambda: memory_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    app.dependency_overrides[get_waitlist_store] = lambda: FailingStore()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def sql_client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
