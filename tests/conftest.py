"""Shared fixtures: an in-memory catalog database and an API client bound to it."""

from datetime import datetime, timedelta
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from glowmatch.api.main import app
from glowmatch.api.metrics import metrics_service
from glowmatch.catalog.database import get_session, init_db
from glowmatch.catalog.repository import add_product


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory SQLite database with the catalog tables."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_product(session) -> Callable[..., str]:
    """Insert a product; later calls get newer ``created_at`` timestamps."""
    base_time = datetime(2024, 1, 1, 12, 0, 0)
    counter = {"n": 0}

    def _make(name: str = "Product", **fields) -> str:
        counter["n"] += 1
        fields.setdefault("created_at", base_time + timedelta(minutes=counter["n"]))
        return add_product(session, name=name, **fields)

    return _make


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """API client whose requests use the in-memory database."""

    def _override_session():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_session] = _override_session
    metrics_service.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
    metrics_service.reset()
