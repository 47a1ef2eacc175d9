"""Pytest fixtures for API and service tests.

Each test gets a fresh in-memory SQLite database and a small fixed snippet
corpus. GitHub is never contacted: tests patch GitHubClient or hand it an
httpx.MockTransport.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import bugsync.models  # noqa: F401
from bugsync.core.db import Base, get_db
from bugsync.main import app
from bugsync.services.snippets import Snippet, SnippetMatcher, get_matcher


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    db = Session()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def snippets() -> list[Snippet]:
    return [
        Snippet(id="crash", title="Crash handling", snippet="try: ...", description="App crashes", keywords=("crash",)),
        Snippet(id="login", title="Login issues", snippet="check session", description="Auth", keywords=("login", "auth")),
        Snippet(id="cat", title="Categories", snippet="", description="Category bugs", keywords=("cat",)),
    ]


@pytest.fixture
def matcher(snippets) -> SnippetMatcher:
    return SnippetMatcher(snippets)


@pytest.fixture
def client(db_session, matcher):
    """TestClient on the real app with DB and matcher overridden."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_matcher] = lambda: matcher
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
