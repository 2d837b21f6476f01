# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from setlist_board.core.security import create_access_token
from setlist_board.db.session import Base, build_engine
from setlist_board.db.session import get_db as app_get_session
from setlist_board.db.time import utcnow
from setlist_board.main import app as fastapi_app
from setlist_board.models import Post, User
from setlist_board.services.container import Services, build_services

TEST_DB_URL = "sqlite://"

_USERNAME_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so every test wipes the tables it touched.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


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
def services(db_session: Session) -> Services:
    """Posting-core components bound to the test session."""
    return build_services(db_session)


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users."""

    def _make_user(username: str | None = None, *, is_moderator: bool = False) -> User:
        user = User(
            username=username or f"user{next(_USERNAME_COUNTER)}",
            is_moderator=is_moderator,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory that writes post rows directly, bypassing the services.

    Feed tests use it to pin ``created_at`` and the aggregate columns.
    """

    def _make_post(
        user: User,
        content: str = "A post",
        *,
        age: timedelta | None = None,
        created_at: datetime | None = None,
        **fields: Any,
    ) -> Post:
        if created_at is None:
            created_at = utcnow() - (age or timedelta(0))
        post = Post(
            user_id=user.id,
            content=content,
            created_at=created_at,
            updated_at=created_at,
            **fields,
        )
        db_session.add(post)
        db_session.commit()
        return post

    return _make_post


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    return make_user("carol")


@pytest.fixture()
def moderator(make_user: Callable[..., User]) -> User:
    return make_user("mod", is_moderator=True)


def auth_headers(user: User) -> dict[str, str]:
    """Return authorization headers for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def alice_auth(alice: User) -> dict[str, str]:
    return auth_headers(alice)


@pytest.fixture()
def bob_auth(bob: User) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture()
def moderator_auth(moderator: User) -> dict[str, str]:
    return auth_headers(moderator)


@pytest.fixture()
def carol_auth(carol: User) -> dict[str, str]:
    return auth_headers(carol)


@pytest.fixture()
def auth_for() -> Callable[[User], dict[str, str]]:
    """Return the header factory for users created inside a test."""
    return auth_headers
