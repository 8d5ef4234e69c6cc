from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

# Point the app at SQLite before any socialnet module builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from socialnet.core.security import create_access_token
from socialnet.db.base import Base
from socialnet.db.models import Post, User
from socialnet.db.session import get_db

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def db_session() -> Session:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def make_user(db_session: Session):
    def _make_user(username: str, full_name: str | None = None, is_deleted: bool = False) -> User:
        user = User(
            username=username,
            full_name=full_name or username.title(),
            email=f"{username}@example.com",
            password="not-a-real-hash",
            is_deleted=is_deleted,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_post(db_session: Session):
    counter = {"minutes": 0}

    def _make_post(author: User, content: str = "hello world", comments_enabled: bool = True,
                   is_deleted: bool = False, created_at: datetime | None = None) -> Post:
        # Each post is a minute newer than the previous one unless told otherwise
        counter["minutes"] += 1
        post = Post(
            user_id=author.id,
            content=content,
            comments_enabled=comments_enabled,
            is_deleted=is_deleted,
            created_at=created_at or BASE_TIME + timedelta(minutes=counter["minutes"]),
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def client(db_session: Session):
    from main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    def _auth_headers(user: User) -> dict:
        token = create_access_token({"sub": user.username})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
