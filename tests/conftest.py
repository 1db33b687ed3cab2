from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from tasklist.database import get_db
from tasklist.main import app
from tasklist.models import Task, User
from tasklist.routers.auth import create_access_token
from tasklist.service import TaskService
from tasklist.store import TaskStore

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def db():
    """Session bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _make_user(db, email: str, name: str) -> User:
    user = User(email=email, name=name, hashed_password="not-a-real-hash")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def alice(db) -> User:
    return _make_user(db, "alice@example.com", "Alice")


@pytest.fixture()
def bob(db) -> User:
    return _make_user(db, "bob@example.com", "Bob")


@pytest.fixture()
def store(db) -> TaskStore:
    return TaskStore(db)


@pytest.fixture()
def service(store) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def make_task(db):
    """Insert a task directly, with control over ``created_at``.

    ``age`` is how many minutes before ``BASE_TIME`` the task was created.
    """

    def _make(owner: User, description: str, completed: bool = False, age: int = 0) -> Task:
        created_at = BASE_TIME - timedelta(minutes=age)
        task = Task(
            user_id=owner.id,
            description=description,
            completed=completed,
            created_at=created_at,
            updated_at=created_at,
        )
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    return _make


@pytest.fixture()
def anonymous_client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client_for(anonymous_client):
    """Return a client authenticated as the given user."""

    def _client(user: User) -> TestClient:
        token = create_access_token(data={"sub": user.email})
        anonymous_client.headers["Authorization"] = f"Bearer {token}"
        return anonymous_client

    return _client
