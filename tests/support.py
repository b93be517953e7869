"""Shared fixtures for API tests: in-memory SQLite app wiring and user helpers."""

import unittest
from datetime import timedelta
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blogapi.core.database import get_db
from blogapi.core.security import (
    PasswordHasher,
    TokenService,
    get_password_hasher,
    get_token_service,
)
from blogapi.main import app
from blogapi.models import Base, User

TEST_SECRET = "test-secret-key"
# Minimum bcrypt cost keeps the suite fast.
TEST_HASHER = PasswordHasher(rounds=4)
TEST_TOKENS = TokenService(secret=TEST_SECRET, lifetime=timedelta(hours=1))


def make_engine() -> Engine:
    """Fresh in-memory database; StaticPool makes every session see the same one."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


class ApiTestCase(unittest.TestCase):
    """Runs each test against its own empty database via dependency overrides."""

    raise_server_exceptions = True

    def setUp(self) -> None:
        self.engine = make_engine()
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_password_hasher] = lambda: TEST_HASHER
        app.dependency_overrides[get_token_service] = lambda: TEST_TOKENS
        self.client = TestClient(app, raise_server_exceptions=self.raise_server_exceptions)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.engine.dispose()

    def register(
        self,
        username: str = "alice",
        email: str | None = None,
        password: str = "secret1",
    ) -> dict[str, Any]:
        """Register a user through the API and return the response body."""
        email = email or f"{username}@example.com"
        resp = self.client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def auth(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def promote_to_admin(self, user_id: int) -> None:
        with self.Session() as db:
            user = db.get(User, user_id)
            user.role = "admin"
            db.commit()

    def delete_user(self, user_id: int) -> None:
        with self.Session() as db:
            db.delete(db.get(User, user_id))
            db.commit()

    def create_post(
        self,
        token: str,
        title: str = "Hello World",
        content: str = "Some content here",
        **extra: Any,
    ) -> dict[str, Any]:
        resp = self.client.post(
            "/api/posts",
            json={"title": title, "content": content, **extra},
            headers=self.auth(token),
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()
