"""
Shared fixtures — an in-memory user store and a fast-hashing auth service.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from auth.jwt import SessionIssuer
from auth.service import AuthService
from auth.store import DuplicateEmailError
from config.settings import Settings
from database.models import User

TEST_SECRET = "test-secret-for-session-tokens"


class InMemoryUserStore:
    """Dict-backed stand-in for ``SqlAlchemyUserStore``; email is the unique key."""

    def __init__(self) -> None:
        self.users: Dict[str, User] = {}

    async def create_user(
        self, email: str, display_name: str, password_hash: str, role: str = "user"
    ) -> User:
        if email in self.users:
            raise DuplicateEmailError(email)
        user = User(
            user_id=uuid.uuid4(),
            email=email,
            display_name=display_name,
            password_hash=password_hash,
            role=role,
            created_at=datetime.now(timezone.utc),
        )
        self.users[email] = user
        return user

    async def find_user_by_email(self, email: str) -> Optional[User]:
        return self.users.get(email)

    async def list_users(self) -> List[User]:
        return list(self.users.values())


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def issuer() -> SessionIssuer:
    return SessionIssuer(TEST_SECRET)


@pytest.fixture
def service(store, issuer) -> AuthService:
    # Minimum bcrypt cost keeps the suite fast
    return AuthService(store, issuer, bcrypt_rounds=4)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment="development",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def client(settings):
    from main import create_app

    with TestClient(create_app(settings)) as test_client:
        yield test_client
