"""
Credential store — the narrow capability the auth service needs.

``UserStore`` is what ``AuthService`` depends on; ``SqlAlchemyUserStore``
backs it with the ``users`` table, and tests use an in-memory fake.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import helpers
from database.models import User

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """The store's unique constraint on ``email`` rejected an insert."""


class StoreError(Exception):
    """Any other store failure."""


class UserStore(Protocol):
    async def create_user(
        self, email: str, display_name: str, password_hash: str, role: str = "user"
    ) -> User: ...

    async def find_user_by_email(self, email: str) -> Optional[User]: ...

    async def list_users(self) -> List[User]: ...


class SqlAlchemyUserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_user(
        self, email: str, display_name: str, password_hash: str, role: str = "user"
    ) -> User:
        try:
            return await helpers.insert_user(
                self._session, email, display_name, password_hash, role
            )
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateEmailError(email) from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise StoreError(str(exc)) from exc

    async def find_user_by_email(self, email: str) -> Optional[User]:
        try:
            return await helpers.get_user_by_email(self._session, email)
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    async def list_users(self) -> List[User]:
        try:
            return await helpers.list_users(self._session)
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
