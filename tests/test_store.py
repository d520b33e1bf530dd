"""
Tests for SqlAlchemyUserStore against a temporary SQLite database.
"""

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError

from auth.store import DuplicateEmailError, SqlAlchemyUserStore, StoreError
from database.session import build_engine, build_session_factory, create_tables


@pytest_asyncio.fixture
async def db(settings):
    engine = build_engine(settings)
    await create_tables(engine)
    factory = build_session_factory(engine)
    async with factory() as session:
        yield session
    await engine.dispose()


class TestSqlAlchemyUserStore:
    @pytest.mark.asyncio
    async def test_create_and_list_users(self, db):
        store = SqlAlchemyUserStore(db)
        await store.create_user("a@x.com", "A", "hash-a")
        await store.create_user("b@x.com", "B", "hash-b", role="admin")

        users = await store.list_users()

        assert {u.email: u.role for u in users} == {"a@x.com": "user", "b@x.com": "admin"}

    @pytest.mark.asyncio
    async def test_unique_email_enforced_by_table(self, db):
        store = SqlAlchemyUserStore(db)
        await store.create_user("a@x.com", "A", "hash-a")

        with pytest.raises(DuplicateEmailError):
            await store.create_user("a@x.com", "Other", "hash-other")

        found = await store.find_user_by_email("a@x.com")
        assert found.display_name == "A"
        assert len(await store.list_users()) == 1

    @pytest.mark.asyncio
    async def test_find_unknown_email(self, db):
        assert await SqlAlchemyUserStore(db).find_user_by_email("nobody@x.com") is None

    @pytest.mark.asyncio
    async def test_list_failure_becomes_store_error(self):
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(StoreError):
            await SqlAlchemyUserStore(session).list_users()
