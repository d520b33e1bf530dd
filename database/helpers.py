"""
Database helper functions — user inserts/lookups and bulk listing reads.

"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Product, User

logger = logging.getLogger(__name__)


async def insert_user(
    session: AsyncSession,
    email: str,
    display_name: str,
    password_hash: str,
    role: str = "user",
) -> User:
    """
    Insert a ``User`` row and commit.

    No existence check is made first: the unique index on ``users.email``
    decides, and a duplicate surfaces as ``sqlalchemy.exc.IntegrityError``.
    """
    user = User(
        user_id=uuid.uuid4(),
        email=email,
        display_name=display_name,
        password_hash=password_hash,
        role=role,
    )
    session.add(user)
    await session.flush()
    await session.commit()
    return user


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def list_users(session: AsyncSession) -> List[User]:
    result = await session.execute(select(User).order_by(User.created_at.asc()))
    return list(result.scalars().all())


async def list_products(session: AsyncSession) -> List[Product]:
    result = await session.execute(select(Product).order_by(Product.created_at.asc()))
    return list(result.scalars().all())
