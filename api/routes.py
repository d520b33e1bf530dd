"""
REST API routes — health check and read-only listings.
"""

from __future__ import annotations

import logging
import time
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_user_store, require_session
from auth.errors import InternalError
from auth.store import StoreError, UserStore
from database.helpers import list_products
from utils.schemas import HealthResponse, ProductOut, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()

protected = APIRouter(dependencies=[Depends(require_session)])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=int(time.time()))


@protected.get("/users", response_model=List[UserOut])
async def get_users(store: UserStore = Depends(get_user_store)):
    """All users, without password hashes."""
    try:
        return await store.list_users()
    except StoreError as exc:
        logger.exception("Could not list users")
        raise InternalError() from exc


@protected.get("/products", response_model=List[ProductOut])
async def get_products(session: AsyncSession = Depends(db_session)):
    return await list_products(session)


router.include_router(protected)
