"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_auth_service`` and the access guard
(``require_session`` / ``get_current_user_id``) used by every protected
route.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import UnauthenticatedError
from auth.jwt import SessionClaims, SessionIssuer, TokenError
from auth.service import AuthService
from auth.store import SqlAlchemyUserStore, UserStore
from database.session import get_db_session

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401 like any other bad token
_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_session_issuer(request: Request) -> SessionIssuer:
    return request.app.state.session_issuer


def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return SqlAlchemyUserStore(session)


def get_auth_service(
    request: Request,
    store: UserStore = Depends(get_user_store),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> AuthService:
    return AuthService(
        store,
        issuer,
        bcrypt_rounds=request.app.state.settings.bcrypt_rounds,
    )


async def require_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> SessionClaims:
    """
    Verify the Bearer token and attach its claims to ``request.state.session``.

    Missing, malformed, forged and expired tokens all raise
    ``UnauthenticatedError``; the protected handler never runs.
    """
    if credentials is None:
        raise UnauthenticatedError("Missing Bearer token")
    try:
        claims = issuer.verify(credentials.credentials)
    except TokenError as exc:
        logger.info("Refused token on %s: %s", request.url.path, type(exc).__name__)
        raise UnauthenticatedError("Invalid or expired token") from exc
    request.state.session = claims
    return claims


async def get_current_user_id(
    claims: SessionClaims = Depends(require_session),
) -> str:
    """Return the authenticated ``user_id`` (UUID string)."""
    return claims.user_id
