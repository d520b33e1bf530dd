"""
Auth service — registration and login orchestration.

Registration: validate → hash → persist.  Login: lookup → verify → issue.
Store and hashing failures are converted to the ``auth.errors`` taxonomy
here so nothing lower-level reaches the transport layer.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import BaseModel

from auth.errors import ConflictError, InternalError, UnauthenticatedError
from auth.jwt import SessionIssuer
from auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from auth.store import DuplicateEmailError, StoreError, UserStore
from utils.validators import validate_registration

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"
INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache(maxsize=None)
def _placeholder_hash(rounds: int) -> str:
    """A real bcrypt hash to check against when the email is unknown."""
    return hash_password("no-such-account", rounds=rounds)


class RegisteredUser(BaseModel):
    id: str
    email: str


class IssuedToken(BaseModel):
    token: str


class AuthService:
    def __init__(
        self,
        store: UserStore,
        issuer: SessionIssuer,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self._store = store
        self._issuer = issuer
        self._rounds = bcrypt_rounds

    async def register(self, email: str, name: str, password: str) -> RegisteredUser:
        """Create a user with role ``"user"``; returns only id and email."""
        validate_registration(email, name, password)

        try:
            password_hash = hash_password(password, rounds=self._rounds)
        except Exception as exc:
            logger.exception("Password hashing failed")
            raise InternalError() from exc

        try:
            user = await self._store.create_user(
                email=email,
                display_name=name.strip(),
                password_hash=password_hash,
                role=DEFAULT_ROLE,
            )
        except DuplicateEmailError as exc:
            raise ConflictError("Email already registered") from exc
        except StoreError as exc:
            logger.exception("Could not persist new user")
            raise InternalError() from exc

        logger.info("Registered user %s", user.user_id)
        return RegisteredUser(id=str(user.user_id), email=user.email)

    async def login(self, email: str, password: str) -> IssuedToken:
        """
        Verify credentials and issue a session token.

        Unknown email and wrong password raise the same error so callers
        cannot tell which one happened.
        """
        try:
            user = await self._store.find_user_by_email(email)
        except StoreError as exc:
            logger.exception("User lookup failed")
            raise InternalError() from exc

        if user is None:
            # an unknown email still costs one bcrypt check, like a wrong password
            verify_password(password, _placeholder_hash(self._rounds))
            logger.info("Rejected login attempt")
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        token = self._issuer.issue(str(user.user_id), user.email, user.role)
        logger.info("Login: %s", user.user_id)
        return IssuedToken(token=token)
