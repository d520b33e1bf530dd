"""
JWT-style session token creation and verification.

Tokens are base64url-encoded JSON claims signed with HMAC-SHA256::

    <base64url(claims)>.<hex signature>

Claims carry ``user_id``, ``email``, ``role`` and an absolute ``exp``
(Unix seconds).  There is no revocation list: a token is honoured for its
whole lifetime.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import logging
import re
import time
from base64 import b64decode, urlsafe_b64encode
from typing import Callable

from pydantic import BaseModel, ValidationError

from config.settings import DEFAULT_JWT_SECRET

logger = logging.getLogger(__name__)

TOKEN_TTL_SECONDS = 60 * 60 * 24

_SIGNATURE_RE = re.compile(r"[0-9a-f]{64}")


class SessionClaims(BaseModel):
    user_id: str
    email: str
    role: str
    exp: int


# ── Errors ─────────────────────────────────────────────────────────────


class TokenError(Exception):
    """Base for every reason a token is refused."""


class MalformedTokenError(TokenError):
    pass


class BadSignatureError(TokenError):
    pass


class ExpiredTokenError(TokenError):
    pass


class InsecureSecretError(RuntimeError):
    """Raised when the signing secret is empty or refused for this environment."""


# ── Issuer ─────────────────────────────────────────────────────────────


class SessionIssuer:
    """Issues and verifies signed session tokens with a shared HMAC secret."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise InsecureSecretError("Token signing secret is empty")
        self._secret = secret.encode()
        self._ttl = ttl_seconds
        self._clock = clock
        self.insecure = secret == DEFAULT_JWT_SECRET
        if self.insecure:
            logger.warning(
                "Session tokens are signed with the default secret; set JWT_SECRET"
            )

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, user_id: str, email: str, role: str) -> str:
        """Create a signed token for the given identity, valid for 24 hours."""
        claims = SessionClaims(
            user_id=user_id,
            email=email,
            role=role,
            exp=int(self._clock()) + self._ttl,
        )
        raw = json.dumps(claims.model_dump(), separators=(",", ":")).encode()
        payload = urlsafe_b64encode(raw).rstrip(b"=").decode()
        return payload + "." + self._sign(raw)

    def verify(self, token: str) -> SessionClaims:
        """
        Verify ``token`` and return its claims.

        Raises ``MalformedTokenError``, ``BadSignatureError`` or
        ``ExpiredTokenError``.
        """
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise MalformedTokenError("expected two dot-separated parts")
        payload, signature = parts
        if not _SIGNATURE_RE.fullmatch(signature):
            raise MalformedTokenError("signature is not a SHA-256 hex digest")
        try:
            raw = b64decode(
                payload + "=" * (-len(payload) % 4), altchars=b"-_", validate=True
            )
        except (binascii.Error, ValueError) as exc:
            raise MalformedTokenError("payload is not base64url") from exc

        if not hmac.compare_digest(signature.encode(), self._sign(raw).encode()):
            raise BadSignatureError("signature mismatch")

        try:
            claims = SessionClaims.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as exc:
            raise MalformedTokenError("claims are not valid") from exc

        if claims.exp <= self._clock():
            raise ExpiredTokenError("token expired")
        return claims
