"""
Error taxonomy for the authentication core.

Every lower-level failure (store, hashing, token verification) is converted
into one of these four kinds before it reaches the HTTP boundary, where
``api.errors`` renders it.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import status


class AuthError(Exception):
    """Base class; ``kind`` and ``status_code`` drive the HTTP response."""

    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "kind": self.kind}


class InvalidInputError(AuthError):
    kind = "invalid_input"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.field:
            body["field"] = self.field
        return body


class ConflictError(AuthError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class UnauthenticatedError(AuthError):
    """Bad credentials or a missing/invalid/expired token — one shape for all."""

    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class InternalError(AuthError):
    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
