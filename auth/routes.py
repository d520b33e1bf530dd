"""
Auth API routes — register, login.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_auth_service
from auth.service import AuthService
from utils.schemas import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """Register a new user."""
    created = await service.register(req.email, req.name, req.password)
    return RegisterResponse(id=created.id, email=created.email)


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Login with email + password."""
    issued = await service.login(req.email, req.password)
    return TokenResponse(token=issued.token)
