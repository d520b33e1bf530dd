"""
Pydantic request / response schemas for the HTTP API.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterResponse(BaseModel):
    id: str
    email: str


class TokenResponse(BaseModel):
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# Listings
# ═══════════════════════════════════════════════════════════════════════════════


class UserOut(BaseModel):
    """Public view of a user; the password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(validation_alias="user_id")
    email: str
    name: str = Field(validation_alias="display_name")
    role: str
    created_at: Optional[datetime] = None


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(validation_alias="product_id")
    name: str
    description: Optional[str] = None
    price: Decimal
    stock: int
    created_at: Optional[datetime] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: int
