"""
Tests for AuthService against the in-memory store.
"""

import pytest
from unittest.mock import AsyncMock, patch

from auth.errors import (
    ConflictError,
    InternalError,
    InvalidInputError,
    UnauthenticatedError,
)
from auth.password import verify_password
from auth.service import AuthService
from auth.store import StoreError


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_id_and_email(self, service, store):
        created = await service.register("a@x.com", "A", "password123")

        assert created.id
        assert created.email == "a@x.com"
        assert set(created.model_dump()) == {"id", "email"}

        stored = store.users["a@x.com"]
        assert stored.role == "user"
        assert stored.password_hash != "password123"
        assert verify_password("password123", stored.password_hash)

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, service):
        await service.register("a@x.com", "A", "password123")
        with pytest.raises(ConflictError) as excinfo:
            await service.register("a@x.com", "Someone Else", "different-pass")
        assert excinfo.value.status_code == 409

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,name,password,field",
        [
            ("not-an-email", "A", "password123", "email"),
            ("", "A", "password123", "email"),
            ("a@x.com", "   ", "password123", "name"),
            ("a@x.com", "A", "short", "password"),
            ("a@x.com", "A", "x" * 73, "password"),
        ],
    )
    async def test_invalid_input_names_field(self, service, store, email, name, password, field):
        with pytest.raises(InvalidInputError) as excinfo:
            await service.register(email, name, password)
        assert excinfo.value.field == field
        assert store.users == {}

    @pytest.mark.asyncio
    async def test_store_failure_is_internal(self, issuer):
        broken = AsyncMock()
        broken.create_user.side_effect = StoreError("disk full")
        service = AuthService(broken, issuer, bcrypt_rounds=4)

        with pytest.raises(InternalError) as excinfo:
            await service.register("a@x.com", "A", "password123")
        assert "disk full" not in excinfo.value.message

    @pytest.mark.asyncio
    async def test_hash_failure_is_internal(self, service):
        with patch("auth.service.hash_password", side_effect=OSError("no entropy")):
            with pytest.raises(InternalError):
                await service.register("a@x.com", "A", "password123")


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_issues_verifiable_token(self, service, issuer):
        created = await service.register("a@x.com", "A", "password123")
        issued = await service.login("a@x.com", "password123")

        claims = issuer.verify(issued.token)
        assert claims.user_id == created.id
        assert claims.email == "a@x.com"
        assert claims.role == "user"

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, service):
        await service.register("a@x.com", "A", "password123")

        with pytest.raises(UnauthenticatedError) as wrong_password:
            await service.login("a@x.com", "wrong-password")
        with pytest.raises(UnauthenticatedError) as unknown_email:
            await service.login("nobody@x.com", "password123")

        assert wrong_password.value.to_dict() == unknown_email.value.to_dict()
        assert wrong_password.value.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_email_still_runs_bcrypt(self, service):
        await service.register("a@x.com", "A", "password123")

        with patch("auth.service.verify_password", wraps=verify_password) as checked:
            with pytest.raises(UnauthenticatedError):
                await service.login("nobody@x.com", "password123")
            with pytest.raises(UnauthenticatedError):
                await service.login("a@x.com", "wrong-password")

        assert checked.call_count == 2
        placeholder = checked.call_args_list[0].args[1]
        assert placeholder.startswith("$2")

    @pytest.mark.asyncio
    async def test_email_match_is_exact(self, service):
        await service.register("a@x.com", "A", "password123")
        with pytest.raises(UnauthenticatedError):
            await service.login("A@X.COM", "password123")

    @pytest.mark.asyncio
    async def test_lookup_failure_is_internal(self, issuer):
        broken = AsyncMock()
        broken.find_user_by_email.side_effect = StoreError("connection reset")
        service = AuthService(broken, issuer, bcrypt_rounds=4)

        with pytest.raises(InternalError):
            await service.login("a@x.com", "password123")
