"""
Tests for the authentication session
"""
import json

import httpx
import pytest

from application.services.auth.session import AuthSession
from application.services.storage.interfaces import AUTH_TOKEN_KEY, USER_DATA_KEY
from core.exceptions import ApiError
from domain.enums import UserRole


USER_PAYLOAD = {
    "id": "u1",
    "email": "jane@example.com",
    "firstName": "Jane",
    "lastName": "Doe",
    "role": "JOBSEEKER",
    "profileComplete": False,
}


def login_ok(request):
    return httpx.Response(200, json={"success": True, "data": {"user": USER_PAYLOAD, "token": "tok"}})


class TestLogin:
    """Test login and registration"""

    @pytest.mark.asyncio
    async def test_login_persists_user_and_token(self, make_api_client, memory_store):
        client, handler = make_api_client(login_ok)
        session = AuthSession(client, memory_store)

        user = await session.login("jane@example.com", "pw", "JOBSEEKER")

        assert user.email == "jane@example.com"
        assert user.role == UserRole.JOBSEEKER
        assert session.is_authenticated
        assert session.is_logging_in is False
        assert client.token == "tok"
        assert await memory_store.get(AUTH_TOKEN_KEY) == "tok"
        assert json.loads(await memory_store.get(USER_DATA_KEY))["id"] == "u1"
        assert json.loads(handler.requests[0].content) == {
            "email": "jane@example.com", "password": "pw", "role": "JOBSEEKER"
        }

    @pytest.mark.asyncio
    async def test_login_failure_sets_error(self, make_api_client, memory_store):
        """Test a rejected login keeps the session signed out"""
        client, _ = make_api_client(
            lambda request: httpx.Response(401, json={"success": False, "error": "Invalid credentials"})
        )
        session = AuthSession(client, memory_store)

        with pytest.raises(ApiError):
            await session.login("jane@example.com", "wrong", "JOBSEEKER")

        assert session.error == "Invalid credentials"
        assert session.user is None
        assert session.is_logging_in is False
        assert await memory_store.get(AUTH_TOKEN_KEY) is None

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope(self, make_api_client, memory_store):
        """Test a 200 answer with success=false is still a failure"""
        client, _ = make_api_client(
            lambda request: httpx.Response(200, json={"success": False, "message": "Account locked"})
        )
        session = AuthSession(client, memory_store)

        with pytest.raises(ApiError, match="Account locked"):
            await session.login("jane@example.com", "pw", "JOBSEEKER")

        assert session.error == "Account locked"

    @pytest.mark.asyncio
    async def test_missing_token(self, make_api_client, memory_store):
        client, _ = make_api_client(
            lambda request: httpx.Response(200, json={"success": True, "data": {"user": USER_PAYLOAD}})
        )
        session = AuthSession(client, memory_store)

        with pytest.raises(ValueError):
            await session.login("jane@example.com", "pw", "JOBSEEKER")

        assert session.user is None

    @pytest.mark.asyncio
    async def test_null_user(self, make_api_client, memory_store):
        """Test a success envelope with a null user is reported as a login error"""
        client, _ = make_api_client(
            lambda request: httpx.Response(200, json={"success": True, "data": {"user": None, "token": "t"}})
        )
        session = AuthSession(client, memory_store)

        with pytest.raises(ValueError):
            await session.login("jane@example.com", "pw", "JOBSEEKER")

        assert "missing user or token" in session.error
        assert session.user is None
        assert not session.is_logging_in
        assert memory_store.snapshot() == {}

    @pytest.mark.asyncio
    async def test_register(self, make_api_client, memory_store):
        client, handler = make_api_client(login_ok)
        session = AuthSession(client, memory_store)

        user = await session.register({"email": "jane@example.com", "password": "pw", "role": "JOBSEEKER"})

        assert user.id == "u1"
        assert session.is_registering is False
        assert str(handler.requests[0].url).endswith("/auth/register")


class TestRestoreAndLogout:
    """Test session restore, updates and logout"""

    @pytest.mark.asyncio
    async def test_initialize_restores_session(self, make_api_client, memory_store):
        await memory_store.set(AUTH_TOKEN_KEY, "tok")
        await memory_store.set(USER_DATA_KEY, json.dumps(USER_PAYLOAD))
        client, _ = make_api_client(login_ok)
        session = AuthSession(client, memory_store)

        user = await session.initialize()

        assert user.first_name == "Jane"
        assert session.loading is False
        assert session.is_authenticated

    @pytest.mark.asyncio
    async def test_initialize_discards_corrupt_user(self, make_api_client, memory_store):
        """Test unreadable stored user data clears both keys"""
        await memory_store.set(AUTH_TOKEN_KEY, "tok")
        await memory_store.set(USER_DATA_KEY, "{not json")
        client, _ = make_api_client(login_ok)
        session = AuthSession(client, memory_store)

        assert await session.initialize() is None

        assert session.error == "Invalid stored user data"
        assert memory_store.snapshot() == {}

    @pytest.mark.asyncio
    async def test_initialize_without_storage(self, make_api_client, memory_store):
        client, _ = make_api_client(login_ok)
        session = AuthSession(client, memory_store)

        assert await session.initialize() is None
        assert session.loading is False
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_logout_clears_even_when_backend_fails(self, make_api_client, memory_store):
        """Test local state is cleared when the logout call fails"""
        client, _ = make_api_client(lambda request: httpx.Response(500, json={"error": "down"}))
        session = AuthSession(client, memory_store)
        await client.set_token("tok")
        await memory_store.set(USER_DATA_KEY, json.dumps(USER_PAYLOAD))

        await session.logout()

        assert session.user is None
        assert client.token is None
        assert memory_store.snapshot() == {}

    @pytest.mark.asyncio
    async def test_update_user(self, make_api_client, memory_store):
        client, _ = make_api_client(login_ok)
        session = AuthSession(client, memory_store)
        await session.login("jane@example.com", "pw", "JOBSEEKER")

        user = await session.update_user(profile_complete=True, slug="jane-doe")

        assert user.profile_complete is True
        stored = json.loads(await memory_store.get(USER_DATA_KEY))
        assert stored["profileComplete"] is True
        assert stored["slug"] == "jane-doe"

    @pytest.mark.asyncio
    async def test_update_user_when_signed_out(self, make_api_client, memory_store):
        client, _ = make_api_client(login_ok)
        session = AuthSession(client, memory_store)

        assert await session.update_user(slug="x") is None
        assert await memory_store.get(USER_DATA_KEY) is None
