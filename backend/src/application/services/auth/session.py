"""
Authentication Session
Current user and token, persisted in key/value storage between runs
"""
import json
from typing import Any, Dict, Optional

from loguru import logger

from application.services.api_client import ApiClient
from application.services.storage.interfaces import AUTH_TOKEN_KEY, USER_DATA_KEY, IKeyValueStore
from core.exceptions import ApiError
from domain.entities import User


class AuthSession:
    """Login state for one client

    Mirrors the web client's auth context: after login/registration the user
    is kept under ``user_data`` and the token under ``auth_token``; both are
    restored by initialize() and removed by logout().
    """

    def __init__(self, client: ApiClient, store: IKeyValueStore):
        self.client = client
        self.store = store

        self.user: Optional[User] = None
        self.loading: bool = True
        self.is_logging_in: bool = False
        self.is_registering: bool = False
        self.error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.client.token is not None

    async def initialize(self) -> Optional[User]:
        """Restore user and token from storage"""
        token = await self.store.get(AUTH_TOKEN_KEY)
        user_data = await self.store.get(USER_DATA_KEY)

        if token and user_data:
            try:
                self.user = User.from_dict(json.loads(user_data))
                await self.client.set_token(token)
            except (ValueError, TypeError) as e:
                logger.error(f"Error parsing stored user data: {e}")
                await self.store.delete(AUTH_TOKEN_KEY)
                await self.store.delete(USER_DATA_KEY)
                self.user = None
                self.error = "Invalid stored user data"

        self.loading = False
        return self.user

    def clear_error(self) -> None:
        self.error = None

    async def login(self, email: str, password: str, role: str) -> User:
        """Authenticate and persist the session"""
        self.is_logging_in = True
        self.error = None

        try:
            response = await self.client.login(email, password, role)
            user = await self._establish(response, "Login failed")
        except (ApiError, ValueError) as e:
            logger.error(f"Login error: {e}")
            self.error = str(e) or "Login failed"
            raise
        finally:
            self.is_logging_in = False

        logger.info(f"Logged in as {user}")
        return user

    async def register(self, user_data: Dict[str, Any]) -> User:
        """Create an account and persist the session"""
        self.is_registering = True
        self.error = None

        try:
            response = await self.client.register(user_data)
            user = await self._establish(response, "Registration failed")
        except (ApiError, ValueError) as e:
            logger.error(f"Registration error: {e}")
            self.error = str(e) or "Registration failed"
            raise
        finally:
            self.is_registering = False

        logger.info(f"Registered {user}")
        return user

    async def logout(self) -> None:
        """End the session locally even if the backend call fails"""
        try:
            await self.client.logout()
        except ApiError as e:
            logger.error(f"Logout error: {e}")
        finally:
            self.user = None
            self.error = None
            await self.client.clear_token()
            await self.store.delete(USER_DATA_KEY)

    async def update_user(self, **changes: Any) -> Optional[User]:
        """Merge changes into the current user and persist them"""
        if self.user is None:
            return None

        self.user = self.user.with_updates(**changes)
        await self.store.set(USER_DATA_KEY, json.dumps(self.user.to_dict()))
        return self.user

    async def _establish(self, response: Dict[str, Any], default_error: str) -> User:
        envelope = response if isinstance(response, dict) else {}
        data = envelope.get("data")
        if not (envelope.get("success") and data):
            raise ApiError(envelope.get("error") or envelope.get("message") or default_error, payload=response)

        if not isinstance(data, dict) or not isinstance(data.get("user"), dict) or not data.get("token"):
            raise ValueError(f"{default_error}: response is missing user or token")

        user = User.from_dict(data["user"])
        await self.client.set_token(data["token"])
        await self.store.set(USER_DATA_KEY, json.dumps(user.to_dict()))
        self.user = user
        return user
