"""
Key/Value Storage Interface
Persistent client state (token, user data, slug caches)
"""
from abc import ABC, abstractmethod
from typing import Optional


# Storage keys shared with the web client
AUTH_TOKEN_KEY = "auth_token"
USER_DATA_KEY = "user_data"


def user_slug_key(user_id: str) -> str:
    return f"user_slug_{user_id}"


class IKeyValueStore(ABC):
    """String key/value store interface"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value or None"""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key (no-op when absent)"""
        pass
