"""
Profile Slug Cache
Remembers a user's chosen slug locally when the backend did not persist it
"""
import json
import time
from typing import Optional

from loguru import logger

from application.services.storage.interfaces import IKeyValueStore, user_slug_key


class SlugCache:
    """Per-user slug entries stored under user_slug_{id}"""

    def __init__(self, store: IKeyValueStore):
        self.store = store

    async def save(self, user_id: str, slug: str) -> None:
        entry = {
            "userId": user_id,
            "slug": slug,
            "timestamp": int(time.time() * 1000),
        }
        await self.store.set(user_slug_key(user_id), json.dumps(entry))
        logger.debug(f"Cached slug {slug!r} for user {user_id}")

    async def get(self, user_id: str) -> Optional[str]:
        raw = await self.store.get(user_slug_key(user_id))
        if not raw:
            return None

        try:
            entry = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable slug cache entry for user {user_id}")
            return None

        if not isinstance(entry, dict):
            return None
        return entry.get("slug")

    async def remove(self, user_id: str) -> None:
        await self.store.delete(user_slug_key(user_id))

    async def resolve(self, user_id: str, server_slug: Optional[str]) -> str:
        """Locally cached slug first, then the server's, else empty"""
        return await self.get(user_id) or server_slug or ""

    async def reconcile(self, user_id: str, requested_slug: Optional[str], saved_slug: Optional[str]) -> bool:
        """
        Record the outcome of a profile update that asked for a slug

        Returns:
            True when the backend stored the requested slug (local entry dropped),
            False when it did not (slug kept locally instead)
        """
        if not requested_slug:
            return True

        if saved_slug != requested_slug:
            logger.warning(
                f"Backend kept slug {saved_slug!r} instead of {requested_slug!r}; caching locally"
            )
            await self.save(user_id, requested_slug)
            return False

        await self.remove(user_id)
        return True
