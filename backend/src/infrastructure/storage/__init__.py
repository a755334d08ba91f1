"""Key/value store implementations"""
from typing import Optional

from application.services.storage.interfaces import IKeyValueStore
from core.config import settings
from .memory_store import MemoryKeyValueStore
from .json_file_store import JsonFileKeyValueStore
from .redis_store import RedisKeyValueStore


def create_key_value_store(backend: Optional[str] = None) -> IKeyValueStore:
    """Build the store selected by STORAGE_BACKEND"""
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "file":
        return JsonFileKeyValueStore(settings.STORAGE_PATH)
    if backend == "redis":
        return RedisKeyValueStore(settings.REDIS_URL)
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "create_key_value_store",
    "MemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "RedisKeyValueStore",
]
