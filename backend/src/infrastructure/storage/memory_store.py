"""In-process key/value store"""
from typing import Dict, Optional

from application.services.storage.interfaces import IKeyValueStore


class MemoryKeyValueStore(IKeyValueStore):
    """Dict-backed store; state lives only as long as the process"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)
