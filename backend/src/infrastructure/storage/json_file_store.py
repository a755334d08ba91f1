"""
JSON File Key/Value Store
Keeps all keys in a single JSON object on disk
"""
import asyncio
import json
from pathlib import Path
from typing import Dict, Optional

import aiofiles

from application.services.storage.interfaces import IKeyValueStore
from core.exceptions import StorageException
from core.logging_config import logger


class JsonFileKeyValueStore(IKeyValueStore):
    """File-backed store, the desktop equivalent of browser localStorage"""

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            raw = await f.read()

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageException(f"Corrupt storage file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageException(f"Corrupt storage file {self.path}: expected a JSON object")
        return data

    async def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, indent=2))
        tmp_path.replace(self.path)

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            data = await self._read()
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            data = await self._read()
            data[key] = value
            await self._write(data)
        logger.debug(f"Stored key {key} in {self.path}")

    async def delete(self, key: str) -> None:
        async with self._lock:
            data = await self._read()
            if key not in data:
                return
            del data[key]
            await self._write(data)
        logger.debug(f"Deleted key {key} from {self.path}")
