"""File-backed storage under the project's ``.quallaa`` directory."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .base import StorageBackend

logger = logging.getLogger(__name__)

STATE_DIR = ".quallaa"


class FileStorage(StorageBackend):
    """Stores each key as ``<project>/.quallaa/<key>.json``.

    A missing file reads as None. Any other ``OSError`` (permission denied,
    a directory in the way) propagates to the caller unchanged.
    """

    def __init__(self, project_path: str | Path = "."):
        self._root = Path(project_path) / STATE_DIR

    def path_for(self, key: str) -> Path:
        return self._root / f"{key}.json"

    async def read(self, key: str) -> bytes | None:
        try:
            return await asyncio.to_thread(self.path_for(key).read_bytes)
        except FileNotFoundError:
            return None

    async def write(self, key: str, data: bytes) -> None:
        await self.ensure_container(key)
        path = self.path_for(key)
        await asyncio.to_thread(path.write_bytes, data)
        logger.debug("Wrote %d bytes to %s", len(data), path)

    async def exists(self, key: str) -> bool:
        return await asyncio.to_thread(self.path_for(key).is_file)

    async def ensure_container(self, key: str) -> None:
        await asyncio.to_thread(
            self.path_for(key).parent.mkdir, parents=True, exist_ok=True
        )
