from __future__ import annotations

from .base import StorageBackend


class InMemoryStorage(StorageBackend):
    """Dict-backed storage; nothing survives the process."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    async def read(self, key: str) -> bytes | None:
        return self._data.get(key)

    async def write(self, key: str, data: bytes) -> None:
        self._data[key] = bytes(data)

    async def exists(self, key: str) -> bool:
        return key in self._data

    async def ensure_container(self, key: str) -> None:
        return None
