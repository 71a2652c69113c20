from __future__ import annotations

from abc import ABC, abstractmethod

BASELINE_KEY = "roi-baseline"
SNAPSHOTS_KEY = "roi-snapshots"


class StorageBackend(ABC):
    """Abstract key-value persistence used by the baseline and snapshot stores."""

    @abstractmethod
    async def read(self, key: str) -> bytes | None:
        """Return the stored bytes, or None when nothing is stored under key."""
        ...

    @abstractmethod
    async def write(self, key: str, data: bytes) -> None:
        """Replace whatever is stored under key."""
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        ...

    @abstractmethod
    async def ensure_container(self, key: str) -> None:
        """Make sure a subsequent write to key has somewhere to go."""
        ...
