from .base import BASELINE_KEY, SNAPSHOTS_KEY, StorageBackend
from .file_storage import FileStorage
from .memory import InMemoryStorage

__all__ = [
    "StorageBackend",
    "FileStorage",
    "InMemoryStorage",
    "BASELINE_KEY",
    "SNAPSHOTS_KEY",
]
