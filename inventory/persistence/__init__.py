"""Persistence for the content inventory."""

from pathlib import Path

from inventory.persistence.backends import InMemoryBackend, JsonFileBackend, RecordBackend
from inventory.persistence.errors import (
    ReadOnlyEntityError,
    RecordNotFoundError,
    RecordValidationError,
    StorageError,
    StoreError,
)
from inventory.persistence.record_store import RecordStore


def create_file_store(data_dir: str | Path) -> RecordStore:
    """Create a RecordStore over the JSON files in ``data_dir``."""
    return RecordStore(JsonFileBackend(data_dir))


__all__ = [
    "RecordBackend",
    "JsonFileBackend",
    "InMemoryBackend",
    "RecordStore",
    "create_file_store",
    "StoreError",
    "RecordValidationError",
    "RecordNotFoundError",
    "ReadOnlyEntityError",
    "StorageError",
]
