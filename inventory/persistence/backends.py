"""Persistence backends for the record store.

A backend reads and writes whole entity collections. It knows nothing about
ids, dates or validation; that lives in ``RecordStore``.
"""

from __future__ import annotations

import copy
import json
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from inventory.models import Entity
from inventory.persistence.errors import StorageError


class RecordBackend(ABC):
    """Whole-collection storage for one or more entities."""

    @abstractmethod
    def read(self, entity: Entity) -> list[dict[str, Any]] | None:
        """Return the stored collection, or None when nothing is stored yet."""

    @abstractmethod
    def write(self, entity: Entity, records: list[dict[str, Any]]) -> None:
        """Replace the stored collection."""


class JsonFileBackend(RecordBackend):
    """One JSON array file per entity inside ``data_dir``."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def path_for(self, entity: Entity) -> Path:
        return self.data_dir / entity.filename

    def read(self, entity: Entity) -> list[dict[str, Any]] | None:
        path = self.path_for(entity)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"{path.name} is not valid JSON: {e.msg} at line {e.lineno}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {path.name}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"{path.name} must hold a JSON array, got {type(data).__name__}")
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise StorageError(f"{path.name} item {i} must be a JSON object, got {type(item).__name__}")
        return data

    def write(self, entity: Entity, records: list[dict[str, Any]]) -> None:
        path = self.path_for(entity)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write a sibling file and move it into place so readers never see a partial array
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.stem}-",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(records, f, indent=2, ensure_ascii=False)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            # Keep the permissions of the file being replaced; mkstemp creates 0600
            os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode) if path.exists() else 0o644)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot write {path.name}: {e}") from e


class InMemoryBackend(RecordBackend):
    """Dict-backed backend for tests and demos. Data is lost on restart."""

    def __init__(self, initial: dict[Entity, list[dict[str, Any]]] | None = None):
        self._collections: dict[Entity, list[dict[str, Any]]] = {
            Entity(k): copy.deepcopy(v) for k, v in (initial or {}).items()
        }

    def read(self, entity: Entity) -> list[dict[str, Any]] | None:
        if entity not in self._collections:
            return None
        return copy.deepcopy(self._collections[entity])

    def write(self, entity: Entity, records: list[dict[str, Any]]) -> None:
        self._collections[entity] = copy.deepcopy(records)
