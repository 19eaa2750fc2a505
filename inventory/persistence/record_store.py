"""File-backed record store for assessments and RFIs."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from inventory.guardrails import validate_assessment
from inventory.models import CREATED_FIELD, ID_FIELD, MODIFIED_FIELD, Entity
from inventory.persistence.backends import RecordBackend
from inventory.persistence.errors import (
    ReadOnlyEntityError,
    RecordNotFoundError,
    RecordValidationError,
)
from inventory.tracing import log_event


@dataclass
class RecordStore:
    """Whole-collection store with list/get/create/update operations.

    Each mutation is a read-modify-write of the entire entity collection.
    Mutations on the same entity are serialised by a per-entity lock, so
    concurrent writers within one process never lose each other's changes.
    """

    backend: RecordBackend
    clock: Callable[[], datetime] = datetime.now
    _locks: dict[Entity, threading.Lock] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._locks = {entity: threading.Lock() for entity in Entity}

    def list(self, entity: Entity | str) -> list[dict[str, Any]]:
        """Return every record of an entity; an absent collection is empty."""
        entity = Entity(entity)
        records = self.backend.read(entity)
        if records is None:
            log_event(
                "missing_collection",
                "store",
                f"No stored {entity.value}; returning an empty collection",
                level=logging.WARNING,
            )
            return []
        return records

    def get(self, entity: Entity | str, record_id: str) -> dict[str, Any]:
        """Return one record by id.

        Raises:
            RecordNotFoundError: If no record has that id.
        """
        entity = Entity(entity)
        records = self.list(entity)
        return records[self._index_of(entity, records, record_id)]

    def create(self, entity: Entity | str, candidate: dict[str, Any]) -> dict[str, Any]:
        """Validate and append a new record.

        ``id``, ``createdDate`` and ``lastModified`` are assigned here and
        override anything the candidate supplies for them.

        Raises:
            RecordValidationError: If required fields are missing.
            ReadOnlyEntityError: If the entity does not accept writes.
        """
        entity = self._writable(entity)
        self._validate(candidate)

        with self._locks[entity]:
            records = self.list(entity)
            now = self.clock()
            today = now.date().isoformat()

            record = dict(candidate)
            record[ID_FIELD] = self._new_id(records, now)
            record[CREATED_FIELD] = today
            record[MODIFIED_FIELD] = today

            records.append(record)
            self.backend.write(entity, records)

        log_event("create", "store", f"Created {entity.value} record {record[ID_FIELD]}",
                  {"processName": record.get("processName"), "status": record.get("status")})
        return record

    def update(self, entity: Entity | str, record_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        """Shallow-merge ``patch`` over a stored record.

        Patch fields win, except that ``id`` stays pinned to ``record_id``
        and ``createdDate`` keeps its stored value. ``lastModified`` is
        refreshed. The merged record must still pass validation.

        Raises:
            RecordNotFoundError: If no record has that id.
            RecordValidationError: If the merged record is invalid.
            ReadOnlyEntityError: If the entity does not accept writes.
        """
        entity = self._writable(entity)
        if not isinstance(patch, dict):
            raise RecordValidationError(["Record must be a JSON object"])

        with self._locks[entity]:
            records = self.list(entity)
            index = self._index_of(entity, records, record_id)
            existing = records[index]

            merged = {**existing, **patch}
            merged[ID_FIELD] = record_id
            if CREATED_FIELD in existing:
                merged[CREATED_FIELD] = existing[CREATED_FIELD]
            else:
                merged.pop(CREATED_FIELD, None)
            merged[MODIFIED_FIELD] = self.clock().date().isoformat()

            self._validate(merged)

            records[index] = merged
            self.backend.write(entity, records)

        log_event("update", "store", f"Updated {entity.value} record {record_id}",
                  {"fields": sorted(patch)})
        return merged

    @staticmethod
    def _writable(entity: Entity | str) -> Entity:
        entity = Entity(entity)
        if entity.is_read_only:
            raise ReadOnlyEntityError(entity.value)
        return entity

    @staticmethod
    def _validate(record: Any) -> None:
        result = validate_assessment(record)
        if not result.is_valid:
            raise RecordValidationError(result.errors, result.warnings)
        for warning in result.warnings:
            log_event("validation_warning", "store", warning, level=logging.WARNING)

    @staticmethod
    def _index_of(entity: Entity, records: list[dict[str, Any]], record_id: str) -> int:
        for i, record in enumerate(records):
            if str(record.get(ID_FIELD)) == record_id:
                return i
        raise RecordNotFoundError(entity.value, record_id)

    @staticmethod
    def _new_id(records: list[dict[str, Any]], now: datetime) -> str:
        """Timestamp id in epoch milliseconds, bumped past any existing id."""
        taken = {str(r.get(ID_FIELD)) for r in records}
        candidate = int(now.timestamp() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)
