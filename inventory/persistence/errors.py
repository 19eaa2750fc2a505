"""Errors raised by the record store."""

from __future__ import annotations


class StoreError(Exception):
    """Base class for record store errors."""


class RecordValidationError(StoreError):
    """A record failed validation and was not stored."""

    def __init__(self, errors: list[str], warnings: list[str] | None = None):
        self.errors = errors
        self.warnings = warnings or []
        super().__init__("; ".join(errors))


class RecordNotFoundError(StoreError):
    """No record with the given id exists in the entity file."""

    def __init__(self, entity: str, record_id: str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"Record '{record_id}' not found in {entity}")


class ReadOnlyEntityError(StoreError):
    """The entity does not accept writes."""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"Entity '{entity}' is read-only")


class StorageError(StoreError):
    """The backing storage could not be read or written."""
