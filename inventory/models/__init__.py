"""Domain models for the content inventory."""

from inventory.models.record import (
    CREATED_FIELD,
    DESCRIPTIVE_FIELDS,
    ID_FIELD,
    MODIFIED_FIELD,
    PIB_VALUES,
    REQUIRED_FIELDS,
    AssessmentStatus,
    Entity,
)

__all__ = [
    "AssessmentStatus",
    "Entity",
    "ID_FIELD",
    "CREATED_FIELD",
    "MODIFIED_FIELD",
    "REQUIRED_FIELDS",
    "DESCRIPTIVE_FIELDS",
    "PIB_VALUES",
]
