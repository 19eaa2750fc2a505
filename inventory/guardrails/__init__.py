"""Guardrails for record validation."""

from .record_validator import (
    ValidationResult,
    missing_required_fields,
    validate_assessment,
)

__all__ = [
    "ValidationResult",
    "missing_required_fields",
    "validate_assessment",
]
