"""Validation guardrails for assessment records."""

from dataclasses import dataclass, field
from typing import Any

from inventory.models import (
    DESCRIPTIVE_FIELDS,
    PIB_VALUES,
    REQUIRED_FIELDS,
    AssessmentStatus,
)


@dataclass
class ValidationResult:
    """Result of validation."""

    is_valid: bool
    errors: list[str]
    warnings: list[str]
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def valid(cls, warnings: list[str] | None = None) -> "ValidationResult":
        """Create a valid result."""
        return cls(is_valid=True, errors=[], warnings=warnings or [])

    @classmethod
    def invalid(
        cls,
        errors: list[str],
        warnings: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> "ValidationResult":
        """Create an invalid result."""
        return cls(is_valid=False, errors=errors, warnings=warnings or [], metadata=metadata or {})


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def missing_required_fields(record: dict[str, Any]) -> list[str]:
    """Return the required fields that are absent or blank, in declaration order."""
    return [name for name in REQUIRED_FIELDS if _is_blank(record.get(name))]


def validate_assessment(record: Any) -> ValidationResult:
    """Validate an assessment record before it reaches storage.

    Missing required fields and non-string descriptive fields are errors.
    An unknown status or an unexpected PIB flag only produce warnings,
    since both are free-form in the stored data.

    Args:
        record: The candidate record (a create payload or a merged update).

    Returns:
        ValidationResult; ``metadata["missing_fields"]`` lists absent
        required fields.
    """
    if not isinstance(record, dict):
        return ValidationResult.invalid(["Record must be a JSON object"])

    errors: list[str] = []
    warnings: list[str] = []

    missing = missing_required_fields(record)
    if missing:
        errors.append(f"Missing required field(s): {', '.join(missing)}")

    for name in DESCRIPTIVE_FIELDS:
        value = record.get(name)
        if value is not None and not isinstance(value, str):
            errors.append(f"Field '{name}' must be a string")

    status = record.get("status")
    if isinstance(status, str) and status.strip():
        known = [s.value for s in AssessmentStatus]
        if status not in known:
            warnings.append(f"Unknown status '{status}' (expected one of: {', '.join(known)})")
    elif status is not None and not isinstance(status, str):
        errors.append("Field 'status' must be a string")

    pib = record.get("pib")
    if isinstance(pib, str) and pib and pib not in PIB_VALUES:
        warnings.append(f"PIB flag '{pib}' is not Yes/No")

    if errors:
        return ValidationResult.invalid(errors, warnings, {"missing_fields": missing})
    return ValidationResult.valid(warnings)
