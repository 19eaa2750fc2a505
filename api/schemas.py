"""Pydantic schemas for API request/response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AssessmentPayload(BaseModel):
    """Body for creating or updating an assessment.

    Every field is optional here; required fields are checked by the
    record validator so the error can name them. Unknown fields are kept.
    """

    model_config = ConfigDict(extra="allow")

    processName: str | None = None
    content: str | None = None
    informationController: str | None = None
    medium: str | None = None
    location: str | None = None
    securityClassification: str | None = None
    pib: str | None = Field(default=None, description="Personal Information Bank flag: Yes or No")
    fctFunction: str | None = None
    fctActivity: str | None = None
    status: str | None = Field(default=None, description="Draft, In Review or Approved")

    def to_record(self) -> dict[str, Any]:
        """Fields the client actually sent, extras included."""
        return self.model_dump(exclude_unset=True)


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    error: str


class TraceResponse(BaseModel):
    """Recorded store and API events."""

    events: list[dict[str, Any]] = Field(default_factory=list)
