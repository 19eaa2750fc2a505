"""Record models for the content inventory."""

from enum import Enum


class Entity(str, Enum):
    """Record types, one entity file each."""

    ASSESSMENTS = "assessments"
    RFIS = "rfis"

    @property
    def filename(self) -> str:
        return f"{self.value}.json"

    @property
    def is_read_only(self) -> bool:
        return self is Entity.RFIS


class AssessmentStatus(str, Enum):
    """Workflow status of an assessment."""

    DRAFT = "Draft"
    IN_REVIEW = "In Review"
    APPROVED = "Approved"


# Fields a client may not set; the store assigns them.
ID_FIELD = "id"
CREATED_FIELD = "createdDate"
MODIFIED_FIELD = "lastModified"

REQUIRED_FIELDS = ("processName", "status")

DESCRIPTIVE_FIELDS = (
    "processName",
    "content",
    "informationController",
    "medium",
    "location",
    "securityClassification",
    "pib",
    "fctFunction",
    "fctActivity",
)

PIB_VALUES = ("Yes", "No")
