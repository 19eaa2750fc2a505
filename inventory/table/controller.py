"""Table controller: keyword filtering, row rendering and row actions."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any

from inventory.models import ID_FIELD, AssessmentStatus

SEARCH_FIELDS = ("processName", "content", "location")

COLUMNS = [
    ("processName", "Process Name"),
    ("content", "Content"),
    ("informationController", "Information Controller"),
    ("medium", "Medium"),
    ("location", "Location"),
    ("securityClassification", "Security Classification"),
    ("pib", "PIB"),
    ("status", "Status"),
    ("lastModified", "Last Modified"),
]

TRUNCATE_AT = 40
ELLIPSIS = "..."

ACTIONS = ("view", "edit", "submit")


@dataclass
class Cell:
    """A rendered table cell. ``title`` holds the full text when truncated."""

    text: str
    title: str | None = None


@dataclass
class RowAction:
    """A row action button and whether it is enabled."""

    name: str
    enabled: bool


@dataclass
class Row:
    """A rendered table row."""

    record_id: str
    cells: list[Cell]
    actions: list[RowAction]


@dataclass
class ActionResult:
    """Outcome of a dispatched row action.

    ``patch`` is set when the action needs to be persisted through the API.
    """

    action: str
    record_id: str
    record: dict[str, Any]
    patch: dict[str, Any] | None = None
    message: str = ""


def display_value(value: Any) -> str:
    """Render a field value; missing values render as an empty string."""
    if value is None:
        return ""
    return str(value)


def truncate(text: str, limit: int = TRUNCATE_AT) -> Cell:
    """Truncate long text, keeping the full text as a tooltip."""
    if len(text) > limit:
        return Cell(text=text[:limit] + ELLIPSIS, title=text)
    return Cell(text=text)


def matches(record: dict[str, Any], query: str) -> bool:
    """Case-insensitive substring match against the search fields."""
    needle = query.strip().lower()
    if not needle:
        return True
    return any(needle in display_value(record.get(name)).lower() for name in SEARCH_FIELDS)


def filter_records(records: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    return [r for r in records if matches(r, query)]


def actions_for(record: dict[str, Any]) -> list[RowAction]:
    """Derive action enablement from the record status alone."""
    status = record.get("status")
    return [
        RowAction("view", True),
        RowAction("edit", status != AssessmentStatus.APPROVED.value),
        RowAction("submit", status == AssessmentStatus.DRAFT.value),
    ]


@dataclass
class TableController:
    """Holds the fetched baseline and the current filtered view."""

    columns: list[tuple[str, str]] = field(default_factory=lambda: list(COLUMNS))
    all_records: list[dict[str, Any]] = field(default_factory=list)
    query: str = ""

    def load(self, records: list[dict[str, Any]]) -> None:
        """Replace the baseline with a freshly fetched collection."""
        self.all_records = list(records)

    def search(self, query: str) -> list[dict[str, Any]]:
        """Set the search query and return the filtered view."""
        self.query = query or ""
        return self.filtered()

    def filtered(self) -> list[dict[str, Any]]:
        return filter_records(self.all_records, self.query)

    def find(self, record_id: str) -> dict[str, Any]:
        """Get a baseline record by id.

        Raises:
            KeyError: If the record is not in the baseline.
        """
        for record in self.all_records:
            if display_value(record.get(ID_FIELD)) == record_id:
                return record
        raise KeyError(f"Record '{record_id}' not found")

    def upsert(self, record: dict[str, Any]) -> None:
        """Put a created or updated record into the baseline."""
        record_id = display_value(record.get(ID_FIELD))
        for i, existing in enumerate(self.all_records):
            if display_value(existing.get(ID_FIELD)) == record_id:
                self.all_records[i] = record
                return
        self.all_records.append(record)

    def rows(self) -> list[Row]:
        """Render the filtered view into rows."""
        return [
            Row(
                record_id=display_value(record.get(ID_FIELD)),
                cells=[truncate(display_value(record.get(name))) for name, _ in self.columns],
                actions=actions_for(record),
            )
            for record in self.filtered()
        ]

    def render_html(self) -> str:
        """Render the filtered view as an HTML table.

        Buttons carry ``data-action`` and ``data-id`` attributes for a
        single delegated click listener.
        """
        head = "".join(f"<th>{html.escape(label)}</th>" for _, label in self.columns)
        body_rows = []
        for row in self.rows():
            cells = []
            for cell in row.cells:
                title = f' title="{html.escape(cell.title)}"' if cell.title else ""
                cells.append(f"<td{title}>{html.escape(cell.text)}</td>")
            buttons = []
            for action in row.actions:
                disabled = "" if action.enabled else " disabled"
                buttons.append(
                    f'<button type="button" data-action="{action.name}" '
                    f'data-id="{html.escape(row.record_id)}"{disabled}>'
                    f"{action.name.capitalize()}</button>"
                )
            cells.append(f'<td class="actions">{"".join(buttons)}</td>')
            body_rows.append(f"<tr>{''.join(cells)}</tr>")

        if not body_rows:
            span = len(self.columns) + 1
            body_rows.append(f'<tr><td colspan="{span}" class="empty">No records found</td></tr>')

        return (
            f'<table class="data-table"><thead><tr>{head}<th>Actions</th></tr></thead>'
            f"<tbody>{''.join(body_rows)}</tbody></table>"
        )

    def dispatch(self, action: str, record_id: str) -> ActionResult:
        """Handle a row action keyed by action name and record id.

        ``view`` and ``edit`` are local. ``submit`` returns a patch moving
        the record from Draft to In Review; the caller persists it.

        Raises:
            KeyError: If the record is not in the baseline.
            ValueError: If the action is unknown or disabled for the record.
        """
        if action not in ACTIONS:
            raise ValueError(f"Unknown action '{action}'")

        record = self.find(record_id)
        enabled = {a.name: a.enabled for a in actions_for(record)}
        if not enabled[action]:
            raise ValueError(
                f"Action '{action}' is not available for status '{display_value(record.get('status'))}'"
            )

        if action == "view":
            return ActionResult(action, record_id, record, message=f"Viewing {record.get('processName', record_id)}")
        if action == "edit":
            return ActionResult(action, record_id, dict(record), message=f"Editing {record.get('processName', record_id)}")

        patch = {
            "processName": record.get("processName"),
            "status": AssessmentStatus.IN_REVIEW.value,
        }
        return ActionResult(action, record_id, record, patch=patch, message="Submitted for review")
