"""Client-side table rendering for record collections."""

from .controller import (
    ActionResult,
    Cell,
    Row,
    RowAction,
    TableController,
    actions_for,
    filter_records,
    matches,
    truncate,
)

__all__ = [
    "ActionResult",
    "Cell",
    "Row",
    "RowAction",
    "TableController",
    "actions_for",
    "filter_records",
    "matches",
    "truncate",
]
