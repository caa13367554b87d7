"""Configuration options for an editable table."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models.table import Row

# Action control ids inside the actions cell markup
BUTTON_EDIT = "bEdit"
BUTTON_DELETE = "bDel"
BUTTON_ACCEPT = "bAcep"
BUTTON_CANCEL = "bCanc"

DEFAULT_BUTTON_HTML = """<div class="btn-group pull-right">
    <button id="bEdit" type="button" class="btn btn-sm btn-default">
        <span class="fa fa-edit" > </span>
    </button>
    <button id="bDel" type="button" class="btn btn-sm btn-default">
        <span class="fa fa-trash" > </span>
    </button>
    <button id="bAcep" type="button" class="btn btn-sm btn-default" style="display:none;">
        <span class="fa fa-check-circle" > </span>
    </button>
    <button id="bCanc" type="button" class="btn btn-sm btn-default" style="display:none;">
        <span class="fa fa-times-circle" > </span>
    </button>
</div>"""


@dataclass(frozen=True)
class AdvancedOptions:
    """Presentation strings for the actions column. Opaque to the row engine."""

    column_label: str = "Actions"
    confirm_question: str = "Are you sure to delete this row?"
    button_html: str = DEFAULT_BUTTON_HTML


@dataclass(frozen=True)
class TableOptions:
    """Options for TableController.

    Attributes:
        editable_columns: Comma-separated data column indices ("1,3"), an
            iterable of indices, or None for all columns.
        add_button: Widget exposing ``configure(command=...)`` that adds a row.
        on_edit: Called with the row after an edit is accepted.
        on_before_delete: Called with the row before it is removed.
        on_delete: Called after a row was removed.
        on_add: Called after a row was added.
        advanced: Actions column label, delete prompt and button markup.
    """

    editable_columns: str | Iterable[int | str] | None = None
    add_button: Any = None
    on_edit: Callable[[Row], None] | None = None
    on_before_delete: Callable[[Row], None] | None = None
    on_delete: Callable[[], None] | None = None
    on_add: Callable[[], None] | None = None
    advanced: AdvancedOptions = field(default_factory=AdvancedOptions)

    def merged(self, **overrides: Any) -> TableOptions:
        """Return a copy with ``overrides`` applied.

        ``advanced`` may be an AdvancedOptions instance (replaces all advanced
        settings) or a dict (replaces only the named advanced settings).

        Raises:
            TypeError: If an option name is not recognised.
        """
        advanced = overrides.pop("advanced", None)
        result = replace(self, **overrides)
        if advanced is None:
            return result
        if isinstance(advanced, AdvancedOptions):
            return replace(result, advanced=advanced)
        return replace(result, advanced=replace(result.advanced, **advanced))

    @property
    def actions_cell_html(self) -> str:
        """Content of each row's actions cell."""
        return self.advanced.button_html
