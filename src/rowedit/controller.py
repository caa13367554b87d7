"""Table controller: composes the row engine and exposes action intents.

UI adapters (buttons, keyboard shortcuts, tests) call the ``request_*``
intents directly. The per-row ActionBinding map is rebuilt after every
structural change and replaces previous entries, so rebinding never stacks
handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .debug_trace import logger
from .models.column_policy import ColumnPolicy
from .models.table import Cell, Column, Row, RowStatus, Table
from .options import TableOptions
from .services.row_lifecycle import ConfirmGate, RowLifecycleOps
from .services.row_state import ModeCallback, RowStateMachine
from .services.table_serializer import TableSerializer


def _ask_confirm(message: str) -> bool:
    """Default confirmation gate: a Tk yes/no dialog."""
    from tkinter import messagebox

    return messagebox.askyesno("Confirm", message)


@dataclass(frozen=True)
class ActionBinding:
    """The four row-level actions bound to one row."""

    row_id: int
    edit: Callable[[], bool]
    delete: Callable[[], bool]
    accept: Callable[[], bool]
    cancel: Callable[[], bool]

    def trigger(self, action: str) -> bool:
        """Invoke an action by name ('edit', 'delete', 'accept', 'cancel').

        Raises:
            ValueError: If the action name is unknown.
        """
        if action not in ("edit", "delete", "accept", "cancel"):
            raise ValueError(f"Unknown row action: {action!r}")
        return getattr(self, action)()


class TableController:
    """Makes a Table editable row by row.

    Args:
        table: The table to edit (not owned).
        options: Table options; keyword overrides are merged on top.
        confirm: Confirmation gate for deletes. Defaults to a Tk dialog.

    Usage:
        controller = TableController(table, editable_columns="1,2", on_edit=save)
        controller.init()
        controller.request_edit(0)
        controller.state_machine.set_pending(table.rows[0], 1, "42")
        controller.request_accept(0)
        csv_text = controller.to_delimited_text(",")
    """

    def __init__(
        self,
        table: Table,
        options: TableOptions | None = None,
        confirm: ConfirmGate | None = None,
        **overrides: Any,
    ):
        options = options or TableOptions()
        if overrides:
            options = options.merged(**overrides)

        self.table = table
        self.options = options
        self.policy = ColumnPolicy(options.editable_columns)
        self._mode_listener: ModeCallback | None = None
        self._bindings: dict[int, ActionBinding] = {}

        self.state_machine = RowStateMachine(
            self.policy,
            on_mode_change=self._on_mode_change,
            on_edit=options.on_edit,
        )
        self.lifecycle = RowLifecycleOps(
            confirm=confirm or _ask_confirm,
            actions_html=options.actions_cell_html,
            rebind=self._bind_actions,
            on_before_delete=options.on_before_delete,
            on_delete=options.on_delete,
            on_add=options.on_add,
        )
        self.serializer = TableSerializer(table, self.state_machine)

    # --------------------------------------------------
    # Table-wide operations
    # --------------------------------------------------

    def init(self) -> None:
        """Add the actions column and bind row actions and the add button.

        A table that already has an actions column (a second call, or a
        document saved with one) keeps it and is only rebound.
        """
        if self.table.has_actions_column:
            logger.debug("init: actions column already present, rebinding only")
        else:
            self.table.columns.append(
                Column(label=self.options.advanced.column_label, is_actions=True)
            )
            for row in self.table.rows:
                row.cells.append(Cell(content=self.options.actions_cell_html, is_actions=True))

        self._bind_actions()

        if self.options.add_button is not None:
            self.options.add_button.configure(command=self.request_add)

    def destroy(self) -> None:
        """Remove the actions column from the header and every row."""
        self.table.columns[:] = [col for col in self.table.columns if not col.is_actions]
        for row in self.table.rows:
            row.cells[:] = [cell for cell in row.cells if not cell.is_actions]
        self._bindings.clear()

    def refresh(self) -> None:
        """Remove and re-create the actions column."""
        self.destroy()
        self.init()

    # --------------------------------------------------
    # Bindings and visual mode
    # --------------------------------------------------

    @property
    def bindings(self) -> dict[int, ActionBinding]:
        """Current row_id -> ActionBinding map (read-only view by convention)."""
        return self._bindings

    def set_mode_listener(self, listener: ModeCallback | None) -> None:
        """Register the callback that toggles a row's visible controls."""
        self._mode_listener = listener

    def _on_mode_change(self, row: Row, status: RowStatus) -> None:
        if self._mode_listener:
            self._mode_listener(row, status)

    def _bind_actions(self) -> None:
        self._bindings = {row.row_id: self._make_binding(row) for row in self.table.rows}
        logger.debug(f"Bound actions for {len(self._bindings)} rows")

    def _make_binding(self, row: Row) -> ActionBinding:
        return ActionBinding(
            row_id=row.row_id,
            edit=lambda: self.request_edit(row),
            delete=lambda: self.request_delete(row),
            accept=lambda: self.request_accept(row),
            cancel=lambda: self.request_cancel(row),
        )

    # --------------------------------------------------
    # Action intents
    # --------------------------------------------------

    def _resolve_row(self, row: Row | int) -> Row | None:
        if isinstance(row, Row):
            if self.table.contains(row):
                return row
        elif 0 <= row < len(self.table.rows):
            return self.table.rows[row]
        logger.debug(f"Action ignored: row {row!r} not in table")
        return None

    def currently_editing_row(self, row: Row | int) -> bool:
        """Check if the given row is currently being edited."""
        resolved = self._resolve_row(row)
        return resolved is not None and self.state_machine.is_editing(resolved)

    def request_edit(self, row: Row | int) -> bool:
        resolved = self._resolve_row(row)
        return resolved is not None and self.state_machine.begin_edit(resolved)

    def request_accept(self, row: Row | int) -> bool:
        resolved = self._resolve_row(row)
        return resolved is not None and self.state_machine.commit(resolved)

    def request_cancel(self, row: Row | int) -> bool:
        resolved = self._resolve_row(row)
        return resolved is not None and self.state_machine.discard(resolved)

    def request_delete(self, row: Row | int) -> bool:
        """Ask for confirmation and delete the row.

        Returns:
            True if the row was removed, False otherwise.
        """
        resolved = self._resolve_row(row)
        if resolved is None:
            return False
        deleted = self.lifecycle.delete(
            self.table, resolved, self.options.advanced.confirm_question
        )
        if deleted:
            self._bindings.pop(resolved.row_id, None)
        return deleted

    def request_add(self) -> Row:
        """Add a row and return it."""
        return self.lifecycle.add_row(self.table)

    # --------------------------------------------------
    # Export
    # --------------------------------------------------

    def to_delimited_text(self, separator: str = ",") -> str:
        """Serialize the table, committing rows still being edited."""
        return self.serializer.to_delimited_text(separator)
