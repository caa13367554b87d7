"""Panel widget for editing a table row by row.

Uses tksheet for table display. Cells are read-only except the editable
cells of rows in editing status; the toolbar buttons call the controller's
action intents for the selected row.
"""

from __future__ import annotations

import tkinter as tk
from collections.abc import Callable
from tkinter import messagebox, ttk

from tksheet import Sheet

from ..controller import TableController
from ..debug_trace import logger
from ..models.table import Row, RowStatus, Table
from ..options import TableOptions
from ..services.row_state import RowStateMachine

# Background for rows being edited
COLOR_EDITING_BG = "#FFF8E1"


class TablePanel(ttk.Frame):
    """Panel showing a Table in a tksheet with Edit/Delete/Accept/Cancel/Add.

    The actions column is not displayed; its controls live in the toolbar
    and act on the selected row.
    """

    def _display_values(self, row: Row) -> list[str]:
        """Pending values for buffered cells, displayed content otherwise."""
        return [
            cell.edit.pending if cell.edit is not None else cell.content
            for cell in row.data_cells
        ]

    def _populate_sheet(self) -> None:
        """Populate sheet with current table data."""
        self._suppress_notifications = True
        try:
            self.sheet.headers([col.label for col in self.table.data_columns])
            data = [self._display_values(row) for row in self.table.rows]
            self.sheet.set_sheet_data(data, reset_col_positions=False)
            self.sheet.set_index_data([str(i + 1) for i in range(len(self.table.rows))])
            self._apply_editing_styling()
        finally:
            self._suppress_notifications = False
        self._update_action_buttons()
        self._update_status()

    def _apply_editing_styling(self) -> None:
        """Highlight rows that are being edited."""
        self.sheet.dehighlight_all(redraw=False)
        for i, row in enumerate(self.table.rows):
            if row.is_editing:
                self.sheet.highlight_rows(rows=[i], bg=COLOR_EDITING_BG, redraw=False)
        self.sheet.redraw()

    def _update_status(self) -> None:
        """Update the status label."""
        editing = sum(1 for row in self.table.rows if row.is_editing)
        dirty_text = " (modified)" if self._is_dirty else ""
        self.status_label.config(
            text=f"Rows: {len(self.table.rows)}  Editing: {editing}{dirty_text}"
        )

    def _mark_dirty(self) -> None:
        self._is_dirty = True
        self._update_status()
        if self.on_modified:
            self.on_modified()

    def _get_selected_row(self) -> Row | None:
        """Get the row holding the current selection, if any."""
        selected_rows = list(self.sheet.get_selected_rows())
        if selected_rows:
            idx = selected_rows[0]
        else:
            selected_cells = list(self.sheet.get_selected_cells())
            if not selected_cells:
                return None
            idx = selected_cells[0][0]
        if 0 <= idx < len(self.table.rows):
            return self.table.rows[idx]
        return None

    def _update_action_buttons(self) -> None:
        """Enable only the controls that apply to the selected row's status."""
        row = self._get_selected_row()
        visible = RowStateMachine.visible_actions(row.status) if row else frozenset()
        for action, button in self._action_buttons.items():
            button.state(["!disabled"] if action in visible else ["disabled"])

    # --- Event handlers ---

    def _on_select(self, event=None) -> None:
        self._update_action_buttons()

    def _on_mode_change(self, row: Row, status: RowStatus) -> None:
        """Visual-mode callback from the state machine."""
        logger.debug(f"Panel: row {row.row_id} now {status.value}")
        self._populate_sheet()

    def _validate_edit(self, event) -> str | None:
        """Allow edits only in editable cells of rows being edited.

        Returns:
            The value to store, or None to reject the edit.
        """
        row_idx = getattr(event, "row", None)
        col = getattr(event, "column", None)
        if row_idx is None or col is None or row_idx >= len(self.table.rows):
            return None
        row = self.table.rows[row_idx]
        if not row.is_editing or not self.controller.policy.is_editable(col):
            return None
        return event.value

    def _on_sheet_modified(self, event) -> None:
        """Copy edited sheet values into the pending edit buffers."""
        if self._suppress_notifications:
            return

        cells = getattr(event, "cells", None)
        if not cells:
            return

        for (row_idx, col), _old_value in cells.get("table", {}).items():
            if row_idx >= len(self.table.rows):
                continue
            value = self.sheet.get_cell_data(row_idx, col) or ""
            self.controller.state_machine.set_pending(self.table.rows[row_idx], col, value)

    def _on_edit_committed(self, row: Row) -> None:
        self._mark_dirty()
        if self._user_on_edit:
            self._user_on_edit(row)

    def _on_row_added(self) -> None:
        self._populate_sheet()
        self.sheet.select_row(len(self.table.rows) - 1)
        self._mark_dirty()
        if self._user_on_add:
            self._user_on_add()

    def _on_row_deleted(self) -> None:
        self._populate_sheet()
        self._mark_dirty()
        if self._user_on_delete:
            self._user_on_delete()

    def _confirm(self, message: str) -> bool:
        return messagebox.askyesno("Delete Row", message, parent=self)

    # --- Actions ---

    def run_action(self, action: str) -> bool:
        """Run a row action ('edit', 'delete', 'accept', 'cancel') on the selection.

        Returns:
            True if the action changed the table.
        """
        row = self._get_selected_row()
        if row is None:
            return False
        binding = self.controller.bindings.get(row.row_id)
        if binding is None:
            return False
        # Close an open cell editor so its value reaches the edit buffer
        self.sheet.close_text_editor(set_data=True)
        return binding.trigger(action)

    def _create_widgets(self) -> None:
        """Create all panel widgets."""
        toolbar = ttk.Frame(self)
        toolbar.pack(fill=tk.X, padx=5, pady=(5, 0))

        self._action_buttons: dict[str, ttk.Button] = {}
        for action, label in (
            ("edit", "Edit"),
            ("delete", "Delete"),
            ("accept", "Accept"),
            ("cancel", "Cancel"),
        ):
            button = ttk.Button(
                toolbar, text=label, width=8, command=lambda a=action: self.run_action(a)
            )
            button.pack(side=tk.LEFT, padx=(0, 5))
            self._action_buttons[action] = button

        # Command is bound by the controller
        self.add_button = ttk.Button(toolbar, text="Add Row", width=10)
        self.add_button.pack(side=tk.RIGHT)

        self.sheet = Sheet(
            self,
            show_row_index=True,
            height=400,
            width=700,
        )
        self.sheet.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)

        self.sheet.enable_bindings(
            "single_select",
            "row_select",
            "arrowkeys",
            "column_width_resize",
            "copy",
            "edit_cell",
        )
        self.sheet.edit_validation(self._validate_edit)
        self.sheet.bind("<<SheetModified>>", self._on_sheet_modified)
        self.sheet.extra_bindings("cell_select", self._on_select)
        self.sheet.extra_bindings("row_select", self._on_select)

        footer = ttk.Frame(self)
        footer.pack(fill=tk.X, padx=5, pady=(2, 5))

        self.status_label = ttk.Label(footer, text="")
        self.status_label.pack(side=tk.LEFT)

    def __init__(
        self,
        parent: tk.Widget,
        table: Table,
        options: TableOptions | None = None,
        on_modified: Callable[[], None] | None = None,
    ):
        """Initialize the table panel.

        Args:
            parent: Parent widget
            table: Table to edit
            options: Table options (callbacks are chained after the panel's own)
            on_modified: Callback when data is modified
        """
        super().__init__(parent)

        options = options or TableOptions()
        self.table = table
        self.on_modified = on_modified
        self._is_dirty = False
        self._suppress_notifications = False

        self._user_on_edit = options.on_edit
        self._user_on_add = options.on_add
        self._user_on_delete = options.on_delete

        self._create_widgets()

        self.controller = TableController(
            table,
            options.merged(
                add_button=self.add_button,
                on_edit=self._on_edit_committed,
                on_add=self._on_row_added,
                on_delete=self._on_row_deleted,
            ),
            confirm=self._confirm,
        )
        self.controller.set_mode_listener(self._on_mode_change)
        self.controller.init()

        self._populate_sheet()

    @property
    def is_dirty(self) -> bool:
        return self._is_dirty

    def mark_saved(self) -> None:
        self._is_dirty = False
        self._update_status()

    def commit_all(self) -> None:
        """Accept every row still being edited."""
        self.sheet.close_text_editor(set_data=True)
        for row in list(self.table.rows):
            self.controller.request_accept(row)
