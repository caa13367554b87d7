"""Row lifecycle operations: delete with confirmation and add.

Unlike the state machine these change the table structure. Notifications
fire only after the structural change has completed (on_before_delete is the
exception by contract: it sees the row while still attached).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from ..debug_trace import logger
from ..models.table import Row, RowTemplate, Table

ConfirmGate = Callable[[str], bool]

# Separator between cell texts in the delete confirmation preview
PREVIEW_SEPARATOR = ", "


class RowLifecycleOps:
    """Structural row operations on a Table.

    Args:
        confirm: Synchronous confirmation gate, ``(message) -> bool``.
        actions_html: Content for synthesized actions cells.
        rebind: Called after every insertion to rebind row action controls.
        on_before_delete: Called with the row before it is removed.
        on_delete: Called (no arguments) after a row was removed.
        on_add: Called after a row was added.
    """

    def __init__(
        self,
        confirm: ConfirmGate,
        actions_html: str = "",
        rebind: Callable[[], None] | None = None,
        on_before_delete: Callable[[Row], None] | None = None,
        on_delete: Callable[[], None] | None = None,
        on_add: Callable[[], None] | None = None,
    ):
        self.confirm = confirm
        self.actions_html = actions_html
        self.rebind = rebind
        self.on_before_delete = on_before_delete
        self.on_delete = on_delete
        self.on_add = on_add

    @staticmethod
    def delete_preview(row: Row) -> str:
        """Join the non-empty data cell texts of ``row`` for the confirm prompt."""
        texts = [cell.text for cell in row.data_cells]
        return PREVIEW_SEPARATOR.join(text for text in texts if text != "")

    def delete(self, table: Table, row: Row, confirm_message: str) -> bool:
        """Delete ``row`` after the user confirms.

        Args:
            table: Table holding the row.
            row: Row to delete. Its edit status does not matter.
            confirm_message: Question shown below the row preview.

        Returns:
            True if the row was removed, False if the user declined or the
            row is no longer in the table.
        """
        if not table.contains(row):
            logger.debug(f"delete ignored: row {row.row_id} not in table")
            return False

        message = self.delete_preview(row) + "\n\n" + confirm_message
        if not self.confirm(message):
            logger.debug(f"Delete of row {row.row_id} declined")
            return False

        if self.on_before_delete:
            self.on_before_delete(row)
        # Handler may have removed the row already
        if not table.remove(row):
            logger.debug(f"Row {row.row_id} already removed by on_before_delete")
            return False
        logger.debug(f"Row {row.row_id} deleted")
        if self.on_delete:
            self.on_delete()
        return True

    @staticmethod
    def duplicate_structure(row: Row) -> Row:
        """Copy the cell structure of ``row`` with every data cell emptied.

        The actions cell keeps its content. The copy is a new row in normal
        status without edit buffers.
        """
        clone = Row(cells=[replace(cell, edit=None) for cell in row.cells])
        for cell in clone.cells:
            if not cell.is_actions:
                cell.content = ""
        return clone

    def add_row(self, table: Table) -> Row:
        """Add a row at the end of ``table``.

        An empty table gets a row synthesized from its header. Otherwise the
        last row is duplicated with its data cleared.

        Returns:
            The new row.
        """
        last_row = table.last_row
        if last_row is None:
            row = RowTemplate.from_columns(table.columns, self.actions_html).build()
            table.append(row)
            logger.debug(f"Row {row.row_id} synthesized from header")
        else:
            row = self.duplicate_structure(last_row)
            table.insert_after(last_row, row)
            logger.debug(f"Row {row.row_id} cloned from row {last_row.row_id}")

        if self.rebind:
            self.rebind()
        if self.on_add:
            self.on_add()
        return row
