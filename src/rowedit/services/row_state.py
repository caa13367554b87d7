"""Row state machine: normal -> editing -> (commit | discard) -> normal.

Every transition checks the row status before touching any cell, so a
duplicate activation (double click, re-entrant notification handler) is a
silent no-op instead of an error or a second edit buffer.
"""

from __future__ import annotations

from collections.abc import Callable

from ..debug_trace import logger
from ..models.cell_edit import CellEdit
from ..models.column_policy import ColumnPolicy
from ..models.table import Row, RowStatus

# Action controls visible in each row status
VISIBLE_ACTIONS: dict[RowStatus, frozenset[str]] = {
    RowStatus.NORMAL: frozenset({"edit", "delete"}),
    RowStatus.EDITING: frozenset({"accept", "cancel"}),
}

ModeCallback = Callable[[Row, RowStatus], None]


class RowStateMachine:
    """Drives single rows through the edit lifecycle.

    Args:
        policy: Decides which data cells are buffered while editing.
        on_mode_change: Visual-mode callback, called with the row and its
            new status after entering or leaving editing.
        on_edit: Called with the row after a commit.
    """

    def __init__(
        self,
        policy: ColumnPolicy,
        on_mode_change: ModeCallback | None = None,
        on_edit: Callable[[Row], None] | None = None,
    ):
        self.policy = policy
        self.on_mode_change = on_mode_change
        self.on_edit = on_edit

    @staticmethod
    def is_editing(row: Row) -> bool:
        return row.status is RowStatus.EDITING

    @staticmethod
    def visible_actions(status: RowStatus) -> frozenset[str]:
        """Names of the action controls shown for a row in ``status``."""
        return VISIBLE_ACTIONS[status]

    def _set_mode(self, row: Row, status: RowStatus) -> None:
        row._transition(status)
        if self.on_mode_change:
            self.on_mode_change(row, status)

    def begin_edit(self, row: Row) -> bool:
        """Put a normal row into editing, buffering every editable cell.

        Returns:
            True if the row entered editing, False if it already was editing.
        """
        if row.status is not RowStatus.NORMAL:
            logger.debug(f"begin_edit ignored: row {row.row_id} is {row.status.value}")
            return False

        for _index, cell in self.policy.editable_cells(row):
            cell.edit = CellEdit.start(cell.content)

        logger.debug(f"Row {row.row_id} entered editing")
        self._set_mode(row, RowStatus.EDITING)
        return True

    def set_pending(self, row: Row, column_index: int, value: str) -> bool:
        """Write the live edit value of a buffered cell.

        Args:
            row: Row being edited.
            column_index: Data column index (actions column excluded).
            value: New pending value.

        Returns:
            True if the value was stored, False if the row is not editing or
            the cell is not editable.
        """
        if row.status is not RowStatus.EDITING:
            return False
        data_cells = row.data_cells
        if not 0 <= column_index < len(data_cells):
            return False
        cell = data_cells[column_index]
        if cell.edit is None:
            return False
        cell.edit.pending = value
        return True

    def commit(self, row: Row) -> bool:
        """Accept the pending values of an editing row.

        Returns:
            True if the row was committed, False if it was not editing.
        """
        if row.status is not RowStatus.EDITING:
            logger.debug(f"commit ignored: row {row.row_id} is not editing")
            return False

        changed: list[int] = []
        for index, cell in self.policy.editable_cells(row):
            if cell.edit is not None:
                if cell.edit.has_changes():
                    changed.append(index)
                cell.content = cell.edit.freeze()
                cell.edit = None

        logger.debug(f"Row {row.row_id} committed, changed columns {changed}: {row.values()!r}")
        self._set_mode(row, RowStatus.NORMAL)
        if self.on_edit:
            self.on_edit(row)
        return True

    def discard(self, row: Row) -> bool:
        """Restore an editing row from its snapshots. Fires no notification.

        Returns:
            True if the row was restored, False if it was not editing.
        """
        if row.status is not RowStatus.EDITING:
            logger.debug(f"discard ignored: row {row.row_id} is not editing")
            return False

        for _index, cell in self.policy.editable_cells(row):
            if cell.edit is not None:
                cell.content = cell.edit.revert()
                cell.edit = None

        logger.debug(f"Row {row.row_id} edit discarded")
        self._set_mode(row, RowStatus.NORMAL)
        return True
