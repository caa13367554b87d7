"""Table to delimited text (CSV) conversion."""

from __future__ import annotations

from pathlib import Path

from ..debug_trace import logger, perf_timer
from ..models.table import Table
from .row_state import RowStateMachine


class TableSerializer:
    """Serializes the data cells of a table as delimited text.

    Rows still in editing are committed first through the state machine, so
    exporting never drops in-progress edits and fires on_edit exactly as the
    accept action would.

    Values are written verbatim; no quoting is applied.
    """

    def __init__(self, table: Table, state_machine: RowStateMachine):
        self.table = table
        self.state_machine = state_machine

    def to_delimited_text(self, separator: str = ",") -> str:
        """Convert the table to text.

        Args:
            separator: String placed between cell values.

        Returns:
            One line per row, each terminated by a newline. Empty string for
            a table without rows.
        """
        lines: list[str] = []
        with perf_timer("to_delimited_text", row_count=len(self.table)):
            for row in list(self.table.rows):
                if self.state_machine.is_editing(row):
                    logger.debug(f"Forcing commit of row {row.row_id} before export")
                    self.state_machine.commit(row)
                lines.append(separator.join(row.values()) + "\n")
        return "".join(lines)

    def write(self, path: Path | str, separator: str = ",", encoding: str = "utf-8") -> Path:
        """Write the delimited text to ``path``.

        Returns:
            The path written.
        """
        path = Path(path)
        path.write_text(self.to_delimited_text(separator), encoding=encoding)
        logger.debug(f"Exported {len(self.table)} rows to {path}")
        return path
