"""Column editability policy.

Decides per data column whether its cells take part in edit mode. The
configured set is parsed once at construction and never changes.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from ..debug_trace import logger

if TYPE_CHECKING:
    from .table import Cell, Row


def parse_editable_columns(value: str | Iterable[int | str] | None) -> frozenset[int] | None:
    """Parse an editable-columns configuration value.

    Accepts a comma-separated string like "1,3", an iterable of ints or
    numeric strings, or None (all columns editable).

    Args:
        value: The configured value.

    Returns:
        Frozen set of column indices, or None if every column is editable.
    """
    if value is None:
        return None

    entries = value.split(",") if isinstance(value, str) else value
    indices: set[int] = set()
    for entry in entries:
        text = str(entry).strip()
        if not text:
            continue
        try:
            indices.add(int(text))
        except ValueError:
            # Never matches a real column
            logger.debug(f"Ignoring non-numeric editable column {text!r}")
    return frozenset(indices)


class ColumnPolicy:
    """Pure editability check over an immutable set of data-column indices.

    Indices count data columns only; the actions cell is filtered out by
    flag before the policy is consulted.
    """

    def __init__(self, editable_columns: str | Iterable[int | str] | None = None):
        self._editable = parse_editable_columns(editable_columns)

    def __repr__(self) -> str:
        if self._editable is None:
            return "ColumnPolicy(all)"
        return f"ColumnPolicy({sorted(self._editable)})"

    @property
    def editable_columns(self) -> frozenset[int] | None:
        """The configured index set, or None if all columns are editable."""
        return self._editable

    def is_editable(self, column_index: int | str) -> bool:
        """Check if the data column at ``column_index`` is editable.

        Numeric strings such as "1" compare equal to the int index.
        """
        if self._editable is None:
            return True
        try:
            return int(str(column_index).strip()) in self._editable
        except ValueError:
            return False

    def editable_cells(self, row: Row) -> Iterator[tuple[int, Cell]]:
        """Yield (data column index, cell) for each editable cell of ``row``."""
        for index, cell in enumerate(row.data_cells):
            if self.is_editable(index):
                yield index, cell
