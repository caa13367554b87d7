"""Data model for an editable table.

Contains the Table, Column, Row and Cell classes, the RowStatus enum and the
RowTemplate used to build new rows from the header.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum

from bs4 import BeautifulSoup

from .cell_edit import CellEdit

# Name attribute that marks the actions column in HTML documents
ACTIONS_NAME = "bstable-actions"

_row_ids = itertools.count(1)


class RowStatus(Enum):
    """Status of a table row."""

    NORMAL = "normal"
    EDITING = "editing"


@dataclass(frozen=True)
class Column:
    """A column header. The actions column is identified by flag, not position."""

    label: str = ""
    is_actions: bool = False


@dataclass
class Cell:
    """A single cell of a row.

    ``content`` is the displayed content (text or markup). ``edit`` only
    exists while the owning row is editing and the cell is editable.
    """

    content: str = ""
    is_actions: bool = False
    edit: CellEdit | None = field(default=None, compare=False)

    @property
    def is_editing(self) -> bool:
        """Check if this cell currently holds an edit buffer."""
        return self.edit is not None

    @property
    def text(self) -> str:
        """Displayed content with markup stripped."""
        if "<" not in self.content and "&" not in self.content:
            return self.content
        return BeautifulSoup(self.content, "html.parser").get_text()


@dataclass(eq=False)
class Row:
    """A table row: one Cell per column plus the row status.

    The status is only changed by RowStateMachine. Rows compare by identity.
    """

    cells: list[Cell] = field(default_factory=list)
    row_id: int = field(default_factory=lambda: next(_row_ids))
    _status: RowStatus = field(default=RowStatus.NORMAL, init=False, repr=False)

    @property
    def status(self) -> RowStatus:
        """Current row status."""
        return self._status

    @property
    def is_editing(self) -> bool:
        """Check if the row is in editing status."""
        return self._status is RowStatus.EDITING

    @property
    def data_cells(self) -> list[Cell]:
        """All cells except the actions cell, in column order."""
        return [cell for cell in self.cells if not cell.is_actions]

    @property
    def actions_cell(self) -> Cell | None:
        """The actions cell, or None before the table is initialized."""
        for cell in self.cells:
            if cell.is_actions:
                return cell
        return None

    def values(self) -> list[str]:
        """Displayed content of the data cells."""
        return [cell.content for cell in self.data_cells]

    def _transition(self, status: RowStatus) -> None:
        self._status = status

    @classmethod
    def from_values(cls, values: Iterable[str], actions_html: str | None = None) -> Row:
        """Create a row from data values, optionally followed by an actions cell.

        Args:
            values: Displayed content of each data cell.
            actions_html: Markup for a trailing actions cell, or None for none.

        Returns:
            New Row in normal status.
        """
        cells = [Cell(content=value) for value in values]
        if actions_html is not None:
            cells.append(Cell(content=actions_html, is_actions=True))
        return cls(cells=cells)


@dataclass(frozen=True)
class RowTemplate:
    """Column list plus default cell values for constructing new rows."""

    columns: tuple[Column, ...]
    defaults: tuple[str, ...]

    @classmethod
    def from_columns(cls, columns: Sequence[Column], actions_html: str) -> RowTemplate:
        """Build a template from a header: empty data cells, actions markup.

        Args:
            columns: Header columns in display order.
            actions_html: Content of the actions cell.
        """
        defaults = tuple(actions_html if col.is_actions else "" for col in columns)
        return cls(columns=tuple(columns), defaults=defaults)

    def build(self) -> Row:
        """Construct a new row from this template."""
        return Row(
            cells=[
                Cell(content=default, is_actions=col.is_actions)
                for col, default in zip(self.columns, self.defaults)
            ]
        )


@dataclass(eq=False)
class Table:
    """Ordered rows plus a fixed ordered header."""

    columns: list[Column] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def has_actions_column(self) -> bool:
        return any(col.is_actions for col in self.columns)

    @property
    def data_columns(self) -> list[Column]:
        """Header columns except the actions column."""
        return [col for col in self.columns if not col.is_actions]

    @property
    def last_row(self) -> Row | None:
        return self.rows[-1] if self.rows else None

    def index_of(self, row: Row) -> int | None:
        """Position of ``row`` in the table (identity match), or None."""
        for i, candidate in enumerate(self.rows):
            if candidate is row:
                return i
        return None

    def contains(self, row: Row) -> bool:
        return self.index_of(row) is not None

    def append(self, row: Row) -> None:
        self.rows.append(row)

    def insert_after(self, anchor: Row, row: Row) -> None:
        """Insert ``row`` immediately after ``anchor`` (appends if anchor is gone)."""
        idx = self.index_of(anchor)
        if idx is None:
            self.rows.append(row)
        else:
            self.rows.insert(idx + 1, row)

    def remove(self, row: Row) -> bool:
        """Remove ``row`` from the table.

        Returns:
            True if the row was present and removed.
        """
        idx = self.index_of(row)
        if idx is None:
            return False
        del self.rows[idx]
        return True

    @classmethod
    def from_values(
        cls, headers: Sequence[str], rows: Iterable[Sequence[str]] = ()
    ) -> Table:
        """Create an uninitialized table (no actions column) from plain values.

        Args:
            headers: Column labels.
            rows: Data values per row.
        """
        return cls(
            columns=[Column(label=label) for label in headers],
            rows=[Row.from_values(values) for values in rows],
        )
