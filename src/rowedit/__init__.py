"""rowedit: inline per-row editing for tables."""

from .controller import ActionBinding, TableController
from .models.column_policy import ColumnPolicy
from .models.table import Cell, Column, Row, RowStatus, Table
from .options import AdvancedOptions, TableOptions

__all__ = [
    "ActionBinding",
    "AdvancedOptions",
    "Cell",
    "Column",
    "ColumnPolicy",
    "Row",
    "RowStatus",
    "Table",
    "TableController",
    "TableOptions",
]
