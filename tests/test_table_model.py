"""Unit tests for the table model and CellEdit."""

from rowedit.models.cell_edit import CellEdit
from rowedit.models.table import Cell, Column, Row, RowStatus, RowTemplate, Table


class TestCellEdit:
    """Tests for the per-cell edit buffer."""

    def test_start_copies_content(self):
        edit = CellEdit.start("Alice")
        assert edit.snapshot == "Alice"
        assert edit.pending == "Alice"
        assert edit.has_changes() is False

    def test_freeze_and_revert(self):
        edit = CellEdit.start("Alice")
        edit.pending = "Alicia"
        assert edit.has_changes() is True
        assert edit.freeze() == "Alicia"
        assert edit.revert() == "Alice"


class TestCell:
    """Tests for Cell."""

    def test_text_plain(self):
        assert Cell(content="Bob").text == "Bob"

    def test_text_strips_markup(self):
        assert Cell(content="<b>Bob</b> <i>Smith</i>").text == "Bob Smith"

    def test_text_decodes_entities(self):
        assert Cell(content="A &amp; B").text == "A & B"

    def test_not_editing_by_default(self):
        assert Cell(content="x").is_editing is False


class TestRow:
    """Tests for Row."""

    def test_new_row_is_normal(self):
        row = Row.from_values(["a"])
        assert row.status is RowStatus.NORMAL
        assert row.is_editing is False

    def test_row_ids_are_unique(self):
        assert Row().row_id != Row().row_id

    def test_data_cells_and_actions_cell(self):
        row = Row.from_values(["a", "b"], actions_html="<button/>")
        assert [c.content for c in row.data_cells] == ["a", "b"]
        assert row.actions_cell is not None
        assert row.actions_cell.is_actions
        assert row.values() == ["a", "b"]

    def test_no_actions_cell(self):
        assert Row.from_values(["a"]).actions_cell is None


class TestRowTemplate:
    """Tests for RowTemplate."""

    def test_build_from_header(self):
        columns = [Column("Name"), Column("Age"), Column("Actions", is_actions=True)]
        template = RowTemplate.from_columns(columns, "<div>buttons</div>")

        row = template.build()

        assert [c.content for c in row.cells] == ["", "", "<div>buttons</div>"]
        assert [c.is_actions for c in row.cells] == [False, False, True]
        assert row.status is RowStatus.NORMAL

    def test_each_build_is_a_new_row(self):
        template = RowTemplate.from_columns([Column("A")], "")
        first, second = template.build(), template.build()
        assert first is not second
        assert first.cells[0] is not second.cells[0]


class TestTable:
    """Tests for Table."""

    def test_from_values(self):
        table = Table.from_values(["Name", "Age"], [["Alice", "30"], ["Bob", "40"]])
        assert len(table) == 2
        assert [col.label for col in table.columns] == ["Name", "Age"]
        assert table.has_actions_column is False
        assert table.last_row.values() == ["Bob", "40"]

    def test_index_of_uses_identity(self):
        table = Table.from_values(["A"], [["x"], ["x"]])
        assert table.index_of(table.rows[1]) == 1
        assert table.index_of(Row.from_values(["x"])) is None

    def test_insert_after(self):
        table = Table.from_values(["A"], [["1"], ["2"]])
        new_row = Row.from_values(["1.5"])
        table.insert_after(table.rows[0], new_row)
        assert [r.values()[0] for r in table] == ["1", "1.5", "2"]

    def test_remove(self):
        table = Table.from_values(["A"], [["1"]])
        row = table.rows[0]
        assert table.remove(row) is True
        assert table.remove(row) is False
        assert len(table) == 0
        assert table.last_row is None
