"""Tests for RowStateMachine."""

import logging

import pytest

from rowedit.models.column_policy import ColumnPolicy
from rowedit.models.table import Row, RowStatus
from rowedit.services.row_state import RowStateMachine

ACTIONS_HTML = '<div><button id="bEdit">e</button></div>'


class Recorder:
    """Records visual-mode changes and edit notifications."""

    def __init__(self):
        self.modes: list[tuple[int, RowStatus]] = []
        self.edited: list[Row] = []

    def on_mode_change(self, row, status):
        self.modes.append((row.row_id, status))

    def on_edit(self, row):
        self.edited.append(row)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def row():
    return Row.from_values(["Alice", "30", "<b>admin</b>"], actions_html=ACTIONS_HTML)


def make_machine(recorder, editable=None):
    return RowStateMachine(
        ColumnPolicy(editable),
        on_mode_change=recorder.on_mode_change,
        on_edit=recorder.on_edit,
    )


class TestBeginEdit:
    """Tests for entering editing status."""

    def test_enters_editing(self, recorder, row):
        machine = make_machine(recorder)
        assert machine.is_editing(row) is False

        assert machine.begin_edit(row) is True

        assert machine.is_editing(row) is True
        assert row.status is RowStatus.EDITING
        assert recorder.modes == [(row.row_id, RowStatus.EDITING)]

    def test_buffers_only_editable_cells(self, recorder, row):
        machine = make_machine(recorder, "0,2")
        machine.begin_edit(row)

        data = row.data_cells
        assert data[0].edit.snapshot == "Alice"
        assert data[0].edit.pending == "Alice"
        assert data[1].edit is None
        assert data[2].edit.snapshot == "<b>admin</b>"
        assert row.actions_cell.edit is None

    def test_second_begin_edit_is_noop(self, recorder, row):
        """Re-entering edit keeps the first buffers (no double initialization)."""
        machine = make_machine(recorder)
        machine.begin_edit(row)
        machine.set_pending(row, 0, "Typed")
        first_buffer = row.data_cells[0].edit

        assert machine.begin_edit(row) is False

        assert row.data_cells[0].edit is first_buffer
        assert row.data_cells[0].edit.snapshot == "Alice"
        assert row.data_cells[0].edit.pending == "Typed"
        assert len(recorder.modes) == 1


class TestCommit:
    """Tests for accepting edits."""

    def test_commit_materializes_pending(self, recorder, row):
        machine = make_machine(recorder, "0")
        machine.begin_edit(row)
        assert machine.set_pending(row, 0, "X") is True

        assert machine.commit(row) is True

        assert row.values() == ["X", "30", "<b>admin</b>"]
        assert row.status is RowStatus.NORMAL
        assert all(cell.edit is None for cell in row.cells)
        assert recorder.edited == [row]
        assert recorder.modes[-1] == (row.row_id, RowStatus.NORMAL)

    def test_non_editable_cells_unchanged(self, recorder, row):
        machine = make_machine(recorder, "0")
        actions_before = row.actions_cell.content
        machine.begin_edit(row)
        machine.set_pending(row, 0, "X")
        machine.commit(row)

        assert row.data_cells[1].content == "30"
        assert row.data_cells[2].content == "<b>admin</b>"
        assert row.actions_cell.content == actions_before

    def test_commit_logs_changed_columns(self, recorder, row, caplog):
        machine = make_machine(recorder)
        machine.begin_edit(row)
        machine.set_pending(row, 2, "user")

        with caplog.at_level(logging.DEBUG, logger="rowedit"):
            machine.commit(row)

        assert "changed columns [2]" in caplog.text

    def test_commit_on_normal_row_is_noop(self, recorder, row):
        machine = make_machine(recorder)
        before = row.values()

        assert machine.commit(row) is False

        assert row.values() == before
        assert row.status is RowStatus.NORMAL
        assert recorder.edited == []
        assert recorder.modes == []

    def test_double_commit_fires_once(self, recorder, row):
        machine = make_machine(recorder)
        machine.begin_edit(row)
        machine.commit(row)
        machine.commit(row)
        assert recorder.edited == [row]

    def test_reentrant_commit_from_on_edit(self, row):
        """A handler calling commit again on the same row is a no-op."""
        calls = []

        def on_edit(r):
            calls.append(r)
            machine.commit(r)

        machine = RowStateMachine(ColumnPolicy(), on_edit=on_edit)
        machine.begin_edit(row)
        machine.commit(row)

        assert calls == [row]
        assert row.status is RowStatus.NORMAL


class TestDiscard:
    """Tests for cancelling edits."""

    @pytest.mark.parametrize("content", ["", "plain", "<span class='x'>a &amp; b</span>"])
    def test_discard_restores_content(self, recorder, content):
        row = Row.from_values([content, "other"])
        machine = make_machine(recorder)
        machine.begin_edit(row)
        machine.set_pending(row, 0, "changed")
        machine.set_pending(row, 1, "changed too")

        assert machine.discard(row) is True

        assert row.values() == [content, "other"]
        assert row.status is RowStatus.NORMAL
        assert all(cell.edit is None for cell in row.cells)

    def test_discard_fires_no_notification(self, recorder, row):
        machine = make_machine(recorder)
        machine.begin_edit(row)
        machine.discard(row)
        assert recorder.edited == []
        assert recorder.modes[-1] == (row.row_id, RowStatus.NORMAL)

    def test_discard_on_normal_row_is_noop(self, recorder, row):
        machine = make_machine(recorder)
        assert machine.discard(row) is False
        assert recorder.modes == []


class TestSetPending:
    """Tests for writing the live edit value."""

    def test_rejected_when_not_editing(self, recorder, row):
        machine = make_machine(recorder)
        assert machine.set_pending(row, 0, "X") is False
        assert row.data_cells[0].content == "Alice"

    def test_rejected_for_non_editable_column(self, recorder, row):
        machine = make_machine(recorder, "0")
        machine.begin_edit(row)
        assert machine.set_pending(row, 1, "X") is False
        machine.commit(row)
        assert row.data_cells[1].content == "30"

    def test_rejected_for_out_of_range_column(self, recorder, row):
        machine = make_machine(recorder)
        machine.begin_edit(row)
        assert machine.set_pending(row, 3, "X") is False
        assert machine.set_pending(row, -1, "X") is False


class TestVisibleActions:
    """Tests for the action controls shown per status."""

    def test_normal(self):
        assert RowStateMachine.visible_actions(RowStatus.NORMAL) == {"edit", "delete"}

    def test_editing(self):
        assert RowStateMachine.visible_actions(RowStatus.EDITING) == {"accept", "cancel"}
