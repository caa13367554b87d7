"""Tests for ColumnPolicy."""

from rowedit.models.column_policy import ColumnPolicy, parse_editable_columns
from rowedit.models.table import Row


class TestParseEditableColumns:
    """Tests for parse_editable_columns."""

    def test_none_means_all(self):
        assert parse_editable_columns(None) is None

    def test_comma_separated_string(self):
        assert parse_editable_columns("1,3") == frozenset({1, 3})

    def test_whitespace_and_empty_entries(self):
        assert parse_editable_columns(" 0 , ,2,") == frozenset({0, 2})

    def test_iterable_of_ints_and_strings(self):
        assert parse_editable_columns([0, "4"]) == frozenset({0, 4})

    def test_non_numeric_entries_are_dropped(self):
        """Malformed entries never match a column."""
        assert parse_editable_columns("1,abc,3") == frozenset({1, 3})

    def test_empty_string_means_no_columns(self):
        assert parse_editable_columns("") == frozenset()


class TestIsEditable:
    """Tests for ColumnPolicy.is_editable."""

    def test_configured_set(self):
        """Only configured indices are editable across five data columns."""
        policy = ColumnPolicy("1,3")
        assert [policy.is_editable(i) for i in range(5)] == [False, True, False, True, False]

    def test_absent_set_allows_all(self):
        policy = ColumnPolicy()
        assert all(policy.is_editable(i) for i in range(5))
        assert policy.editable_columns is None

    def test_out_of_range_index_never_matches(self):
        """An index past the last column is tolerated and simply unused."""
        policy = ColumnPolicy("9")
        assert not any(policy.is_editable(i) for i in range(5))
        assert policy.is_editable(9)

    def test_string_index_matches_int(self):
        policy = ColumnPolicy([1, 3])
        assert policy.is_editable("1") is True
        assert policy.is_editable(" 3 ") is True
        assert policy.is_editable("2") is False
        assert policy.is_editable("x") is False

    def test_editable_columns_is_frozen(self):
        policy = ColumnPolicy("2,0")
        assert policy.editable_columns == frozenset({0, 2})
        assert isinstance(policy.editable_columns, frozenset)


class TestEditableCells:
    """Tests for ColumnPolicy.editable_cells."""

    def test_skips_actions_cell(self):
        row = Row.from_values(["a", "b"], actions_html="<button>x</button>")
        indices = [index for index, _cell in ColumnPolicy().editable_cells(row)]
        assert indices == [0, 1]

    def test_indices_count_data_columns_only(self):
        """The actions cell does not shift data column indices, wherever it sits."""
        row = Row.from_values(["a", "b", "c"], actions_html="<b>x</b>")
        actions = row.cells.pop()
        row.cells.insert(0, actions)

        pairs = list(ColumnPolicy("1").editable_cells(row))

        assert len(pairs) == 1
        assert pairs[0][0] == 1
        assert pairs[0][1].content == "b"
