"""Tests for TableOptions."""

import pytest

from rowedit.options import DEFAULT_BUTTON_HTML, AdvancedOptions, TableOptions


class TestDefaults:
    """Default option values."""

    def test_defaults(self):
        options = TableOptions()
        assert options.editable_columns is None
        assert options.add_button is None
        assert options.on_edit is None
        assert options.advanced.column_label == "Actions"
        assert options.advanced.confirm_question == "Are you sure to delete this row?"
        assert options.actions_cell_html == DEFAULT_BUTTON_HTML

    def test_default_buttons(self):
        for button_id in ("bEdit", "bDel", "bAcep", "bCanc"):
            assert f'id="{button_id}"' in DEFAULT_BUTTON_HTML


class TestMerged:
    """Tests for TableOptions.merged."""

    def test_top_level_override(self):
        options = TableOptions().merged(editable_columns="1,2")
        assert options.editable_columns == "1,2"

    def test_original_unchanged(self):
        base = TableOptions()
        base.merged(editable_columns="1")
        assert base.editable_columns is None

    def test_advanced_dict_replaces_named_keys_only(self):
        options = TableOptions().merged(advanced={"column_label": "Tools"})
        assert options.advanced.column_label == "Tools"
        assert options.advanced.confirm_question == "Are you sure to delete this row?"

    def test_advanced_instance_replaces_all(self):
        advanced = AdvancedOptions(column_label="X", confirm_question="Q?", button_html="<b/>")
        options = TableOptions().merged(advanced=advanced)
        assert options.advanced is advanced
        assert options.actions_cell_html == "<b/>"

    def test_unknown_key_raises(self):
        with pytest.raises(TypeError):
            TableOptions().merged(colour="red")

    def test_unknown_advanced_key_raises(self):
        with pytest.raises(TypeError):
            TableOptions().merged(advanced={"colour": "red"})
