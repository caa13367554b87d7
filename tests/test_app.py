"""Tests for the command line entry point (export mode only, no window)."""

import pytest

from rowedit.app import main

PAGE = """<table id="t">
<thead><tr><th>Name</th><th>Age</th></tr></thead>
<tbody><tr><td>Alice</td><td>30</td></tr><tr><td>Bob</td><td>40</td></tr></tbody>
</table>"""


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


def test_export_to_stdout(page, capsys):
    assert main([str(page), "--export-csv", "-"]) == 0
    assert capsys.readouterr().out == "Alice,30\nBob,40\n"


def test_export_with_separator(page, capsys):
    assert main([str(page), "--table-id", "t", "--export-csv", "-", "--separator", ";"]) == 0
    assert capsys.readouterr().out == "Alice;30\nBob;40\n"


def test_export_to_file(page, tmp_path):
    out = tmp_path / "out.csv"
    assert main([str(page), "--export-csv", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "Alice,30\nBob,40\n"


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.html"), "--export-csv", "-"]) == 1
    assert "not found" in capsys.readouterr().err


def test_missing_table(page, capsys):
    assert main([str(page), "--table-id", "nope", "--export-csv", "-"]) == 1
    assert "nope" in capsys.readouterr().err
