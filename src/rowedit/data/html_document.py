"""HTML document adapter for editable tables.

Loads a ``<table>`` from an HTML page into the Table model and renders the
model back into the page. The actions column is marked with
``name="bstable-actions"`` on both the header cell and the row cells; a row
being edited carries ``data-status="editing"`` and its editable cells render
as a hidden snapshot plus an ``<input>`` holding the pending value.
"""

from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup, Tag

from ..debug_trace import log_perf, logger
from ..models.table import ACTIONS_NAME, Cell, Column, Row, RowStatus, Table
from ..options import BUTTON_ACCEPT, BUTTON_CANCEL, BUTTON_DELETE, BUTTON_EDIT
from ..services.row_state import RowStateMachine

# Button id for each action name
ACTION_BUTTON_IDS: dict[str, str] = {
    "edit": BUTTON_EDIT,
    "delete": BUTTON_DELETE,
    "accept": BUTTON_ACCEPT,
    "cancel": BUTTON_CANCEL,
}

HIDDEN_STYLE = "display:none;"


def _is_actions(tag: Tag) -> bool:
    return tag.get("name") == ACTIONS_NAME


class HtmlTableDocument:
    """An HTML page holding one editable table.

    Args:
        html: Page markup.
        table_id: id of the table element, or None for the first table.

    Raises:
        ValueError: If the table or its header row cannot be found.
    """

    def __init__(self, html: str, table_id: str | None = None):
        self.table_id = table_id
        self.soup = BeautifulSoup(html, "html.parser")
        self._element = self._find_table()
        self._row_attrs: dict[int, dict] = {}
        self.table = self._parse()

    @classmethod
    def load(cls, path: Path | str, table_id: str | None = None) -> HtmlTableDocument:
        """Load a document from an HTML file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the table or its header row cannot be found.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"HTML file not found: {path}")
        return cls(path.read_text(encoding="utf-8"), table_id)

    def _find_table(self) -> Tag:
        if self.table_id:
            element = self.soup.find("table", id=self.table_id)
            if element is None:
                raise ValueError(f"Table with id '{self.table_id}' not found in HTML")
        else:
            element = self.soup.find("table")
            if element is None:
                raise ValueError("No table found in HTML")
        return element

    def _header_row(self) -> Tag:
        thead = self._element.find("thead")
        header_row = thead.find("tr") if thead else None
        if header_row is None:
            for tr in self._element.find_all("tr"):
                if tr.find("th", recursive=False):
                    header_row = tr
                    break
        if header_row is None:
            raise ValueError("Table has no header row")
        return header_row

    def _body(self) -> Tag:
        tbody = self._element.find("tbody")
        if tbody is None:
            tbody = self.soup.new_tag("tbody")
            self._element.append(tbody)
        return tbody

    def _body_rows(self) -> list[Tag]:
        header_row = self._header_row()
        tbody = self._element.find("tbody")
        if tbody is not None:
            return [tr for tr in tbody.find_all("tr", recursive=False) if tr is not header_row]
        return [
            tr
            for tr in self._element.find_all("tr")
            if tr is not header_row and tr.find("td", recursive=False)
        ]

    def _parse(self) -> Table:
        header_row = self._header_row()
        columns = [
            Column(label=th.get_text(strip=True), is_actions=_is_actions(th))
            for th in header_row.find_all("th", recursive=False)
        ]

        rows = []
        for tr in self._body_rows():
            cells = [
                Cell(content=td.decode_contents(), is_actions=_is_actions(td))
                for td in tr.find_all("td", recursive=False)
            ]
            row = Row(cells=cells)
            attrs = {k: v for k, v in tr.attrs.items() if k != "data-status"}
            if attrs:
                self._row_attrs[row.row_id] = attrs
            rows.append(row)

        logger.debug(f"Parsed table: {len(columns)} columns, {len(rows)} rows")
        return Table(columns=columns, rows=rows)

    # --------------------------------------------------
    # Rendering
    # --------------------------------------------------

    def _append_markup(self, parent: Tag, markup: str) -> None:
        fragment = BeautifulSoup(markup, "html.parser")
        for node in list(fragment.contents):
            parent.append(node.extract())

    def _render_cell(self, cell: Cell, status: RowStatus) -> Tag:
        td = self.soup.new_tag("td")
        if cell.is_actions:
            td["name"] = ACTIONS_NAME
            self._append_markup(td, cell.content)
            self._apply_action_visibility(td, status)
        elif cell.edit is not None:
            hidden = self.soup.new_tag("div", attrs={"style": "display: none;"})
            self._append_markup(hidden, cell.edit.snapshot)
            field = self.soup.new_tag(
                "input",
                attrs={
                    "class": "form-control input-sm",
                    "data-original-value": cell.edit.snapshot,
                    "value": cell.edit.pending,
                },
            )
            td.append(hidden)
            td.append(field)
        else:
            self._append_markup(td, cell.content)
        return td

    def _apply_action_visibility(self, td: Tag, status: RowStatus) -> None:
        visible = RowStateMachine.visible_actions(status)
        for action, button_id in ACTION_BUTTON_IDS.items():
            button = td.find(id=button_id)
            if button is None:
                continue
            if action in visible:
                if button.get("style", "").replace(" ", "") == HIDDEN_STYLE:
                    del button["style"]
            else:
                button["style"] = HIDDEN_STYLE

    def _render_row(self, row: Row) -> Tag:
        tr = self.soup.new_tag("tr", attrs=dict(self._row_attrs.get(row.row_id, {})))
        if row.is_editing:
            tr["data-status"] = RowStatus.EDITING.value
        for cell in row.cells:
            tr.append(self._render_cell(cell, row.status))
        return tr

    def sync(self) -> None:
        """Write the model back into the page's table element."""
        header_row = self._header_row()
        header_row.clear()
        for col in self.table.columns:
            th = self.soup.new_tag("th")
            if col.is_actions:
                th["name"] = ACTIONS_NAME
            th.string = col.label
            header_row.append(th)

        for tr in self._body_rows():
            tr.decompose()
        tbody = self._body()
        for row in self.table.rows:
            tbody.append(self._render_row(row))

    @log_perf
    def render(self) -> str:
        """Sync the model into the page and return the full markup."""
        self.sync()
        return str(self.soup)

    def save(self, path: Path | str) -> Path:
        """Render the page and write it to ``path``."""
        path = Path(path)
        path.write_text(self.render(), encoding="utf-8")
        logger.debug(f"Saved {len(self.table)} rows to {path}")
        return path
