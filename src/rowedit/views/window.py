"""Editor window for an HTML table."""

from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox

from ..data.html_document import HtmlTableDocument
from ..debug_trace import logger
from ..options import TableOptions
from ..widgets.export_csv_dialog import ExportCsvDialog
from .table_panel import TablePanel


class EditorWindow(tk.Toplevel):
    """Window editing the table of one HTML document."""

    def _setup_window(self) -> None:
        """Configure window properties."""
        self._update_title()
        self.geometry("800x520")
        self.minsize(500, 300)

    def _update_title(self) -> None:
        name = self.file_path.name if self.file_path else "Untitled"
        dirty = "*" if self.panel is not None and self.panel.is_dirty else ""
        self.title(f"rowedit - {dirty}{name}")

    def _on_modified(self) -> None:
        self._update_title()

    def _save_to(self, path: Path) -> bool:
        self.panel.commit_all()
        try:
            self.document.save(path)
        except OSError as e:
            messagebox.showerror("Save Error", f"Could not save {path}:\n{e}", parent=self)
            return False
        self.file_path = path
        self.panel.mark_saved()
        self._update_title()
        return True

    def _save(self) -> bool:
        if self.file_path is None:
            return self._save_as()
        return self._save_to(self.file_path)

    def _save_as(self) -> bool:
        file_path = filedialog.asksaveasfilename(
            parent=self,
            title="Save HTML",
            defaultextension=".html",
            filetypes=[("HTML files", "*.html *.htm"), ("All files", "*.*")],
        )
        if not file_path:
            return False
        return self._save_to(Path(file_path))

    def _export(self) -> None:
        dialog = ExportCsvDialog(self)
        self.wait_window(dialog)
        if dialog.result is None:
            return

        path, separator = dialog.result
        try:
            self.panel.controller.serializer.write(path, separator)
        except OSError as e:
            messagebox.showerror("Export Error", f"Could not export {path}:\n{e}", parent=self)
            return
        logger.debug(f"Exported table to {path}")

    def _on_close(self) -> None:
        """Handle window close, offering to save unsaved changes."""
        if self.panel.is_dirty:
            result = messagebox.askyesnocancel(
                "Unsaved Changes",
                "The table has unsaved changes. Save before closing?",
                parent=self,
            )
            if result is None:
                return
            if result and not self._save():
                return
        self.destroy()

    def _create_menu(self) -> None:
        """Create the menu bar."""
        menubar = tk.Menu(self)
        self.config(menu=menubar)

        file_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="File", menu=file_menu)
        file_menu.add_command(label="Save", command=self._save, accelerator="Ctrl+S")
        file_menu.add_command(label="Save As...", command=self._save_as)
        file_menu.add_command(label="Export...", command=self._export, accelerator="Ctrl+E")
        file_menu.add_separator()
        file_menu.add_command(label="Close Window", command=self._on_close)

        row_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Row", menu=row_menu)
        row_menu.add_command(
            label="Edit", command=lambda: self.panel.run_action("edit"), accelerator="F2"
        )
        row_menu.add_command(
            label="Accept", command=lambda: self.panel.run_action("accept"), accelerator="Ctrl+Enter"
        )
        row_menu.add_command(
            label="Cancel", command=lambda: self.panel.run_action("cancel"), accelerator="Esc"
        )
        row_menu.add_separator()
        row_menu.add_command(
            label="Delete", command=lambda: self.panel.run_action("delete"), accelerator="Ctrl+D"
        )
        row_menu.add_command(
            label="Add Row", command=self.panel.controller.request_add, accelerator="Ctrl+N"
        )

        # Keyboard shortcuts go straight to the action intents
        self.bind("<Control-s>", lambda e: self._save())
        self.bind("<Control-e>", lambda e: self._export())
        self.bind("<F2>", lambda e: self.panel.run_action("edit"))
        self.bind("<Control-Return>", lambda e: self.panel.run_action("accept"))
        self.bind("<Escape>", lambda e: self.panel.run_action("cancel"))
        self.bind("<Control-d>", lambda e: self.panel.run_action("delete"))
        self.bind("<Control-n>", lambda e: self.panel.controller.request_add())

    def __init__(
        self,
        parent: tk.Misc,
        document: HtmlTableDocument,
        file_path: Path | None = None,
        options: TableOptions | None = None,
    ):
        """Initialize the editor window.

        Args:
            parent: Parent widget (usually the hidden Tk root)
            document: Loaded HTML document
            file_path: Where the document is saved (None for a new document)
            options: Table options
        """
        super().__init__(parent)

        self.document = document
        self.file_path = file_path
        self.panel: TablePanel | None = None

        self._setup_window()

        self.panel = TablePanel(self, document.table, options, on_modified=self._on_modified)
        self.panel.pack(fill=tk.BOTH, expand=True)

        self._create_menu()
        self._update_title()

        self.protocol("WM_DELETE_WINDOW", self._on_close)
