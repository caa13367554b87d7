"""Dialog for exporting table data as delimited text."""

from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, ttk

# Label -> separator choices offered by the dialog
SEPARATORS: dict[str, str] = {
    "Comma (,)": ",",
    "Semicolon (;)": ";",
    "Tab": "\t",
    "Pipe (|)": "|",
}


class ExportCsvDialog(tk.Toplevel):
    """Dialog for exporting the table to a delimited text file.

    Allows user to choose:
    - Separator between values
    - Output file location

    Rows still being edited are accepted before export.
    """

    def _on_export(self) -> None:
        """Handle export button click."""
        separator = SEPARATORS[self.separator_var.get()]
        default_ext = ".tsv" if separator == "\t" else ".csv"

        file_path = filedialog.asksaveasfilename(
            parent=self,
            title="Export Table",
            defaultextension=default_ext,
            filetypes=[("CSV files", "*.csv"), ("TSV files", "*.tsv"), ("All files", "*.*")],
        )

        if not file_path:
            return

        self.result = (Path(file_path), separator)
        self.destroy()

    def _on_cancel(self) -> None:
        """Handle cancel button click."""
        self.result = None
        self.destroy()

    def _create_widgets(self) -> None:
        """Create dialog widgets."""
        main_frame = ttk.Frame(self, padding=20)
        main_frame.pack(fill=tk.BOTH, expand=True)

        title_label = ttk.Label(
            main_frame,
            text="Export Table Data",
            font=("TkDefaultFont", 10, "bold"),
        )
        title_label.pack(pady=(0, 15))

        mode_frame = ttk.LabelFrame(main_frame, text="Separator", padding=10)
        mode_frame.pack(fill=tk.X, pady=(0, 15))

        self.separator_var = tk.StringVar(value=next(iter(SEPARATORS)))

        for label in SEPARATORS:
            ttk.Radiobutton(
                mode_frame,
                text=label,
                variable=self.separator_var,
                value=label,
            ).pack(anchor=tk.W, pady=2)

        ttk.Label(
            main_frame,
            text="Rows being edited will be accepted first.",
            foreground="gray",
        ).pack(anchor=tk.W, pady=(0, 10))

        button_frame = ttk.Frame(main_frame)
        button_frame.pack(fill=tk.X)

        ttk.Button(
            button_frame,
            text="Export...",
            command=self._on_export,
            width=12,
        ).pack(side=tk.LEFT, padx=(0, 5))

        ttk.Button(
            button_frame,
            text="Cancel",
            command=self._on_cancel,
            width=12,
        ).pack(side=tk.LEFT)

    def __init__(self, parent: tk.Widget):
        """Initialize the export dialog.

        Args:
            parent: Parent widget
        """
        super().__init__(parent)
        self.title("Export Table")
        self.transient(parent)
        self.grab_set()

        # Result
        self.result: tuple[Path, str] | None = None  # (file_path, separator)

        self._create_widgets()

        # Center on parent
        self.update_idletasks()
        x = parent.winfo_rootx() + (parent.winfo_width() - self.winfo_width()) // 2
        y = parent.winfo_rooty() + (parent.winfo_height() - self.winfo_height()) // 2
        self.geometry(f"+{x}+{y}")
