"""Command line entry point for rowedit."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .controller import TableController
from .data.html_document import HtmlTableDocument
from .debug_trace import logger, setup_debug_logging
from .options import TableOptions


def get_version():
    """Get version from package metadata."""
    try:
        from importlib.metadata import version

        return version("rowedit")
    except Exception:
        return "Development"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rowedit",
        description="Edit the rows of an HTML table, or export it as delimited text.",
    )
    parser.add_argument("file", type=Path, help="HTML file containing the table")
    parser.add_argument("--table-id", help="id of the table element (default: first table)")
    parser.add_argument(
        "--editable-columns",
        help='comma-separated data column indices that may be edited, e.g. "0,2" (default: all)',
    )
    parser.add_argument(
        "--export-csv",
        metavar="OUT",
        help="export the table to OUT ('-' for stdout) instead of opening the editor",
    )
    parser.add_argument("--separator", default=",", help="value separator for export")
    parser.add_argument("--debug", action="store_true", help="log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser


def export(document: HtmlTableDocument, out: str, separator: str, options: TableOptions) -> None:
    """Export the document's table as delimited text to ``out`` ('-' for stdout)."""
    controller = TableController(document.table, options)
    if out == "-":
        sys.stdout.write(controller.to_delimited_text(separator))
    else:
        controller.serializer.write(out, separator)


def run_editor(document: HtmlTableDocument, file_path: Path, options: TableOptions) -> None:
    """Open the editor window and run the Tk main loop."""
    import tkinter as tk

    from .views.window import EditorWindow

    root = tk.Tk()
    root.withdraw()
    window = EditorWindow(root, document, file_path, options)
    window.bind("<Destroy>", lambda e: root.quit() if e.widget is window else None)
    root.mainloop()
    root.destroy()


def main(argv: list[str] | None = None) -> int:
    """Entry point for the application."""
    args = build_parser().parse_args(argv)
    if args.debug:
        setup_debug_logging()

    try:
        document = HtmlTableDocument.load(args.file, args.table_id)
    except (FileNotFoundError, ValueError) as e:
        print(f"rowedit: {e}", file=sys.stderr)
        return 1

    options = TableOptions(editable_columns=args.editable_columns)
    logger.debug(f"Loaded {args.file} with {len(document.table)} rows")

    if args.export_csv:
        try:
            export(document, args.export_csv, args.separator, options)
        except OSError as e:
            print(f"rowedit: {e}", file=sys.stderr)
            return 1
        return 0

    run_editor(document, args.file, options)
    return 0


if __name__ == "__main__":
    sys.exit(main())
