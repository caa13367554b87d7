"""Edit buffer for a single cell of a row being edited.

CellEdit holds the pre-edit snapshot of a cell and the live pending value
typed by the user. It only exists while the owning row is in editing status;
the state machine drops it on both the commit and the discard path.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CellEdit:
    """Snapshot plus pending value for one editable cell.

    Usage:
        edit = CellEdit.start("Alice")
        edit.pending = "Alicia"
        new_content = edit.freeze()      # "Alicia"
        old_content = edit.revert()      # "Alice"
    """

    snapshot: str
    pending: str

    @classmethod
    def start(cls, content: str) -> CellEdit:
        """Begin editing a cell whose displayed content is ``content``.

        Args:
            content: The current displayed content of the cell.

        Returns:
            New CellEdit with pending value equal to the snapshot.
        """
        return cls(snapshot=content, pending=content)

    def has_changes(self) -> bool:
        """Check if the pending value differs from the snapshot."""
        return self.pending != self.snapshot

    def freeze(self) -> str:
        """Return the content to display when the edit is accepted."""
        return self.pending

    def revert(self) -> str:
        """Return the content to display when the edit is discarded."""
        return self.snapshot
