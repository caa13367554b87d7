"""Service layer for the row editing engine.

Services operate on the Table model in place. The controller composes them;
UI adapters should go through the controller's action intents.

Services:
- RowStateMachine: normal/editing transitions with snapshot and pending buffers
- RowLifecycleOps: delete with confirmation, add by synthesis or clone
- TableSerializer: delimited text export that commits in-progress edits
"""

from .row_lifecycle import RowLifecycleOps
from .row_state import RowStateMachine
from .table_serializer import TableSerializer

__all__ = [
    "RowLifecycleOps",
    "RowStateMachine",
    "TableSerializer",
]
