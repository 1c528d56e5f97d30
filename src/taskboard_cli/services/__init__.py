"""Services module for the task board CLI - Business logic layer."""

from .board_service import BoardService, CommandResult
from .refresh_sequencer import RefreshOutcome, RefreshSequencer
from .selection_service import Selection
from .task_service import TaskService

__all__ = [
    "BoardService",
    "CommandResult",
    "RefreshOutcome",
    "RefreshSequencer",
    "Selection",
    "TaskService",
]
