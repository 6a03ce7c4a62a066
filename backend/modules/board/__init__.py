"""
Kanban board module.

Public API:
- IBoardService: Interface for board operations
- allocate: Fractional position allocator for drag-and-drop
- Task models and exceptions
"""

from .interfaces import IBoardService
from .positions import SEED_POSITION, allocate, is_valid_position
from .models import (
    Board,
    BoardColumn,
    CreateTaskRequest,
    MoveTaskRequest,
    Task,
    TaskPriority,
    TaskStatus,
)
from .exceptions import InvalidPositionError, TaskNotFoundError

__all__ = [
    # Interface
    "IBoardService",
    # Positions
    "SEED_POSITION",
    "allocate",
    "is_valid_position",
    # Models
    "Board",
    "BoardColumn",
    "CreateTaskRequest",
    "MoveTaskRequest",
    "Task",
    "TaskPriority",
    "TaskStatus",
    # Exceptions
    "InvalidPositionError",
    "TaskNotFoundError",
]
