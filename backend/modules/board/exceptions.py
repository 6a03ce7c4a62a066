"""
Board module exceptions.
"""

from typing import Optional

from shared.exceptions import NotFoundError, ValidationError


class TaskNotFoundError(NotFoundError):
    """Raised when a task does not exist or is not visible to the caller."""

    def __init__(self, task_id: str):
        super().__init__(
            f"Task not found: {task_id}",
            code="TASK_NOT_FOUND",
            details={"task_id": task_id},
        )


class InvalidPositionError(ValidationError):
    """Raised when a computed position is non-finite or out of order."""

    def __init__(
        self,
        position: float,
        prev_position: Optional[float] = None,
        next_position: Optional[float] = None,
    ):
        super().__init__(
            "Invalid position value.",
            code="INVALID_POSITION",
            details={
                "position": repr(position),
                "prev_position": prev_position,
                "next_position": next_position,
            },
        )
