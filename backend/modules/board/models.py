"""
Board module data models.

Tasks are the cards of a workspace's Kanban board.
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator


class TaskStatus(str, Enum):
    """Board column a task sits in."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


class TaskPriority(str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Task(BaseModel):
    """A task row."""

    id: str = Field(..., description="Task ID (UUID)")
    workspace_id: str = Field(..., description="Owning workspace")
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    position: float = Field(..., description="Ordering key within the status column")
    assignee_id: Optional[str] = None
    created_by: str
    due_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class CreateTaskRequest(BaseModel):
    """Request to create a task at the top of the todo column."""

    title: str = Field(..., max_length=500)
    description: Optional[str] = Field(None, max_length=10000)
    priority: TaskPriority = TaskPriority.MEDIUM

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Task title is required.")
        return value

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class MoveTaskRequest(BaseModel):
    """
    Request to move a task after a drag-and-drop.

    ``prev_position`` and ``next_position`` are the keys of the cards that
    will sit directly above and below the moved card in ``status``.
    """

    status: TaskStatus
    prev_position: Optional[float] = None
    next_position: Optional[float] = None

    @field_validator("prev_position", "next_position")
    @classmethod
    def finite(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not math.isfinite(value):
            raise ValueError("Neighbour positions must be finite.")
        return value

    @model_validator(mode="after")
    def neighbours_in_order(self) -> "MoveTaskRequest":
        if (
            self.prev_position is not None
            and self.next_position is not None
            and self.prev_position >= self.next_position
        ):
            raise ValueError("prev_position must be lower than next_position.")
        return self


class BoardColumn(BaseModel):
    """One status column, sorted by position."""

    status: TaskStatus
    tasks: list[Task] = Field(default_factory=list)


class Board(BaseModel):
    """A workspace's board: one column per status, in board order."""

    workspace_id: str
    columns: list[BoardColumn]
