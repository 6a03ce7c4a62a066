"""
Board module interface.

The API layer depends on IBoardService for all board operations.
"""

from typing import Protocol, runtime_checkable

from .models import Board, CreateTaskRequest, MoveTaskRequest, Task


@runtime_checkable
class IBoardService(Protocol):
    """
    Interface for Kanban board operations.

    Implementations run with the caller's session, so row-level security
    decides which workspaces and tasks are visible.
    """

    async def get_board(self, workspace_id: str) -> Board:
        """
        Get every task of a workspace grouped into status columns.

        Returns:
            Board with one column per status, each sorted by position
        """
        ...

    async def create_task(
        self,
        workspace_id: str,
        user_id: str,
        request: CreateTaskRequest,
    ) -> Task:
        """
        Create a task at the top of the todo column.

        Raises:
            InvalidPositionError: If no valid position is left at the top
        """
        ...

    async def move_task(self, task_id: str, request: MoveTaskRequest) -> Task:
        """
        Move a task to a new column and/or slot.

        Raises:
            InvalidPositionError: If the computed position is not usable
            TaskNotFoundError: If the task does not exist
        """
        ...

    async def delete_task(self, task_id: str) -> None:
        """
        Delete a task.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        ...
