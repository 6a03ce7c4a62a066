"""
Board service implementation.

Computes ordering keys with the position allocator and persists tasks
through TaskRepository.
"""

import logging

from .exceptions import InvalidPositionError, TaskNotFoundError
from .interfaces import IBoardService
from .models import Board, BoardColumn, CreateTaskRequest, MoveTaskRequest, Task, TaskStatus
from .positions import allocate, is_valid_position
from .repository import TaskRepository

logger = logging.getLogger(__name__)


class BoardService(IBoardService):
    """Kanban board operations for one caller."""

    def __init__(self, repository: TaskRepository):
        self._repository = repository

    async def get_board(self, workspace_id: str) -> Board:
        tasks = self._repository.list_for_workspace(workspace_id)
        columns = {status: BoardColumn(status=status) for status in TaskStatus}
        for task in sorted(tasks, key=lambda t: t.position):
            columns[task.status].tasks.append(task)
        return Board(workspace_id=workspace_id, columns=list(columns.values()))

    async def create_task(
        self,
        workspace_id: str,
        user_id: str,
        request: CreateTaskRequest,
    ) -> Task:
        top = self._repository.get_top_position(workspace_id, TaskStatus.TODO)
        position = allocate(None, top)
        if not is_valid_position(position, next=top):
            raise InvalidPositionError(position, next_position=top)

        return self._repository.create({
            "workspace_id": workspace_id,
            "title": request.title,
            "description": request.description,
            "priority": request.priority.value,
            "status": TaskStatus.TODO.value,
            "position": position,
            "created_by": user_id,
        })

    async def move_task(self, task_id: str, request: MoveTaskRequest) -> Task:
        position = allocate(request.prev_position, request.next_position)
        if not is_valid_position(position, request.prev_position, request.next_position):
            # Neighbours too close for another midpoint
            logger.warning("Position space exhausted moving task %s", task_id)
            raise InvalidPositionError(position, request.prev_position, request.next_position)

        task = self._repository.update_position(task_id, request.status, position)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def delete_task(self, task_id: str) -> None:
        if not self._repository.delete(task_id):
            raise TaskNotFoundError(task_id)
