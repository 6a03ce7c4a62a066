"""
Board API endpoints.

Provides the Kanban board view and task create/move/delete.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_board_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .exceptions import InvalidPositionError, TaskNotFoundError
from .interfaces import IBoardService
from .models import Board, CreateTaskRequest, MoveTaskRequest, Task

router = APIRouter()


@router.get("/workspaces/{workspace_id}/board", response_model=Board)
async def get_board(
    workspace_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> Board:
    """
    Get a workspace's board, one column per status sorted by position.
    """
    return await service.get_board(workspace_id)


@router.post("/workspaces/{workspace_id}/tasks", response_model=Task, status_code=201)
async def create_task(
    workspace_id: str,
    request: CreateTaskRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> Task:
    """
    Create a task at the top of the todo column.
    """
    try:
        return await service.create_task(workspace_id, user.id, request)
    except InvalidPositionError as e:
        raise HTTPException(status_code=422, detail=e.message)


@router.post("/tasks/{task_id}/move", response_model=Task)
async def move_task(
    task_id: str,
    request: MoveTaskRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> Task:
    """
    Move a task after a drag-and-drop.
    """
    try:
        return await service.move_task(task_id, request)
    except InvalidPositionError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBoardService = Depends(get_board_service),
) -> None:
    """
    Delete a task. Row-level security decides who may.
    """
    try:
        await service.delete_task(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
