"""
Task repository for database access.

Encapsulates the Supabase queries for the ``tasks`` table.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Task, TaskStatus


class TaskRepository(BaseRepository[Task]):
    """
    Repository for task data access.

    Note: This repository does NOT perform authorization checks. It is built
    on the caller's session client and relies on row-level security.
    """

    def list_for_workspace(self, workspace_id: str) -> list[Task]:
        """All tasks of a workspace, ascending by position."""
        result = (
            self._db.table("tasks")
            .select("*")
            .eq("workspace_id", workspace_id)
            .order("position")
            .execute()
        )
        return [Task(**row) for row in result.data]

    def get_top_position(self, workspace_id: str, status: TaskStatus) -> Optional[float]:
        """Lowest position in a column, or None when the column is empty."""
        result = (
            self._db.table("tasks")
            .select("position")
            .eq("workspace_id", workspace_id)
            .eq("status", status.value)
            .order("position")
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return float(result.data[0]["position"])

    def create(self, data: dict[str, Any]) -> Task:
        result = self._db.table("tasks").insert(data).execute()
        return Task(**result.data[0])

    def update_position(self, task_id: str, status: TaskStatus, position: float) -> Optional[Task]:
        """
        Set a task's column and position.

        Returns:
            The updated task, or None if no row matched.
        """
        data = {
            "status": status.value,
            "position": position,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        result = self._db.table("tasks").update(data).eq("id", task_id).execute()
        if not result.data:
            return None
        return Task(**result.data[0])

    def delete(self, task_id: str) -> bool:
        """
        Delete a task.

        Returns:
            True if a row was deleted.
        """
        result = self._db.table("tasks").delete().eq("id", task_id).execute()
        return bool(result.data)
