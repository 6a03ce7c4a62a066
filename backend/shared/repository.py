"""
Base repository class for table access through a Supabase client.

Repositories are built on whichever client the caller hands them: the
service-role client bypasses row-level security, a per-request session
client is limited to what the signed-in user may see.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for table repositories.

    Subclasses build their queries on ``self._db`` and return pydantic
    models of type ``T``; raw rows never leave the repository.

    Example:
        class TaskRepository(BaseRepository[Task]):
            def get_by_id(self, task_id: str) -> Optional[Task]:
                result = self._db.table("tasks").select("*").eq("id", task_id).execute()
                if not result.data:
                    return None
                return Task(**result.data[0])
    """

    def __init__(self, db: Client) -> None:
        self._db = db
