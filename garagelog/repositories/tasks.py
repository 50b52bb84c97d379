"""Task repository.

Tasks have no owner of their own; writes are scoped to the parent job.
"""

from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError

from garagelog.errors import NotFound
from garagelog.models.enums import SortKey
from garagelog.models.task import Task
from garagelog.repositories.base import Repository
from garagelog.repositories.statements import eq


class TaskRepository(Repository[Task]):
    model = Task
    table = "tasks"
    alias = "t"
    entity_name = "task"
    search_columns = ("t.name", "t.description")
    updatable_columns = frozenset({"name", "description", "part_name", "part_link", "due_date"})
    sort_keys = Repository.sort_keys | {SortKey.COMPLETED}
    owner_column = "job_id"

    def get_for_job(self, job_id: int, task_id: int) -> Task:
        """Fetch a task that belongs to the given job, or raise NotFound."""
        try:
            task = self.db.query(Task).filter(Task.id == task_id, Task.job_id == job_id).first()
        except SQLAlchemyError as e:
            raise self._storage_failure(f"get task {task_id}", e) from e
        if task is None:
            raise NotFound(f"Task {task_id} not found on job {job_id}")
        return task

    def set_complete(self, job_id: int, task_id: int, complete: bool) -> int:
        values = {
            "is_complete": complete,
            "completed_at": datetime.now(UTC) if complete else None,
        }
        return self.execute_update(task_id, values, self.scope(task_id, job_id))

    def list(
        self,
        job_id: int,
        is_complete: bool | None = None,
        search: str | None = None,
        sort: SortKey | None = None,
    ) -> list[Task]:
        predicates = []
        if is_complete is not None:
            predicates.append(eq("t.is_complete", is_complete))
        predicates.append(eq("t.job_id", job_id))
        return self.select((), predicates, search, sort)
