"""Job repository."""

from datetime import UTC, datetime

from garagelog.models.enums import SortKey
from garagelog.models.job import Job
from garagelog.repositories.base import Repository
from garagelog.repositories.statements import eq


class JobRepository(Repository[Job]):
    model = Job
    table = "jobs"
    alias = "j"
    entity_name = "job"
    search_columns = ("j.name", "j.description", "j.instructions")
    updatable_columns = frozenset(
        {
            "name",
            "description",
            "instructions",
            "is_template",
            "vehicle_id",
            "origin_job_id",
            "repeats",
            "odo_interval",
            "time_interval",
            "time_interval_unit",
            "due_date",
        }
    )
    sort_keys = Repository.sort_keys | {SortKey.COMPLETED}

    def set_complete(self, job_id: int, complete: bool, owner_id: int | None = None) -> int:
        """Mark a job complete (stamping completed_at) or reopen it."""
        values = {
            "is_complete": complete,
            "completed_at": datetime.now(UTC) if complete else None,
        }
        return self.execute_update(job_id, values, self.scope(job_id, owner_id))

    def list(
        self,
        user_id: int | None = None,
        vehicle_id: int | None = None,
        is_template: bool | None = None,
        is_complete: bool | None = None,
        label_id: int | None = None,
        search: str | None = None,
        sort: SortKey | None = None,
    ) -> list[Job]:
        joins = []
        predicates = []
        if user_id is not None:
            predicates.append(eq("j.user_id", user_id))
        if vehicle_id is not None:
            predicates.append(eq("j.vehicle_id", vehicle_id))
        if is_template is not None:
            predicates.append(eq("j.is_template", is_template))
        if is_complete is not None:
            predicates.append(eq("j.is_complete", is_complete))
        if label_id is not None:
            joins.append("JOIN job_labels AS jl ON j.id = jl.job_id")
            predicates.append(eq("jl.label_id", label_id))
        return self.select(joins, predicates, search, sort)
