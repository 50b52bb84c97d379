"""Job/label relation repository."""

from collections.abc import Mapping
from typing import Any

from garagelog.errors import ValidationFailure
from garagelog.models.enums import SortKey
from garagelog.models.job import JobLabel
from garagelog.repositories.base import Repository
from garagelog.repositories.statements import assemble, eq


class JobLabelRepository(Repository[JobLabel]):
    model = JobLabel
    table = "job_labels"
    alias = "jl"
    entity_name = "job label"
    owner_column = None

    def order_by(self, sort: SortKey | None) -> str:
        # Relations have no name or updated_at; insertion order is all there is
        return "jl.id ASC"

    def update(
        self, entity_id: int, values: Mapping[str, Any], owner_id: int | None = None
    ) -> int:
        raise ValidationFailure("Job labels cannot be edited; unassign and assign instead")

    def assign(self, job_id: int, label_id: int) -> int:
        """Attach a label to a job. Assigning twice returns the existing relation."""
        existing = self.list(job_id=job_id, label_id=label_id)
        if existing:
            return existing[0].id
        return self.create(job_id=job_id, label_id=label_id)

    def unassign(self, job_id: int, label_id: int) -> int:
        statement = assemble(
            "DELETE FROM job_labels",
            predicates=[eq("job_id", job_id), eq("label_id", label_id)],
        )
        return self.execute_write(statement, action="deleted")

    def list(
        self,
        job_id: int | None = None,
        label_id: int | None = None,
    ) -> list[JobLabel]:
        predicates = []
        if job_id is not None:
            predicates.append(eq("jl.job_id", job_id))
        if label_id is not None:
            predicates.append(eq("jl.label_id", label_id))
        return self.select((), predicates)
