"""Label repository."""

from garagelog.models.enums import SortKey
from garagelog.models.label import Label
from garagelog.repositories.base import Repository
from garagelog.repositories.statements import eq


class LabelRepository(Repository[Label]):
    model = Label
    table = "labels"
    alias = "l"
    entity_name = "label"
    search_columns = ("l.name",)
    updatable_columns = frozenset({"name", "color"})

    def list(
        self,
        user_id: int | None = None,
        job_id: int | None = None,
        search: str | None = None,
        sort: SortKey | None = None,
    ) -> list[Label]:
        joins = []
        predicates = []
        if user_id is not None:
            predicates.append(eq("l.user_id", user_id))
        if job_id is not None:
            joins.append("JOIN job_labels AS jl ON l.id = jl.label_id")
            predicates.append(eq("jl.job_id", job_id))
        return self.select(joins, predicates, search, sort)
