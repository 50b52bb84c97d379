"""Vehicle repository."""

from garagelog.models.enums import SortKey
from garagelog.models.vehicle import Vehicle
from garagelog.repositories.base import Repository
from garagelog.repositories.statements import eq


class VehicleRepository(Repository[Vehicle]):
    model = Vehicle
    table = "vehicles"
    alias = "v"
    entity_name = "vehicle"
    search_columns = ("v.name", "v.description", "v.make", "v.model", "v.trim")
    updatable_columns = frozenset(
        {
            "name",
            "description",
            "type",
            "is_metric",
            "vin",
            "year",
            "make",
            "model",
            "trim",
            "odometer",
            "user_id",
        }
    )

    def list(
        self,
        user_id: int | None = None,
        job_id: int | None = None,
        search: str | None = None,
        sort: SortKey | None = None,
    ) -> list[Vehicle]:
        joins = []
        predicates = []
        if user_id is not None:
            predicates.append(eq("v.user_id", user_id))
        if job_id is not None:
            joins.append("JOIN jobs AS j ON v.id = j.vehicle_id")
            predicates.append(eq("j.id", job_id))
        return self.select(joins, predicates, search, sort)
