"""Alert repository."""

from datetime import UTC, datetime

from garagelog.models.alert import Alert
from garagelog.models.enums import AlertType, SortKey
from garagelog.repositories.base import Repository
from garagelog.repositories.statements import eq, lte


class AlertRepository(Repository[Alert]):
    model = Alert
    table = "alerts"
    alias = "a"
    entity_name = "alert"
    search_columns = ("a.name", "a.description")
    updatable_columns = frozenset(
        {"name", "description", "type", "vehicle_id", "job_id", "task_id", "is_read", "alert_at"}
    )

    def set_read(self, alert_id: int, read: bool, owner_id: int | None = None) -> int:
        """Mark an alert read (stamping read_at) or unread."""
        values = {"is_read": read, "read_at": datetime.now(UTC) if read else None}
        return self.execute_update(alert_id, values, self.scope(alert_id, owner_id))

    def list(
        self,
        user_id: int | None = None,
        vehicle_id: int | None = None,
        job_id: int | None = None,
        task_id: int | None = None,
        alert_type: AlertType | None = None,
        is_read: bool | None = None,
        is_due: bool = False,
        search: str | None = None,
        sort: SortKey | None = None,
    ) -> list[Alert]:
        """List alerts. ``is_due`` keeps only alerts whose alert_at has passed."""
        predicates = []
        if user_id is not None:
            predicates.append(eq("a.user_id", user_id))
        if vehicle_id is not None:
            predicates.append(eq("a.vehicle_id", vehicle_id))
        if job_id is not None:
            predicates.append(eq("a.job_id", job_id))
        if task_id is not None:
            predicates.append(eq("a.task_id", task_id))
        if alert_type is not None:
            predicates.append(eq("a.type", alert_type))
        if is_read is not None:
            predicates.append(eq("a.is_read", is_read))
        if is_due:
            predicates.append(lte("a.alert_at", datetime.now(UTC)))
        return self.select((), predicates, search, sort)
