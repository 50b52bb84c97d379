"""Application-level cascade deletes.

The storage engine removes nothing on its own, so deleting a vehicle, job or
label walks its dependents first:

    vehicle -> jobs
    job     -> tasks, alerts, job/label relations
    label   -> job/label relations (the jobs themselves stay)

Cleanup is best effort. A dependent that fails to list or delete is logged
and skipped; only the error from deleting the root itself reaches the caller.
Nothing here runs inside a transaction spanning the steps.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy.orm import Session

from garagelog.errors import GarageLogError, Unauthorized
from garagelog.repositories import (
    AlertRepository,
    JobLabelRepository,
    JobRepository,
    LabelRepository,
    TaskRepository,
    VehicleRepository,
)

logger = logging.getLogger(__name__)


class CascadeOrchestrator:
    """Deletes aggregate roots together with their dependents."""

    def __init__(self, db: Session):
        self.vehicles = VehicleRepository(db)
        self.jobs = JobRepository(db)
        self.tasks = TaskRepository(db)
        self.alerts = AlertRepository(db)
        self.labels = LabelRepository(db)
        self.job_labels = JobLabelRepository(db)

    def delete_vehicle(self, vehicle_id: int, owner_id: int | None = None) -> int:
        """Delete a vehicle and every job recorded against it."""
        vehicle = self.vehicles.get_by_id(vehicle_id)
        self._check_owner(vehicle.user_id, owner_id, f"vehicle {vehicle_id}")

        jobs = self._dependents(f"jobs of vehicle {vehicle_id}", self.jobs.list, vehicle_id=vehicle_id)
        for job in jobs:
            try:
                self.delete_job(job.id)
            except GarageLogError as e:
                logger.warning(f"Could not delete job {job.id} of vehicle {vehicle_id}: {e}")

        return self.vehicles.delete(vehicle_id, owner_id)

    def delete_job(self, job_id: int, owner_id: int | None = None) -> int:
        """Delete a job with its tasks, alerts and label assignments."""
        job = self.jobs.get_by_id(job_id)
        self._check_owner(job.user_id, owner_id, f"job {job_id}")

        for task in self._dependents(f"tasks of job {job_id}", self.tasks.list, job_id=job_id):
            try:
                self.tasks.delete(task.id, job_id)
            except GarageLogError as e:
                logger.warning(f"Could not delete task {task.id} of job {job_id}: {e}")

        for alert in self._dependents(f"alerts of job {job_id}", self.alerts.list, job_id=job_id):
            try:
                self.alerts.delete(alert.id)
            except GarageLogError as e:
                logger.warning(f"Could not delete alert {alert.id} of job {job_id}: {e}")

        relations = self._dependents(
            f"labels of job {job_id}", self.job_labels.list, job_id=job_id
        )
        for relation in relations:
            try:
                self.job_labels.delete(relation.id)
            except GarageLogError as e:
                logger.warning(
                    f"Could not remove label {relation.label_id} from job {job_id}: {e}"
                )

        return self.jobs.delete(job_id, owner_id)

    def delete_label(self, label_id: int, owner_id: int | None = None) -> int:
        """Unassign a label from every job, then delete it."""
        label = self.labels.get_by_id(label_id)
        self._check_owner(label.user_id, owner_id, f"label {label_id}")

        relations = self._dependents(
            f"jobs of label {label_id}", self.job_labels.list, label_id=label_id
        )
        for relation in relations:
            try:
                self.job_labels.unassign(relation.job_id, label_id)
            except GarageLogError as e:
                logger.warning(
                    f"Could not remove label {label_id} from job {relation.job_id}: {e}"
                )

        return self.labels.delete(label_id, owner_id)

    def _dependents(
        self, description: str, lister: Callable[..., Sequence[Any]], **filters: Any
    ) -> Sequence[Any]:
        try:
            return lister(**filters)
        except GarageLogError as e:
            logger.warning(f"Could not list {description}: {e}")
            return []

    @staticmethod
    def _check_owner(actual_owner: int | None, owner_id: int | None, what: str) -> None:
        # owner_id is None for admins, who may delete anything
        if owner_id is not None and actual_owner != owner_id:
            raise Unauthorized(f"Not allowed to delete {what}")
