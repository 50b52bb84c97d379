"""Repositories: every list, update and delete goes through the statement assembler."""

from garagelog.repositories.alerts import AlertRepository
from garagelog.repositories.job_labels import JobLabelRepository
from garagelog.repositories.jobs import JobRepository
from garagelog.repositories.labels import LabelRepository
from garagelog.repositories.tasks import TaskRepository
from garagelog.repositories.users import UserRepository
from garagelog.repositories.vehicles import VehicleRepository

__all__ = [
    "AlertRepository",
    "JobLabelRepository",
    "JobRepository",
    "LabelRepository",
    "TaskRepository",
    "UserRepository",
    "VehicleRepository",
]
