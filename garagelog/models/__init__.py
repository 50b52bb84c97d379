"""SQLAlchemy models.

References between tables are indexed integer columns without foreign key
constraints. Dependents are cleaned up by the cascade service, and deleting a
user leaves the rows it owns in place.
"""

from garagelog.models.alert import Alert
from garagelog.models.job import Job, JobLabel
from garagelog.models.label import Label
from garagelog.models.task import Task
from garagelog.models.user import User
from garagelog.models.vehicle import Vehicle

__all__ = [
    "User",
    "Vehicle",
    "Job",
    "JobLabel",
    "Task",
    "Label",
    "Alert",
]
