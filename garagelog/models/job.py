"""Job and job/label relation models."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from garagelog.database import Base
from garagelog.models.mixins import TimestampMixin


class Job(Base, TimestampMixin):
    """A unit of maintenance work, optionally tied to a vehicle."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    instructions = Column(Text, nullable=True)
    is_template = Column(Boolean, default=False, nullable=False)
    is_complete = Column(Boolean, default=False, nullable=False)
    vehicle_id = Column(Integer, nullable=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    # Job this one was repeated from
    origin_job_id = Column(Integer, nullable=True)
    repeats = Column(Boolean, default=False, nullable=False)
    odo_interval = Column(Integer, nullable=True)
    time_interval = Column(Integer, nullable=True)
    time_interval_unit = Column(String(20), nullable=True)  # TimeIntervalUnit
    due_date = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)


class JobLabel(Base):
    """Many-to-many link between jobs and labels."""

    __tablename__ = "job_labels"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, nullable=False, index=True)
    label_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
