"""Task model."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from garagelog.database import Base
from garagelog.models.mixins import TimestampMixin


class Task(Base, TimestampMixin):
    """A step within a job, optionally naming the part it needs."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_complete = Column(Boolean, default=False, nullable=False)
    job_id = Column(Integer, nullable=False, index=True)
    part_name = Column(String(255), nullable=True)
    part_link = Column(String(2048), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
