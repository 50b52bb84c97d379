"""Alert model."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from garagelog.database import Base
from garagelog.models.enums import AlertType
from garagelog.models.mixins import TimestampMixin


class Alert(Base, TimestampMixin):
    """Notification or reminder for a user, optionally about a vehicle/job/task."""

    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    type = Column(String(20), default=AlertType.NOTIFICATION.value, nullable=False)
    user_id = Column(Integer, nullable=False, index=True)
    vehicle_id = Column(Integer, nullable=True, index=True)
    job_id = Column(Integer, nullable=True, index=True)
    task_id = Column(Integer, nullable=True, index=True)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
    # When the alert should fire
    alert_at = Column(DateTime(timezone=True), nullable=True)
