"""Alert schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from garagelog.models.enums import AlertType


class AlertCreate(BaseModel):
    """Create an alert. user_id defaults to the caller."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)
    type: AlertType = AlertType.NOTIFICATION
    vehicle_id: int | None = None
    job_id: int | None = None
    task_id: int | None = None
    alert_at: datetime | None = None
    user_id: int | None = None


class AlertUpdate(BaseModel):
    """Update an alert."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)
    type: AlertType | None = None
    vehicle_id: int | None = None
    job_id: int | None = None
    task_id: int | None = None
    alert_at: datetime | None = None


class AlertResponse(BaseModel):
    """Alert response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None
    description: str | None
    type: AlertType
    user_id: int
    vehicle_id: int | None
    job_id: int | None
    task_id: int | None
    is_read: bool
    read_at: datetime | None
    alert_at: datetime | None
    created_at: datetime
    updated_at: datetime


class ReadState(BaseModel):
    """Mark an alert read or unread."""

    is_read: bool = True
