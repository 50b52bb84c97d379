"""Job schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from garagelog.models.enums import TimeIntervalUnit


class JobCreate(BaseModel):
    """Create a job, optionally against a vehicle."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    instructions: str | None = Field(None, max_length=10000)
    is_template: bool = False
    vehicle_id: int | None = None
    origin_job_id: int | None = None
    repeats: bool = False
    odo_interval: int | None = Field(None, ge=0)
    time_interval: int | None = Field(None, ge=0)
    time_interval_unit: TimeIntervalUnit | None = None
    due_date: datetime | None = None
    user_id: int | None = None


class JobUpdate(BaseModel):
    """Update a job. Completion goes through the complete endpoint."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    instructions: str | None = Field(None, max_length=10000)
    is_template: bool | None = None
    vehicle_id: int | None = None
    origin_job_id: int | None = None
    repeats: bool | None = None
    odo_interval: int | None = Field(None, ge=0)
    time_interval: int | None = Field(None, ge=0)
    time_interval_unit: TimeIntervalUnit | None = None
    due_date: datetime | None = None


class JobResponse(BaseModel):
    """Job response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    instructions: str | None
    is_template: bool
    is_complete: bool
    vehicle_id: int | None
    user_id: int
    origin_job_id: int | None
    repeats: bool
    odo_interval: int | None
    time_interval: int | None
    time_interval_unit: str | None
    due_date: datetime | None
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class Completion(BaseModel):
    """Mark a job or task complete, or reopen it."""

    is_complete: bool = True
