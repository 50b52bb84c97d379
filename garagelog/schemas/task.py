"""Task schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Create a task on a job."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    part_name: str | None = Field(None, max_length=255)
    part_link: str | None = Field(None, max_length=2048)
    due_date: datetime | None = None


class TaskUpdate(BaseModel):
    """Update a task."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    part_name: str | None = Field(None, max_length=255)
    part_link: str | None = Field(None, max_length=2048)
    due_date: datetime | None = None


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    is_complete: bool
    job_id: int
    part_name: str | None
    part_link: str | None
    due_date: datetime | None
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime
