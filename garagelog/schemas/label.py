"""Label schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LabelCreate(BaseModel):
    """Create a label. Shared labels (no owner) are admin-only."""

    name: str = Field(..., min_length=1, max_length=255)
    color: str | None = Field(None, max_length=20)  # Hex color
    shared: bool = False


class LabelUpdate(BaseModel):
    """Update a label."""

    name: str | None = Field(None, min_length=1, max_length=255)
    color: str | None = Field(None, max_length=20)


class LabelResponse(BaseModel):
    """Label response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str | None
    user_id: int | None
    created_at: datetime
    updated_at: datetime


class JobLabelResponse(BaseModel):
    """Job/label assignment."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    job_id: int
    label_id: int
