"""Vehicle schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VehicleCreate(BaseModel):
    """Create a vehicle. user_id defaults to the caller; only admins may set another."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)
    type: str | None = Field(None, max_length=50)
    is_metric: bool = False
    vin: str | None = Field(None, max_length=17)
    year: int | None = Field(None, ge=1885, le=2100)
    make: str | None = Field(None, max_length=255)
    model: str | None = Field(None, max_length=255)
    trim: str | None = Field(None, max_length=255)
    odometer: int | None = Field(None, ge=0)
    user_id: int | None = None


class VehicleUpdate(BaseModel):
    """Update a vehicle."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)
    type: str | None = Field(None, max_length=50)
    is_metric: bool | None = None
    vin: str | None = Field(None, max_length=17)
    year: int | None = Field(None, ge=1885, le=2100)
    make: str | None = Field(None, max_length=255)
    model: str | None = Field(None, max_length=255)
    trim: str | None = Field(None, max_length=255)
    odometer: int | None = Field(None, ge=0)
    user_id: int | None = None


class VehicleResponse(BaseModel):
    """Vehicle response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None
    description: str | None
    type: str | None
    is_metric: bool
    vin: str | None
    year: int | None
    make: str | None
    model: str | None
    trim: str | None
    odometer: int | None
    user_id: int
    created_at: datetime
    updated_at: datetime
