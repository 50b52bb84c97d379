"""Pydantic schemas for API requests and responses."""

from garagelog.schemas.alert import AlertCreate, AlertResponse, AlertUpdate, ReadState
from garagelog.schemas.auth import (
    AuthResponse,
    ClaimsResponse,
    Credentials,
    PasswordChange,
    TokenResponse,
)
from garagelog.schemas.job import Completion, JobCreate, JobResponse, JobUpdate
from garagelog.schemas.label import JobLabelResponse, LabelCreate, LabelResponse, LabelUpdate
from garagelog.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from garagelog.schemas.user import UserCreate, UserResponse, UserUpdate
from garagelog.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleUpdate

__all__ = [
    "Credentials",
    "TokenResponse",
    "AuthResponse",
    "ClaimsResponse",
    "PasswordChange",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "VehicleCreate",
    "VehicleUpdate",
    "VehicleResponse",
    "JobCreate",
    "JobUpdate",
    "JobResponse",
    "Completion",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "LabelCreate",
    "LabelUpdate",
    "LabelResponse",
    "JobLabelResponse",
    "AlertCreate",
    "AlertUpdate",
    "AlertResponse",
    "ReadState",
]
