"""Vehicle API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from garagelog.api.dependencies import (
    CurrentClaims,
    ensure_owner,
    get_cascade_orchestrator,
    get_vehicle_repository,
    owner_scope,
    resolve_owner,
)
from garagelog.errors import NotModified, Unauthorized
from garagelog.models.enums import SortKey
from garagelog.repositories import VehicleRepository
from garagelog.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleUpdate
from garagelog.services.cascade import CascadeOrchestrator

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

Vehicles = Annotated[VehicleRepository, Depends(get_vehicle_repository)]


@router.get("", response_model=list[VehicleResponse])
async def list_vehicles(
    claims: CurrentClaims,
    vehicles: Vehicles,
    user_id: int | None = None,
    job_id: int | None = None,
    search: str | None = None,
    sort: SortKey | None = None,
):
    """List vehicles, optionally filtered by owner or by a job recorded against them."""
    return vehicles.list(user_id=user_id, job_id=job_id, search=search, sort=sort)


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(vehicle_data: VehicleCreate, claims: CurrentClaims, vehicles: Vehicles):
    """Create a vehicle."""
    values = vehicle_data.model_dump()
    values["user_id"] = resolve_owner(claims, vehicle_data.user_id)
    vehicle_id = vehicles.create(**values)
    return vehicles.get_by_id(vehicle_id)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: int, claims: CurrentClaims, vehicles: Vehicles):
    """Get a specific vehicle."""
    return vehicles.get_by_id(vehicle_id)


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: int,
    vehicle_data: VehicleUpdate,
    claims: CurrentClaims,
    vehicles: Vehicles,
):
    """Update a vehicle (owner or admin). Only admins may change the owner."""
    vehicle = vehicles.get_by_id(vehicle_id)
    ensure_owner(claims, vehicle.user_id, f"vehicle {vehicle_id}")

    values = vehicle_data.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise NotModified("No fields to update")
    if "user_id" in values and values["user_id"] != vehicle.user_id and not claims.is_admin:
        raise Unauthorized("Only admins may reassign a vehicle")

    vehicles.update(vehicle_id, values, owner_scope(claims))
    return vehicles.get_by_id(vehicle_id)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: int,
    claims: CurrentClaims,
    cascade: Annotated[CascadeOrchestrator, Depends(get_cascade_orchestrator)],
):
    """Delete a vehicle and all of its jobs."""
    cascade.delete_vehicle(vehicle_id, owner_scope(claims))
