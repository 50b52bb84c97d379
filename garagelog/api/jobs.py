"""Job API endpoints, including label assignment."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from garagelog.api.dependencies import (
    CurrentClaims,
    ensure_owner,
    get_cascade_orchestrator,
    get_job_label_repository,
    get_job_repository,
    get_label_repository,
    get_vehicle_repository,
    owner_scope,
    resolve_owner,
)
from garagelog.errors import NotModified, Unauthorized
from garagelog.models.enums import SortKey
from garagelog.repositories import (
    JobLabelRepository,
    JobRepository,
    LabelRepository,
    VehicleRepository,
)
from garagelog.schemas.job import Completion, JobCreate, JobResponse, JobUpdate
from garagelog.schemas.label import JobLabelResponse
from garagelog.services.auth import Claims
from garagelog.services.cascade import CascadeOrchestrator

router = APIRouter(prefix="/jobs", tags=["jobs"])

Jobs = Annotated[JobRepository, Depends(get_job_repository)]
Vehicles = Annotated[VehicleRepository, Depends(get_vehicle_repository)]
Labels = Annotated[LabelRepository, Depends(get_label_repository)]
JobLabels = Annotated[JobLabelRepository, Depends(get_job_label_repository)]


def check_vehicle(vehicles: VehicleRepository, claims: Claims, vehicle_id: int | None) -> None:
    """Jobs may only be recorded against vehicles the caller owns."""
    if vehicle_id is None:
        return
    vehicle = vehicles.get_by_id(vehicle_id)
    ensure_owner(claims, vehicle.user_id, f"vehicle {vehicle_id}")


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    claims: CurrentClaims,
    jobs: Jobs,
    user_id: int | None = None,
    vehicle_id: int | None = None,
    is_template: bool | None = None,
    is_complete: bool | None = None,
    label_id: int | None = None,
    search: str | None = None,
    sort: SortKey | None = None,
):
    """List jobs with optional filters."""
    return jobs.list(
        user_id=user_id,
        vehicle_id=vehicle_id,
        is_template=is_template,
        is_complete=is_complete,
        label_id=label_id,
        search=search,
        sort=sort,
    )


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreate,
    claims: CurrentClaims,
    jobs: Jobs,
    vehicles: Vehicles,
):
    """Create a job."""
    check_vehicle(vehicles, claims, job_data.vehicle_id)
    values = job_data.model_dump()
    values["user_id"] = resolve_owner(claims, job_data.user_id)
    job_id = jobs.create(**values)
    return jobs.get_by_id(job_id)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: int, claims: CurrentClaims, jobs: Jobs):
    """Get a specific job."""
    return jobs.get_by_id(job_id)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: int,
    job_data: JobUpdate,
    claims: CurrentClaims,
    jobs: Jobs,
    vehicles: Vehicles,
):
    """Update a job (owner or admin)."""
    job = jobs.get_by_id(job_id)
    ensure_owner(claims, job.user_id, f"job {job_id}")

    values = job_data.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise NotModified("No fields to update")
    if "vehicle_id" in values:
        check_vehicle(vehicles, claims, values["vehicle_id"])

    jobs.update(job_id, values, owner_scope(claims))
    return jobs.get_by_id(job_id)


@router.patch("/{job_id}/complete", response_model=JobResponse)
async def complete_job(
    job_id: int,
    completion: Completion,
    claims: CurrentClaims,
    jobs: Jobs,
):
    """Mark a job complete or reopen it."""
    job = jobs.get_by_id(job_id)
    ensure_owner(claims, job.user_id, f"job {job_id}")
    jobs.set_complete(job_id, completion.is_complete, owner_scope(claims))
    return jobs.get_by_id(job_id)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: int,
    claims: CurrentClaims,
    cascade: Annotated[CascadeOrchestrator, Depends(get_cascade_orchestrator)],
):
    """Delete a job with its tasks, alerts and label assignments."""
    cascade.delete_job(job_id, owner_scope(claims))


@router.post(
    "/{job_id}/labels/{label_id}",
    response_model=JobLabelResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_label(
    job_id: int,
    label_id: int,
    claims: CurrentClaims,
    jobs: Jobs,
    labels: Labels,
    job_labels: JobLabels,
):
    """Attach a label to a job. Assigning an attached label is a no-op."""
    job = jobs.get_by_id(job_id)
    ensure_owner(claims, job.user_id, f"job {job_id}")
    label = labels.get_by_id(label_id)
    if label.user_id is not None and label.user_id != job.user_id and not claims.is_admin:
        raise Unauthorized(f"Label {label_id} belongs to another user")

    relation_id = job_labels.assign(job_id, label_id)
    return job_labels.get_by_id(relation_id)


@router.delete("/{job_id}/labels/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unassign_label(
    job_id: int,
    label_id: int,
    claims: CurrentClaims,
    jobs: Jobs,
    job_labels: JobLabels,
):
    """Detach a label from a job."""
    job = jobs.get_by_id(job_id)
    ensure_owner(claims, job.user_id, f"job {job_id}")
    job_labels.unassign(job_id, label_id)
