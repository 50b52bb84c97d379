"""Label API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from garagelog.api.dependencies import (
    CurrentClaims,
    ensure_owner,
    get_cascade_orchestrator,
    get_label_repository,
    owner_scope,
)
from garagelog.errors import NotModified, Unauthorized
from garagelog.models.enums import SortKey
from garagelog.repositories import LabelRepository
from garagelog.schemas.label import LabelCreate, LabelResponse, LabelUpdate
from garagelog.services.cascade import CascadeOrchestrator

router = APIRouter(prefix="/labels", tags=["labels"])

Labels = Annotated[LabelRepository, Depends(get_label_repository)]


@router.get("", response_model=list[LabelResponse])
async def list_labels(
    claims: CurrentClaims,
    labels: Labels,
    user_id: int | None = None,
    job_id: int | None = None,
    search: str | None = None,
    sort: SortKey | None = None,
):
    """List labels, optionally those owned by a user or attached to a job."""
    return labels.list(user_id=user_id, job_id=job_id, search=search, sort=sort)


@router.post("", response_model=LabelResponse, status_code=status.HTTP_201_CREATED)
async def create_label(label_data: LabelCreate, claims: CurrentClaims, labels: Labels):
    """Create a label owned by the caller, or a shared one (admins only)."""
    if label_data.shared and not claims.is_admin:
        raise Unauthorized("Only admins may create shared labels")

    label_id = labels.create(
        name=label_data.name,
        color=label_data.color,
        user_id=None if label_data.shared else claims.user_id,
    )
    return labels.get_by_id(label_id)


@router.get("/{label_id}", response_model=LabelResponse)
async def get_label(label_id: int, claims: CurrentClaims, labels: Labels):
    """Get a specific label."""
    return labels.get_by_id(label_id)


@router.put("/{label_id}", response_model=LabelResponse)
async def update_label(
    label_id: int,
    label_data: LabelUpdate,
    claims: CurrentClaims,
    labels: Labels,
):
    """Update a label. Shared labels can only be edited by admins."""
    label = labels.get_by_id(label_id)
    ensure_owner(claims, label.user_id, f"label {label_id}")

    values = label_data.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise NotModified("No fields to update")

    labels.update(label_id, values, owner_scope(claims))
    return labels.get_by_id(label_id)


@router.delete("/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_label(
    label_id: int,
    claims: CurrentClaims,
    cascade: Annotated[CascadeOrchestrator, Depends(get_cascade_orchestrator)],
):
    """Delete a label and remove it from every job. The jobs are kept."""
    cascade.delete_label(label_id, owner_scope(claims))
