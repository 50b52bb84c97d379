"""Alert API endpoints. Alerts are private to their user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from garagelog.api.dependencies import (
    CurrentClaims,
    ensure_owner,
    get_alert_repository,
    owner_scope,
    resolve_owner,
)
from garagelog.errors import NotModified
from garagelog.models.enums import AlertType, SortKey
from garagelog.repositories import AlertRepository
from garagelog.schemas.alert import AlertCreate, AlertResponse, AlertUpdate, ReadState

router = APIRouter(prefix="/alerts", tags=["alerts"])

Alerts = Annotated[AlertRepository, Depends(get_alert_repository)]


@router.get("", response_model=list[AlertResponse])
async def list_alerts(
    claims: CurrentClaims,
    alerts: Alerts,
    user_id: int | None = None,
    vehicle_id: int | None = None,
    job_id: int | None = None,
    task_id: int | None = None,
    alert_type: Annotated[AlertType | None, Query(alias="type")] = None,
    is_read: bool | None = None,
    is_due: bool = False,
    search: str | None = None,
    sort: SortKey | None = None,
):
    """List the caller's alerts. Admins may list anyone's via user_id."""
    if not claims.is_admin:
        user_id = claims.user_id
    return alerts.list(
        user_id=user_id,
        vehicle_id=vehicle_id,
        job_id=job_id,
        task_id=task_id,
        alert_type=alert_type,
        is_read=is_read,
        is_due=is_due,
        search=search,
        sort=sort,
    )


@router.post("", response_model=AlertResponse, status_code=status.HTTP_201_CREATED)
async def create_alert(alert_data: AlertCreate, claims: CurrentClaims, alerts: Alerts):
    """Create an alert."""
    values = alert_data.model_dump()
    values["user_id"] = resolve_owner(claims, alert_data.user_id)
    alert_id = alerts.create(**values)
    return alerts.get_by_id(alert_id)


@router.get("/{alert_id}", response_model=AlertResponse)
async def get_alert(alert_id: int, claims: CurrentClaims, alerts: Alerts):
    """Get a specific alert."""
    alert = alerts.get_by_id(alert_id)
    ensure_owner(claims, alert.user_id, f"alert {alert_id}")
    return alert


@router.put("/{alert_id}", response_model=AlertResponse)
async def update_alert(
    alert_id: int,
    alert_data: AlertUpdate,
    claims: CurrentClaims,
    alerts: Alerts,
):
    """Update an alert."""
    alert = alerts.get_by_id(alert_id)
    ensure_owner(claims, alert.user_id, f"alert {alert_id}")

    values = alert_data.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise NotModified("No fields to update")

    alerts.update(alert_id, values, owner_scope(claims))
    return alerts.get_by_id(alert_id)


@router.patch("/{alert_id}/read", response_model=AlertResponse)
async def mark_read(alert_id: int, read_state: ReadState, claims: CurrentClaims, alerts: Alerts):
    """Mark an alert read or unread."""
    alert = alerts.get_by_id(alert_id)
    ensure_owner(claims, alert.user_id, f"alert {alert_id}")
    alerts.set_read(alert_id, read_state.is_read, owner_scope(claims))
    return alerts.get_by_id(alert_id)


@router.delete("/{alert_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_alert(alert_id: int, claims: CurrentClaims, alerts: Alerts):
    """Delete an alert."""
    alert = alerts.get_by_id(alert_id)
    ensure_owner(claims, alert.user_id, f"alert {alert_id}")
    alerts.delete(alert_id, owner_scope(claims))
