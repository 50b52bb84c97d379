"""FastAPI dependencies for authentication, repositories and services."""

from typing import Annotated

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from garagelog.database import get_db
from garagelog.errors import Unauthenticated, Unauthorized
from garagelog.repositories import (
    AlertRepository,
    JobLabelRepository,
    JobRepository,
    LabelRepository,
    TaskRepository,
    UserRepository,
    VehicleRepository,
)
from garagelog.services.auth import Claims, SessionAuthority, SessionCookie, get_session_authority
from garagelog.services.cascade import CascadeOrchestrator

# The session cookie is accepted as well, so no auto 403 on a missing header
security = HTTPBearer(auto_error=False)


def get_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    authority: Annotated[SessionAuthority, Depends(get_session_authority)],
) -> str:
    """Bearer token from the Authorization header, falling back to the session cookie."""
    if credentials is not None:
        return credentials.credentials
    token = request.cookies.get(authority.cookie_name)
    if not token:
        raise Unauthenticated("Missing authentication token")
    return token


def get_current_claims(
    token: Annotated[str, Depends(get_token)],
    authority: Annotated[SessionAuthority, Depends(get_session_authority)],
) -> Claims:
    """Verified claims of the caller."""
    return authority.verify(token)


CurrentClaims = Annotated[Claims, Depends(get_current_claims)]
DbSession = Annotated[Session, Depends(get_db)]


def owner_scope(claims: Claims) -> int | None:
    """Owner id to scope writes with: None for admins, the caller otherwise."""
    return None if claims.is_admin else claims.user_id


def ensure_owner(claims: Claims, owner_id: int | None, what: str) -> None:
    """Raise Unauthorized unless the caller owns the resource or is admin."""
    if not claims.is_admin and owner_id != claims.user_id:
        raise Unauthorized(f"Not allowed to modify {what}")


def resolve_owner(claims: Claims, requested: int | None) -> int:
    """Owner for a new resource: the caller, or anyone when the caller is admin."""
    if requested is None or requested == claims.user_id:
        return claims.user_id
    if not claims.is_admin:
        raise Unauthorized("Only admins may create resources for other users")
    return requested


def apply_cookie(response: Response, cookie: SessionCookie) -> None:
    """Copy a session cookie envelope onto the response."""
    response.set_cookie(
        key=cookie.name,
        value=cookie.value,
        expires=cookie.expires,
        path=cookie.path,
        domain=cookie.domain,
        secure=cookie.secure,
        httponly=cookie.http_only,
        samesite=cookie.same_site,
    )


def get_user_repository(db: DbSession) -> UserRepository:
    return UserRepository(db)


def get_vehicle_repository(db: DbSession) -> VehicleRepository:
    return VehicleRepository(db)


def get_job_repository(db: DbSession) -> JobRepository:
    return JobRepository(db)


def get_task_repository(db: DbSession) -> TaskRepository:
    return TaskRepository(db)


def get_label_repository(db: DbSession) -> LabelRepository:
    return LabelRepository(db)


def get_job_label_repository(db: DbSession) -> JobLabelRepository:
    return JobLabelRepository(db)


def get_alert_repository(db: DbSession) -> AlertRepository:
    return AlertRepository(db)


def get_cascade_orchestrator(db: DbSession) -> CascadeOrchestrator:
    """Get cascade orchestrator bound to the request session."""
    return CascadeOrchestrator(db)
