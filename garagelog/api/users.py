"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from garagelog.api.dependencies import (
    CurrentClaims,
    DbSession,
    ensure_owner,
    get_user_repository,
    owner_scope,
)
from garagelog.errors import NotModified, Unauthorized
from garagelog.models.enums import SortKey
from garagelog.repositories import UserRepository
from garagelog.schemas.auth import PasswordChange
from garagelog.schemas.user import UserCreate, UserResponse, UserUpdate
from garagelog.services.users import change_password, ensure_username_available, register_user

router = APIRouter(prefix="/users", tags=["users"])

Users = Annotated[UserRepository, Depends(get_user_repository)]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(user_data: UserCreate, db: DbSession):
    """Register a new user. The first user becomes admin."""
    return register_user(
        db,
        username=user_data.username,
        password=user_data.password,
        email=user_data.email,
        description=user_data.description,
    )


@router.get("", response_model=list[UserResponse])
async def list_users(
    claims: CurrentClaims,
    users: Users,
    is_admin: bool | None = None,
    vehicle_id: int | None = None,
    job_id: int | None = None,
    search: str | None = None,
    sort: SortKey | None = None,
):
    """List users, optionally the owner of a vehicle or job."""
    return users.list(
        is_admin=is_admin, vehicle_id=vehicle_id, job_id=job_id, search=search, sort=sort
    )


@router.post("/password", status_code=status.HTTP_204_NO_CONTENT)
async def update_password(passwords: PasswordChange, claims: CurrentClaims, db: DbSession):
    """Change a password. Non-admins must give their current password."""
    change_password(
        db, claims, passwords.username, passwords.current_password, passwords.new_password
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{username}", response_model=UserResponse)
async def get_user(username: str, claims: CurrentClaims, users: Users):
    """Get a user by username."""
    return users.get_by_username(username)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    claims: CurrentClaims,
    users: Users,
    db: DbSession,
):
    """Update a user's profile (self or admin)."""
    users.get_by_id(user_id)
    ensure_owner(claims, user_id, f"user {user_id}")

    values = user_data.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise NotModified("No fields to update")
    if "username" in values:
        ensure_username_available(db, user_id, values["username"])

    users.update(user_id, values, owner_scope(claims))
    return users.get_by_id(user_id)


@router.delete("/{username}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(username: str, claims: CurrentClaims, users: Users):
    """Delete a user (self or admin). Their vehicles and jobs are kept."""
    user = users.get_by_username(username)
    if not claims.is_admin and user.id != claims.user_id:
        raise Unauthorized(f"Not allowed to delete user {username}")
    users.delete_by_username(username)
