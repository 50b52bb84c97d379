"""User registration and password management."""

import logging

from sqlalchemy.orm import Session

from garagelog.errors import Unauthorized, ValidationFailure
from garagelog.models.user import User
from garagelog.repositories.users import UserRepository
from garagelog.services.auth import Claims, get_password_hash, verify_password

logger = logging.getLogger(__name__)


def register_user(
    db: Session,
    username: str,
    password: str | None = None,
    email: str | None = None,
    description: str | None = None,
) -> User:
    """Create a user. The first user in a system without admins becomes admin.

    A user created without a password logs in by username alone.
    """
    users = UserRepository(db)
    if users.find_by_username(username) is not None:
        raise ValidationFailure(f"Username {username} is already taken")

    is_admin = users.count_admins() == 0
    user_id = users.create(
        username=username,
        email=email,
        description=description,
        password_hash=get_password_hash(password) if password else None,
        is_admin=is_admin,
    )
    if is_admin:
        logger.info(f"No admin present; {username} registered as admin")
    return users.get_by_id(user_id)


def ensure_username_available(db: Session, user_id: int, username: str) -> None:
    """Raise ValidationFailure if another user already has this username."""
    existing = UserRepository(db).find_by_username(username)
    if existing is not None and existing.id != user_id:
        raise ValidationFailure(f"Username {username} is already taken")


def change_password(
    db: Session,
    claims: Claims,
    username: str,
    current_password: str | None,
    new_password: str | None,
) -> None:
    """Set or clear a user's password.

    Admins may change anyone's password without the current one. Everyone
    else may only change their own and must supply the current password when
    one is set. An empty new password makes the account passwordless.
    """
    users = UserRepository(db)
    user = users.get_by_username(username)

    if not claims.is_admin:
        if user.id != claims.user_id:
            raise Unauthorized("Cannot change another user's password")
        if user.has_password and not verify_password(current_password or "", user.password_hash):
            raise Unauthorized("Current password is incorrect")

    users.set_password(username, get_password_hash(new_password) if new_password else None)
    logger.info(f"Password for {username} changed by {claims.username}")
