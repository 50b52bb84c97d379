"""User model."""

from sqlalchemy import Boolean, Column, Integer, String, Text

from garagelog.database import Base
from garagelog.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    # NULL means the user logs in by username alone (see allow_passwordless_login)
    password_hash = Column(String(255), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)
