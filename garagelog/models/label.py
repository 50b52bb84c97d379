"""Label model."""

from sqlalchemy import Column, Integer, String

from garagelog.database import Base
from garagelog.models.mixins import TimestampMixin


class Label(Base, TimestampMixin):
    """Label that can be attached to jobs. A NULL user_id marks a shared label."""

    __tablename__ = "labels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    color = Column(String(20), nullable=True)
    user_id = Column(Integer, nullable=True, index=True)
