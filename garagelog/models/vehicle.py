"""Vehicle model."""

from sqlalchemy import Boolean, Column, Integer, String, Text

from garagelog.database import Base
from garagelog.models.mixins import TimestampMixin


class Vehicle(Base, TimestampMixin):
    """A vehicle owned by a user; jobs are tracked against it."""

    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=True)  # car, truck, motorcycle, ...
    is_metric = Column(Boolean, default=False, nullable=False)
    vin = Column(String(17), nullable=True)
    year = Column(Integer, nullable=True)
    make = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    trim = Column(String(255), nullable=True)
    odometer = Column(Integer, nullable=True)
    user_id = Column(Integer, nullable=False, index=True)
