"""Enums for model fields and list filters."""

from enum import Enum


class AlertType(str, Enum):
    """Kinds of alert."""

    NOTIFICATION = "notification"
    REMINDER = "reminder"


class TimeIntervalUnit(str, Enum):
    """Units for time-based job repeat intervals."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class SortKey(str, Enum):
    """Sort keys accepted by list endpoints."""

    AZ = "az"
    ZA = "za"
    OLDEST = "oldest"
    NEWEST = "newest"
    LAST_UPDATED = "last_updated"
    COMPLETED = "completed"
