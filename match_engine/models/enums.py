"""Enums for the matching schema and engine."""

import enum


class WorkingHoursEnum(str, enum.Enum):
    """Working-hours arrangement offered or wanted."""

    FLEXIBLE = "flexible"
    FIXED = "fixed"
    SHIFT = "shift"


class RemotePreferenceEnum(str, enum.Enum):
    """Remote work preference."""

    REMOTE = "remote"
    HYBRID = "hybrid"
    ONSITE = "onsite"


class ExclusionReasonEnum(str, enum.Enum):
    """Why the region filter excluded a candidate."""

    COUNTRY = "country"
    REGION = "region"
    CITY = "city"
    DISTANCE = "distance"
    NO_COORDINATES = "no_coordinates"
    TIMEZONE = "timezone"
