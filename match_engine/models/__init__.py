"""SQLAlchemy models for the matching database."""

from match_engine.models.base import Base
from match_engine.models.enums import (
    ExclusionReasonEnum,
    RemotePreferenceEnum,
    WorkingHoursEnum,
)
from match_engine.models.candidates import Candidate
from match_engine.models.jobs import Job
from match_engine.models.cache import CacheEntry

__all__ = [
    # Base
    "Base",
    # Enums
    "ExclusionReasonEnum",
    "RemotePreferenceEnum",
    "WorkingHoursEnum",
    # Records
    "Candidate",
    "Job",
    # Cache
    "CacheEntry",
]
