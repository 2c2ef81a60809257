from .availability import match_availability
from .geometry import cosine_similarity, haversine_km
from .location import match_by_location, timezones_compatible
from .region_filter import filter_by_region
from .scoring import match_by_experience, match_by_salary
from .skills import match_by_skills
from .types import (
    AvailabilityProfile,
    CandidateRecord,
    GeoPoint,
    JobRecord,
    Location,
    MatchResult,
    MatchWeights,
    Range,
    RegionFilter,
    SkillMatch,
)

__all__ = [
    "cosine_similarity",
    "haversine_km",
    "match_by_skills",
    "match_by_location",
    "timezones_compatible",
    "match_by_experience",
    "match_by_salary",
    "match_availability",
    "filter_by_region",
    "AvailabilityProfile",
    "CandidateRecord",
    "GeoPoint",
    "JobRecord",
    "Location",
    "MatchResult",
    "MatchWeights",
    "Range",
    "RegionFilter",
    "SkillMatch",
]
