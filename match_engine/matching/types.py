"""Value types shared by the scorers, the region filter and the engine."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from match_engine.errors import InvalidInputError
from match_engine.models.enums import (
    ExclusionReasonEnum,
    RemotePreferenceEnum,
    WorkingHoursEnum,
)


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Location:
    """Location descriptor used for both candidates and jobs. All fields optional."""

    city: str | None = None
    region: str | None = None
    country: str | None = None
    remote: bool = False
    coordinates: GeoPoint | None = None
    timezone: str | None = None
    max_distance_km: float | None = None


@dataclass(frozen=True)
class Range:
    """Numeric range; a missing bound is unbounded in that direction."""

    min: float | None = None
    max: float | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.min is None and self.max is None

    @property
    def effective_min(self) -> float:
        return self.min if self.min is not None else 0.0

    @property
    def effective_max(self) -> float:
        return self.max if self.max is not None else float("inf")


@dataclass(frozen=True)
class AvailabilityProfile:
    start_date: date | None = None
    working_hours: WorkingHoursEnum | None = None
    remote_preference: RemotePreferenceEnum | None = None


@dataclass(frozen=True)
class MatchWeights:
    """Per-dimension weights, each in [0, 1].

    The total score is a plain weighted sum; weights are not normalized.
    """

    skills: float = 0.5
    location: float = 0.2
    experience: float = 0.2
    salary: float = 0.1

    def __post_init__(self):
        for name in ("skills", "location", "experience", "salary"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidInputError(f"weight {name}={value} outside [0, 1]")


@dataclass(frozen=True)
class SkillMatch:
    """Best candidate match for one job skill."""

    skill: str
    score: float
    candidate_skill: str | None = None


@dataclass(frozen=True)
class SkillMatchResult:
    score: float
    matches: tuple[SkillMatch, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "matches": [
                {"skill": m.skill, "score": m.score, "candidateSkill": m.candidate_skill}
                for m in self.matches
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SkillMatchResult":
        return cls(
            score=data["score"],
            matches=tuple(
                SkillMatch(
                    skill=m["skill"],
                    score=m["score"],
                    candidate_skill=m.get("candidateSkill"),
                )
                for m in data.get("matches", [])
            ),
        )


@dataclass(frozen=True)
class LocationMatchResult:
    score: float
    match: bool
    distance_km: float | None = None
    timezone_compatible: bool | None = None


@dataclass(frozen=True)
class RangeMatchResult:
    """Outcome of the experience and salary matchers."""

    score: float
    match: bool


@dataclass(frozen=True)
class AvailabilityMatchResult:
    score: float
    match: bool
    details: tuple[str, ...] = ()


@dataclass(frozen=True)
class MatchResult:
    """Weighted candidate/job match with its per-dimension breakdown."""

    candidate_id: str
    job_id: str
    total_score: float
    skill_score: float
    location_score: float
    experience_score: float
    salary_score: float
    matched_skills: tuple[SkillMatch, ...] = ()
    location_match: bool = False
    experience_match: bool = False
    salary_match: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidateId": self.candidate_id,
            "jobId": self.job_id,
            "totalScore": self.total_score,
            "skillScore": self.skill_score,
            "locationScore": self.location_score,
            "experienceScore": self.experience_score,
            "salaryScore": self.salary_score,
            "breakdown": {
                "matchedSkills": [{"skill": m.skill, "score": m.score} for m in self.matched_skills],
                "locationMatch": self.location_match,
                "experienceMatch": self.experience_match,
                "salaryMatch": self.salary_match,
            },
        }


@dataclass(frozen=True)
class RegionFilter:
    """Allow-lists and radius used to pre-filter candidates."""

    countries: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    cities: tuple[str, ...] = ()
    max_distance_km: float | None = None
    center_point: GeoPoint | None = None
    timezones: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExcludedCandidate:
    candidate: Any
    reasons: tuple[ExclusionReasonEnum, ...]


@dataclass(frozen=True)
class RegionFilterStats:
    total_candidates: int
    filtered_count: int
    excluded_count: int
    filter_reasons: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class RegionFilterResult:
    filtered: tuple[Any, ...]
    excluded: tuple[ExcludedCandidate, ...]
    stats: RegionFilterStats


@dataclass(frozen=True)
class CandidateRecord:
    """Fields of a candidate consumed by the engine."""

    id: str
    skills: tuple[str, ...] = ()
    location: Location = field(default_factory=Location)
    years_experience: float = 0.0
    salary_expectation: Range = field(default_factory=Range)
    availability: AvailabilityProfile | None = None


@dataclass(frozen=True)
class JobRecord:
    """Fields of a job opening consumed by the engine."""

    id: str
    required_skills: tuple[str, ...] = ()
    location: Location = field(default_factory=Location)
    experience: Range = field(default_factory=Range)
    salary: Range = field(default_factory=Range)
    availability: AvailabilityProfile | None = None
