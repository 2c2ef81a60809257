"""Location matching: remote flag, distance radius, then city/region/country."""

from match_engine.matching.geometry import haversine_km
from match_engine.matching.types import Location, LocationMatchResult

DEFAULT_MAX_DISTANCE_KM = 50.0

CITY_SCORE = 1.0
REGION_SCORE = 0.8
COUNTRY_SCORE = 0.6

TIMEZONE_GROUPS: dict[str, frozenset[str]] = {
    "UTC": frozenset({"UTC", "GMT"}),
    "EST": frozenset({"EST", "EDT", "America/New_York"}),
    "PST": frozenset({"PST", "PDT", "America/Los_Angeles"}),
    "CET": frozenset({"CET", "CEST", "Europe/Berlin"}),
    "JST": frozenset({"JST", "Asia/Tokyo"}),
    "IST": frozenset({"IST", "Asia/Kolkata"}),
}


def timezones_compatible(candidate_tz: str | None, job_tz: str | None) -> bool:
    """True when both zones are equal or share a group; missing zones are compatible."""
    if not candidate_tz or not job_tz:
        return True
    if candidate_tz == job_tz:
        return True
    return any(candidate_tz in zones and job_tz in zones for zones in TIMEZONE_GROUPS.values())


def _same(a: str | None, b: str | None) -> bool:
    return bool(a) and bool(b) and a.lower() == b.lower()


def match_by_location(
    candidate: Location,
    job: Location,
    default_max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
) -> LocationMatchResult:
    """Score a candidate location against a job location.

    Rules, first applicable wins:
    1. Either side remote -> 1.0
    2. Both have coordinates and distance <= job radius -> linear 1.0..0.5
    3. Same city -> 1.0, same region -> 0.8, same country -> 0.6
    4. Otherwise -> 0.0 and no match

    Timezone compatibility is reported on every path.
    """
    tz_ok = timezones_compatible(candidate.timezone, job.timezone)

    if candidate.remote or job.remote:
        return LocationMatchResult(score=1.0, match=True, timezone_compatible=tz_ok)

    distance = None
    if candidate.coordinates and job.coordinates:
        distance = haversine_km(candidate.coordinates, job.coordinates)
        max_distance = job.max_distance_km or default_max_distance_km
        if distance <= max_distance:
            score = max(0.5, 1 - (distance / max_distance) * 0.5)
            return LocationMatchResult(
                score=score, match=True, distance_km=distance, timezone_compatible=tz_ok
            )

    for a, b, score in (
        (candidate.city, job.city, CITY_SCORE),
        (candidate.region, job.region, REGION_SCORE),
        (candidate.country, job.country, COUNTRY_SCORE),
    ):
        if _same(a, b):
            return LocationMatchResult(
                score=score, match=True, distance_km=distance, timezone_compatible=tz_ok
            )

    return LocationMatchResult(
        score=0.0, match=False, distance_km=distance, timezone_compatible=tz_ok
    )
