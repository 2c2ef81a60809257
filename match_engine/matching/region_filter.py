"""Geographic pre-filtering of candidate sets."""

from collections.abc import Iterable
from typing import Any

from match_engine.errors import InvalidInputError
from match_engine.matching.geometry import haversine_km
from match_engine.matching.types import (
    ExcludedCandidate,
    Location,
    RegionFilter,
    RegionFilterResult,
    RegionFilterStats,
)
from match_engine.models.enums import ExclusionReasonEnum


def _allowed(value: str | None, allow_list: tuple[str, ...]) -> bool:
    return bool(value) and value.lower() in {item.lower() for item in allow_list}


def _exclusion_reason(location: Location, region_filter: RegionFilter) -> ExclusionReasonEnum | None:
    """Return the first failing filter, in country -> region -> city -> distance -> timezone order."""
    if region_filter.countries and not _allowed(location.country, region_filter.countries):
        return ExclusionReasonEnum.COUNTRY
    if region_filter.regions and not _allowed(location.region, region_filter.regions):
        return ExclusionReasonEnum.REGION
    if region_filter.cities and not _allowed(location.city, region_filter.cities):
        return ExclusionReasonEnum.CITY

    if region_filter.max_distance_km and region_filter.center_point:
        if location.coordinates is None:
            return ExclusionReasonEnum.NO_COORDINATES
        distance = haversine_km(region_filter.center_point, location.coordinates)
        if distance > region_filter.max_distance_km:
            return ExclusionReasonEnum.DISTANCE

    if region_filter.timezones and not _allowed(location.timezone, region_filter.timezones):
        return ExclusionReasonEnum.TIMEZONE
    return None


def _location_of(candidate: Any) -> Location:
    if not hasattr(candidate, "location"):
        raise InvalidInputError(f"Candidate {candidate!r:.80} has no location attribute")
    location = candidate.location
    if location is None:
        return Location()
    if not isinstance(location, Location):
        raise InvalidInputError(
            f"Candidate location must be a Location, got {type(location).__name__}"
        )
    return location


def filter_by_region(candidates: Iterable[Any], region_filter: RegionFilter) -> RegionFilterResult:
    """Split candidates into those passing the region filter and those excluded.

    Candidates are any objects with a ``location`` attribute holding a
    Location (CandidateRecord in practice); anything else raises
    InvalidInputError. Each excluded candidate carries the reason it
    failed; stats count candidates per reason.
    """
    filtered: list[Any] = []
    excluded: list[ExcludedCandidate] = []
    reason_counts: dict[str, int] = {}

    for candidate in candidates:
        location = _location_of(candidate)
        reason = _exclusion_reason(location, region_filter)
        if reason is None:
            filtered.append(candidate)
            continue
        excluded.append(ExcludedCandidate(candidate=candidate, reasons=(reason,)))
        reason_counts[reason.value] = reason_counts.get(reason.value, 0) + 1

    stats = RegionFilterStats(
        total_candidates=len(filtered) + len(excluded),
        filtered_count=len(filtered),
        excluded_count=len(excluded),
        filter_reasons=reason_counts,
    )
    return RegionFilterResult(filtered=tuple(filtered), excluded=tuple(excluded), stats=stats)
