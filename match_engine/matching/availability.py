"""Availability matching: start date, working hours and remote preference."""

import math
from datetime import date, datetime

from match_engine.matching.types import AvailabilityMatchResult, AvailabilityProfile
from match_engine.models.enums import RemotePreferenceEnum, WorkingHoursEnum

MATCH_THRESHOLD = 0.4
NEUTRAL_SCORE = 0.5


def _days_between(a: date, b: date) -> float:
    if isinstance(a, datetime) or isinstance(b, datetime):
        a_dt = a if isinstance(a, datetime) else datetime.combine(a, datetime.min.time())
        b_dt = b if isinstance(b, datetime) else datetime.combine(b, datetime.min.time())
        if (a_dt.tzinfo is None) != (b_dt.tzinfo is None):
            a_dt = a_dt.replace(tzinfo=None)
            b_dt = b_dt.replace(tzinfo=None)
        return abs((a_dt - b_dt).total_seconds()) / 86400
    return abs((a - b).days)


def _start_date_factor(candidate_start: date, job_start: date) -> tuple[float, str]:
    days = _days_between(candidate_start, job_start)
    if days <= 7:
        return 1.0, "Perfect start date alignment"
    if days <= 30:
        return 0.8, "Good start date compatibility"
    if days <= 90:
        return 0.5, "Acceptable start date difference"
    return 0.2, "Significant start date gap"


def _working_hours_factor(
    candidate_hours: WorkingHoursEnum, job_hours: WorkingHoursEnum
) -> tuple[float, str]:
    if candidate_hours == job_hours:
        return 1.0, f"Perfect working hours match: {WorkingHoursEnum(candidate_hours).value}"
    if candidate_hours == WorkingHoursEnum.FLEXIBLE:
        return 0.9, "Candidate offers flexible hours"
    if job_hours == WorkingHoursEnum.FLEXIBLE:
        return 0.8, "Job offers flexible hours"
    return 0.3, "Working hours mismatch"


def _remote_factor(
    candidate_pref: RemotePreferenceEnum, job_pref: RemotePreferenceEnum
) -> tuple[float, str]:
    if candidate_pref == job_pref:
        return 1.0, f"Perfect remote preference match: {RemotePreferenceEnum(candidate_pref).value}"
    if RemotePreferenceEnum.HYBRID in (candidate_pref, job_pref):
        return 0.8, "Good remote work compatibility"
    return 0.2, "Remote preference mismatch"


def _round_half_up(value: float, digits: int = 2) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def match_availability(
    candidate: AvailabilityProfile | None,
    job: AvailabilityProfile | None,
) -> AvailabilityMatchResult:
    """Average the availability factors that both sides specify.

    Factors missing on either side are skipped, not penalized. With no
    profile, or no shared factor, the result is a neutral 0.5.
    """
    if candidate is None or job is None:
        return AvailabilityMatchResult(
            score=NEUTRAL_SCORE, match=True, details=("No availability requirements specified",)
        )

    factors: list[float] = []
    details: list[str] = []

    if candidate.start_date and job.start_date:
        score, detail = _start_date_factor(candidate.start_date, job.start_date)
        factors.append(score)
        details.append(detail)

    if candidate.working_hours and job.working_hours:
        score, detail = _working_hours_factor(candidate.working_hours, job.working_hours)
        factors.append(score)
        details.append(detail)

    if candidate.remote_preference and job.remote_preference:
        score, detail = _remote_factor(candidate.remote_preference, job.remote_preference)
        factors.append(score)
        details.append(detail)

    final = sum(factors) / len(factors) if factors else NEUTRAL_SCORE
    return AvailabilityMatchResult(
        score=_round_half_up(final),
        match=final >= MATCH_THRESHOLD,
        details=tuple(details),
    )
