"""Range-based scorers: years of experience and salary."""

import logging
import math

from match_engine.matching.types import Range, RangeMatchResult

logger = logging.getLogger(__name__)

# Partial credit slopes: score lost per full "min" of shortfall / per full "max" of excess
SHORTFALL_PENALTY = 0.5
EXCESS_PENALTY = 0.3
MAX_SHORTFALL_YEARS = 1.0
MAX_EXCESS_YEARS = 2.0


def clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _ordered(bounds: Range, label: str) -> Range:
    """Swap inverted bounds instead of failing."""
    if bounds.min is not None and bounds.max is not None and bounds.min > bounds.max:
        logger.warning("Swapping inverted %s range (%s > %s)", label, bounds.min, bounds.max)
        return Range(min=bounds.max, max=bounds.min)
    return bounds


def match_by_experience(candidate_years: float, requirement: Range) -> RangeMatchResult:
    """Score years of experience against a required range.

    Inside the range scores 1.0. Below the floor loses up to 0.5 (match only
    within one year); above the ceiling loses up to 0.3 (match only within two).
    """
    if requirement.is_unbounded:
        return RangeMatchResult(score=1.0, match=True)

    if candidate_years < 0:
        logger.warning("Negative years of experience (%s) clamped to 0", candidate_years)
        candidate_years = 0.0

    requirement = _ordered(requirement, "experience")
    low = requirement.effective_min
    high = requirement.effective_max

    if low <= candidate_years <= high:
        return RangeMatchResult(score=1.0, match=True)

    if candidate_years < low:
        gap = low - candidate_years
        score = max(0.0, 1 - (gap / low) * SHORTFALL_PENALTY)
        return RangeMatchResult(score=score, match=gap <= MAX_SHORTFALL_YEARS)

    excess = candidate_years - high
    if high == 0:
        return RangeMatchResult(score=0.0, match=False)
    score = max(0.0, 1 - (excess / high) * EXCESS_PENALTY)
    return RangeMatchResult(score=score, match=excess <= MAX_EXCESS_YEARS)


def match_by_salary(candidate_expectation: Range, job_offer: Range) -> RangeMatchResult:
    """Score the overlap between the candidate's expectation and the job's offer.

    The overlap width is divided by the narrower of the two ranges. Either side
    without bounds expresses no constraint and scores 1.0.
    """
    if candidate_expectation.is_unbounded or job_offer.is_unbounded:
        return RangeMatchResult(score=1.0, match=True)

    candidate_expectation = _ordered(candidate_expectation, "candidate salary")
    job_offer = _ordered(job_offer, "job salary")

    candidate_min = candidate_expectation.effective_min
    candidate_max = candidate_expectation.effective_max
    job_min = job_offer.effective_min
    job_max = job_offer.effective_max

    overlap_min = max(candidate_min, job_min)
    overlap_max = min(candidate_max, job_max)
    if overlap_min > overlap_max:
        return RangeMatchResult(score=0.0, match=False)

    overlap_range = overlap_max - overlap_min
    narrowest = min(candidate_max - candidate_min, job_max - job_min)

    # Both sides open-ended upwards: the overlap is unbounded too
    if math.isinf(overlap_range):
        return RangeMatchResult(score=1.0, match=True)
    # A single-point range sitting inside the other one
    if narrowest == 0:
        return RangeMatchResult(score=1.0, match=True)

    return RangeMatchResult(score=clamp01(overlap_range / narrowest), match=True)
