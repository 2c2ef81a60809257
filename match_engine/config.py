"""Engine settings loaded from the environment.

Values can be provided via a .env file (loaded with python-dotenv) or real
environment variables. Malformed values fall back to the defaults below.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from match_engine.matching.types import MatchWeights

logger = logging.getLogger(__name__)

DEFAULT_SKILL_THRESHOLD = 0.75
DEFAULT_SKILL_CACHE_TTL_SECONDS = 3600
DEFAULT_BATCH_CHUNK_SIZE = 10
DEFAULT_MIN_TOTAL_SCORE = 0.3
DEFAULT_MAX_DISTANCE_KM = 50.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using %s", name, raw, default)
        return default


@dataclass(frozen=True)
class MatchSettings:
    """Tunables for a MatchEngine instance."""

    skill_threshold: float = DEFAULT_SKILL_THRESHOLD
    skill_cache_ttl_seconds: int = DEFAULT_SKILL_CACHE_TTL_SECONDS
    batch_chunk_size: int = DEFAULT_BATCH_CHUNK_SIZE
    # None means "same as batch_chunk_size"
    batch_max_concurrency: int | None = None
    min_total_score: float = DEFAULT_MIN_TOTAL_SCORE
    default_max_distance_km: float = DEFAULT_MAX_DISTANCE_KM
    default_weights: MatchWeights = field(default_factory=MatchWeights)

    @property
    def max_concurrency(self) -> int:
        return max(1, self.batch_max_concurrency or self.batch_chunk_size)


def load_match_settings() -> MatchSettings:
    """Build MatchSettings from MATCH_* environment variables."""
    load_dotenv()

    chunk_size = max(1, _env_int("MATCH_BATCH_CHUNK_SIZE", DEFAULT_BATCH_CHUNK_SIZE))
    max_concurrency = _env_int("MATCH_BATCH_MAX_CONCURRENCY", 0) or None

    defaults = MatchWeights()
    weights = MatchWeights(
        skills=_env_float("MATCH_WEIGHT_SKILLS", defaults.skills),
        location=_env_float("MATCH_WEIGHT_LOCATION", defaults.location),
        experience=_env_float("MATCH_WEIGHT_EXPERIENCE", defaults.experience),
        salary=_env_float("MATCH_WEIGHT_SALARY", defaults.salary),
    )

    return MatchSettings(
        skill_threshold=_env_float("MATCH_SKILL_THRESHOLD", DEFAULT_SKILL_THRESHOLD),
        skill_cache_ttl_seconds=_env_int(
            "MATCH_SKILL_CACHE_TTL_SECONDS", DEFAULT_SKILL_CACHE_TTL_SECONDS
        ),
        batch_chunk_size=chunk_size,
        batch_max_concurrency=max_concurrency,
        min_total_score=_env_float("MATCH_MIN_TOTAL_SCORE", DEFAULT_MIN_TOTAL_SCORE),
        default_max_distance_km=_env_float(
            "MATCH_DEFAULT_MAX_DISTANCE_KM", DEFAULT_MAX_DISTANCE_KM
        ),
        default_weights=weights,
    )
