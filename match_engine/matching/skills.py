"""Semantic skill matching over embedding vectors, with result caching."""

import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from match_engine.errors import InvalidInputError
from match_engine.matching.geometry import cosine_similarity
from match_engine.matching.types import SkillMatch, SkillMatchResult

if TYPE_CHECKING:
    from match_engine.resources.cache import CacheResource
    from match_engine.resources.embeddings import EmbeddingResource

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.75
DEFAULT_CACHE_TTL_SECONDS = 3600
CACHE_KEY_PREFIX = "skill_match"


def skill_cache_key(
    candidate_skills: Sequence[str], job_skills: Sequence[str], threshold: float
) -> str:
    """Key from the sorted skill lists, so reordered inputs share an entry.

    The lists are JSON-encoded, so skill names containing separators cannot
    make two different inputs collide.
    """
    candidate_part = json.dumps(sorted(candidate_skills), separators=(",", ":"))
    job_part = json.dumps(sorted(job_skills), separators=(",", ":"))
    return f"{CACHE_KEY_PREFIX}:{candidate_part}:{job_part}:{threshold}"


def best_matches(
    candidate_skills: Sequence[str],
    job_skills: Sequence[str],
    vectors: dict[str, Sequence[float]],
    threshold: float = DEFAULT_THRESHOLD,
) -> SkillMatchResult:
    """Pick, for every job skill, the most similar candidate skill above threshold.

    A later candidate skill only replaces the current best when strictly more
    similar, so among equal similarities the first one listed wins.
    """
    if not job_skills:
        return SkillMatchResult(score=0.0, matches=())

    matches: list[SkillMatch] = []
    total = 0.0
    for job_skill in job_skills:
        job_vector = vectors[job_skill]
        best: SkillMatch | None = None
        for candidate_skill in candidate_skills:
            similarity = cosine_similarity(job_vector, vectors[candidate_skill])
            if similarity > threshold and (best is None or similarity > best.score):
                best = SkillMatch(skill=job_skill, score=similarity, candidate_skill=candidate_skill)
        if best is not None:
            matches.append(best)
            total += best.score

    return SkillMatchResult(score=total / len(job_skills), matches=tuple(matches))


async def _cache_get(cache: "CacheResource", key: str) -> SkillMatchResult | None:
    try:
        raw = await cache.get(key)
    except Exception as exc:
        logger.warning("Skill cache read failed for %s: %s", key, exc)
        return None
    if raw is None:
        return None
    try:
        return SkillMatchResult.from_dict(json.loads(raw))
    except (ValueError, KeyError, TypeError) as exc:
        logger.warning("Discarding unreadable skill cache entry %s: %s", key, exc)
        return None


async def _cache_set(cache: "CacheResource", key: str, result: SkillMatchResult, ttl: int) -> None:
    try:
        await cache.set(key, json.dumps(result.to_dict()).encode(), ttl)
    except Exception as exc:
        logger.warning("Skill cache write failed for %s: %s", key, exc)


async def match_by_skills(
    candidate_skills: Sequence[str],
    job_skills: Sequence[str],
    embeddings: "EmbeddingResource",
    cache: "CacheResource | None" = None,
    threshold: float = DEFAULT_THRESHOLD,
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
) -> SkillMatchResult:
    """Semantic match of a candidate's skills against a job's required skills.

    Args:
        candidate_skills: Candidate skill names, in profile order
        job_skills: Job-required skill names
        embeddings: Embedding provider used to vectorize every distinct skill
        cache: Optional cache; failures degrade to recomputing
        threshold: Minimum (exclusive) cosine similarity for a skill to count
        cache_ttl_seconds: Lifetime of the cached result

    Returns:
        SkillMatchResult with the mean best similarity over all job skills
        and one SkillMatch per job skill that found a partner.
    """
    key = skill_cache_key(candidate_skills, job_skills, threshold)
    if cache is not None:
        cached = await _cache_get(cache, key)
        if cached is not None:
            logger.debug("Skill cache hit: %s", key)
            return cached
        logger.debug("Skill cache miss: %s", key)

    if not job_skills:
        result = SkillMatchResult(score=0.0, matches=())
    else:
        distinct = list(dict.fromkeys([*candidate_skills, *job_skills]))
        vectors = await embeddings.embed_batch(distinct)
        if len(vectors) != len(distinct):
            raise InvalidInputError(
                f"Embedding provider returned {len(vectors)} vectors for {len(distinct)} texts"
            )
        result = best_matches(
            candidate_skills, job_skills, dict(zip(distinct, vectors)), threshold
        )

    if cache is not None:
        await _cache_set(cache, key, result, cache_ttl_seconds)
    return result
