"""Match orchestration: one candidate/job pair, and batches of pairs.

MatchEngine holds no mutable state of its own; it only carries the injected
collaborators (record store, embeddings, cache) and its settings.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from match_engine.config import MatchSettings
from match_engine.errors import CollaboratorUnavailableError, InvalidInputError, NotFoundError
from match_engine.matching.location import match_by_location
from match_engine.matching.scoring import match_by_experience, match_by_salary
from match_engine.matching.skills import match_by_skills
from match_engine.matching.types import MatchResult, MatchWeights, SkillMatchResult

if TYPE_CHECKING:
    from match_engine.resources.cache import CacheResource
    from match_engine.resources.embeddings import EmbeddingResource
    from match_engine.resources.record_store import RecordStoreResource

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str, str, Exception], None]


@dataclass(frozen=True)
class PairingFailure:
    """A candidate/job pairing dropped from a batch."""

    candidate_id: str
    job_id: str
    kind: str
    message: str


@dataclass(frozen=True)
class BatchMatchReport:
    matches: list[MatchResult] = field(default_factory=list)
    failures: list[PairingFailure] = field(default_factory=list)
    processed: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "matches": [m.to_dict() for m in self.matches],
            "total": len(self.matches),
            "processed": self.processed,
            "failures": [
                {
                    "candidateId": f.candidate_id,
                    "jobId": f.job_id,
                    "kind": f.kind,
                    "message": f.message,
                }
                for f in self.failures
            ],
        }


def chunked(items: Sequence[str], size: int) -> list[list[str]]:
    """Split ``items`` into consecutive lists of at most ``size`` elements."""
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def _failure_kind(exc: Exception) -> str:
    if isinstance(exc, NotFoundError):
        return "not_found"
    if isinstance(exc, CollaboratorUnavailableError):
        return "collaborator_unavailable"
    if isinstance(exc, InvalidInputError):
        return "invalid_input"
    return "error"


class MatchEngine:
    """Weighted candidate/job matching over the record store and embeddings."""

    def __init__(
        self,
        record_store: "RecordStoreResource",
        embeddings: "EmbeddingResource",
        cache: "CacheResource | None" = None,
        settings: MatchSettings | None = None,
    ):
        self.record_store = record_store
        self.embeddings = embeddings
        self.cache = cache
        self.settings = settings or MatchSettings()

    async def match_by_skills(
        self,
        candidate_skills: Sequence[str],
        job_skills: Sequence[str],
        threshold: float | None = None,
    ) -> SkillMatchResult:
        return await match_by_skills(
            candidate_skills,
            job_skills,
            self.embeddings,
            cache=self.cache,
            threshold=self.settings.skill_threshold if threshold is None else threshold,
            cache_ttl_seconds=self.settings.skill_cache_ttl_seconds,
        )

    async def match_candidate_to_job(
        self,
        candidate_id: str,
        job_id: str,
        weights: MatchWeights | None = None,
    ) -> MatchResult:
        """Score one candidate against one job.

        Raises:
            NotFoundError: either record is missing
            CollaboratorUnavailableError: the store or the embedding provider failed
            InvalidInputError: embeddings of mismatched dimensions
        """
        weights = weights or self.settings.default_weights

        candidate, job = await asyncio.gather(
            self.record_store.get_candidate(candidate_id),
            self.record_store.get_job(job_id),
        )

        skills = await self.match_by_skills(candidate.skills, job.required_skills)
        location = match_by_location(
            candidate.location,
            job.location,
            default_max_distance_km=self.settings.default_max_distance_km,
        )
        experience = match_by_experience(candidate.years_experience, job.experience)
        salary = match_by_salary(candidate.salary_expectation, job.salary)

        total = (
            skills.score * weights.skills
            + location.score * weights.location
            + experience.score * weights.experience
            + salary.score * weights.salary
        )

        return MatchResult(
            candidate_id=candidate_id,
            job_id=job_id,
            total_score=total,
            skill_score=skills.score,
            location_score=location.score,
            experience_score=experience.score,
            salary_score=salary.score,
            matched_skills=skills.matches,
            location_match=location.match,
            experience_match=experience.match,
            salary_match=salary.match,
        )

    async def batch_match_report(
        self,
        candidate_ids: Sequence[str],
        job_ids: Sequence[str],
        min_score: float | None = None,
        limit: int | None = None,
        weights: MatchWeights | None = None,
        on_error: ErrorCallback | None = None,
    ) -> BatchMatchReport:
        """Match every candidate against every job, group by group.

        Ids are split into chunks of ``batch_chunk_size``; each candidate-chunk x
        job-chunk group runs to completion before the next one starts, with at
        most ``max_concurrency`` pairings in flight. Failed pairings are logged,
        passed to ``on_error`` and dropped; an ``on_error`` that raises is
        logged and does not abort the batch. Results scoring above ``min_score``
        are sorted by total score, ties in candidate-major / job-minor order.

        Cancelling the caller stops new groups; the running group drains first.
        """
        min_score = self.settings.min_total_score if min_score is None else min_score
        semaphore = asyncio.Semaphore(self.settings.max_concurrency)
        candidate_index = {cid: i for i, cid in reversed(list(enumerate(candidate_ids)))}
        job_index = {jid: i for i, jid in reversed(list(enumerate(job_ids)))}

        async def run_pair(candidate_id: str, job_id: str) -> MatchResult:
            async with semaphore:
                return await self.match_candidate_to_job(candidate_id, job_id, weights)

        logger.info(
            "Batch matching %d candidates x %d jobs (chunk size %d, concurrency %d)",
            len(candidate_ids),
            len(job_ids),
            self.settings.batch_chunk_size,
            self.settings.max_concurrency,
        )

        scored: list[tuple[int, int, MatchResult]] = []
        failures: list[PairingFailure] = []
        processed = 0

        for candidate_chunk in chunked(candidate_ids, self.settings.batch_chunk_size):
            for job_chunk in chunked(job_ids, self.settings.batch_chunk_size):
                pairs = [(cid, jid) for cid in candidate_chunk for jid in job_chunk]
                group = asyncio.gather(
                    *(run_pair(cid, jid) for cid, jid in pairs), return_exceptions=True
                )
                try:
                    outcomes = await asyncio.shield(group)
                except asyncio.CancelledError:
                    logger.info("Batch cancelled; draining %d in-flight pairings", len(pairs))
                    await asyncio.wait([group])
                    raise
                processed += len(pairs)

                for (cid, jid), outcome in zip(pairs, outcomes):
                    if isinstance(outcome, MatchResult):
                        scored.append((candidate_index[cid], job_index[jid], outcome))
                        continue
                    if not isinstance(outcome, Exception):
                        raise outcome
                    logger.warning("Dropping pairing %s/%s: %s", cid, jid, outcome)
                    failures.append(
                        PairingFailure(
                            candidate_id=cid,
                            job_id=jid,
                            kind=_failure_kind(outcome),
                            message=str(outcome),
                        )
                    )
                    if on_error is not None:
                        try:
                            on_error(cid, jid, outcome)
                        except Exception:
                            logger.exception("on_error callback failed for %s/%s", cid, jid)

        kept = [entry for entry in scored if entry[2].total_score > min_score]
        kept.sort(key=lambda entry: (-entry[2].total_score, entry[0], entry[1]))
        matches = [result for _, _, result in kept]
        if limit is not None:
            matches = matches[:limit]

        logger.info(
            "Batch matching done: %d pairings, %d matches above %.2f, %d failures",
            processed,
            len(matches),
            min_score,
            len(failures),
        )
        return BatchMatchReport(matches=matches, failures=failures, processed=processed)

    async def batch_match(
        self,
        candidate_ids: Sequence[str],
        job_ids: Sequence[str],
        min_score: float | None = None,
        limit: int | None = None,
        weights: MatchWeights | None = None,
        on_error: ErrorCallback | None = None,
    ) -> list[MatchResult]:
        """Ranked matches above the score floor; see batch_match_report."""
        report = await self.batch_match_report(
            candidate_ids,
            job_ids,
            min_score=min_score,
            limit=limit,
            weights=weights,
            on_error=on_error,
        )
        return report.matches
