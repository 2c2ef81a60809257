"""Dagster job for batch matching.

OPS JOBS:
- batch_matching: Score a set of candidates against a set of jobs and log the ranking

USAGE:
Launch batch_matching from the Launchpad with run config, e.g.

    ops:
      run_batch_match:
        config:
          candidate_ids: ["c-1", "c-2"]
          job_ids: ["j-1"]
          limit: 100
"""

import asyncio
from typing import Any

from dagster import Config, OpExecutionContext, job, op
from pydantic import Field

from match_engine.config import load_match_settings
from match_engine.engine import MatchEngine
from match_engine.matching.types import MatchWeights
from match_engine.resources.cache import CacheResource
from match_engine.resources.embeddings import EmbeddingResource
from match_engine.resources.record_store import RecordStoreResource


class BatchMatchConfig(Config):
    """Run config for run_batch_match."""

    candidate_ids: list[str]
    job_ids: list[str]
    min_score: float | None = Field(
        default=None, description="Exclusive score floor; defaults to MATCH_MIN_TOTAL_SCORE"
    )
    limit: int | None = Field(default=None, description="Keep at most this many matches")
    skills_weight: float | None = None
    location_weight: float | None = None
    experience_weight: float | None = None
    salary_weight: float | None = None

    def weights(self, defaults: MatchWeights) -> MatchWeights:
        return MatchWeights(
            skills=defaults.skills if self.skills_weight is None else self.skills_weight,
            location=defaults.location if self.location_weight is None else self.location_weight,
            experience=(
                defaults.experience if self.experience_weight is None else self.experience_weight
            ),
            salary=defaults.salary if self.salary_weight is None else self.salary_weight,
        )


@op(
    tags={"dagster/concurrency_key": "embeddings_api"},
    description="Match candidates against jobs and return the ranked results",
)
def run_batch_match(
    context: OpExecutionContext,
    config: BatchMatchConfig,
    record_store: RecordStoreResource,
    embeddings: EmbeddingResource,
    cache: CacheResource,
) -> dict[str, Any]:
    """Run MatchEngine.batch_match_report over the configured ids."""
    settings = load_match_settings()
    engine = MatchEngine(
        record_store=record_store, embeddings=embeddings, cache=cache, settings=settings
    )

    report = asyncio.run(
        engine.batch_match_report(
            config.candidate_ids,
            config.job_ids,
            min_score=config.min_score,
            limit=config.limit,
            weights=config.weights(settings.default_weights),
        )
    )

    context.log.info(
        f"Processed {report.processed} pairings: {len(report.matches)} matches, "
        f"{len(report.failures)} failed"
    )
    for failure in report.failures:
        context.log.warning(
            f"Dropped {failure.candidate_id}/{failure.job_id} ({failure.kind}): {failure.message}"
        )
    for match in report.matches[:10]:
        context.log.info(
            f"{match.candidate_id} -> {match.job_id}: {match.total_score:.3f} "
            f"(skills {match.skill_score:.2f}, location {match.location_score:.2f}, "
            f"experience {match.experience_score:.2f}, salary {match.salary_score:.2f})"
        )
    return report.to_dict()


@job(
    name="batch_matching",
    description="Score candidates against jobs with the weighted matching engine",
)
def batch_matching_job():
    run_batch_match()
