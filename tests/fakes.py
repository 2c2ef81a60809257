"""In-memory collaborators for engine tests."""

import asyncio

from pydantic import PrivateAttr

from match_engine.errors import NotFoundError
from match_engine.matching.types import CandidateRecord, JobRecord
from match_engine.resources.cache import CacheResource
from match_engine.resources.embeddings import EmbeddingResource

# Hand-picked 4-d unit vectors so cosine similarities are known exactly
SKILL_VECTORS = {
    "Python": [1.0, 0.0, 0.0, 0.0],
    "python": [1.0, 0.0, 0.0, 0.0],
    "JavaScript": [0.0, 1.0, 0.0, 0.0],
    "TypeScript": [0.0, 0.8, 0.6, 0.0],
    "Go": [0.0, 0.0, 0.0, 1.0],
}


class KeyedEmbeddingResource(EmbeddingResource):
    """Looks skills up in SKILL_VECTORS; unknown text maps to the zero vector.

    Records every embed_batch call and the peak number of concurrent calls.
    """

    delay: float = 0.0

    _stats: dict = PrivateAttr(
        default_factory=lambda: {"calls": [], "in_flight": 0, "peak": 0, "finished": 0}
    )

    @property
    def calls(self) -> list[list[str]]:
        return self._stats["calls"]

    @property
    def peak(self) -> int:
        return self._stats["peak"]

    @property
    def finished(self) -> int:
        return self._stats["finished"]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        stats = self._stats
        stats["calls"].append(list(texts))
        stats["in_flight"] += 1
        stats["peak"] = max(stats["peak"], stats["in_flight"])
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            return [list(SKILL_VECTORS.get(text, [0.0, 0.0, 0.0, 0.0])) for text in texts]
        finally:
            stats["in_flight"] -= 1
            stats["finished"] += 1


class BrokenCacheResource(CacheResource):
    """Cache whose every operation fails."""

    async def get(self, key: str) -> bytes | None:
        raise RuntimeError("cache down")

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        raise RuntimeError("cache down")


class InMemoryRecordStore:
    """Record store over dicts of CandidateRecord / JobRecord."""

    def __init__(self, candidates: list[CandidateRecord], jobs: list[JobRecord]):
        self.candidates = {c.id: c for c in candidates}
        self.jobs = {j.id: j for j in jobs}

    async def get_candidate(self, candidate_id: str) -> CandidateRecord:
        if candidate_id not in self.candidates:
            raise NotFoundError("candidate", candidate_id)
        return self.candidates[candidate_id]

    async def get_job(self, job_id: str) -> JobRecord:
        if job_id not in self.jobs:
            raise NotFoundError("job", job_id)
        return self.jobs[job_id]


