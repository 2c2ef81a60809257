"""Dagster resources: the engine's external collaborators."""

from match_engine.resources.cache import (
    CacheResource,
    InMemoryCacheResource,
    PostgresCacheResource,
)
from match_engine.resources.embeddings import (
    EmbeddingResource,
    MockEmbeddingResource,
    OpenRouterEmbeddingResource,
)
from match_engine.resources.record_store import RecordStoreResource, SqlRecordStoreResource

__all__ = [
    "CacheResource",
    "InMemoryCacheResource",
    "PostgresCacheResource",
    "EmbeddingResource",
    "MockEmbeddingResource",
    "OpenRouterEmbeddingResource",
    "RecordStoreResource",
    "SqlRecordStoreResource",
]
