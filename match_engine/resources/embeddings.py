"""Embedding providers used by the skill matcher.

EmbeddingResource is the collaborator contract. MockEmbeddingResource returns
deterministic vectors without network calls (development and tests);
OpenRouterEmbeddingResource calls OpenRouter's embeddings API.
"""

import asyncio
import hashlib
import os
import random
import time
from typing import Any

import httpx
from dagster import ConfigurableResource, get_dagster_logger
from pydantic import Field

from match_engine.errors import CollaboratorUnavailableError

OPENROUTER_EMBEDDINGS_URL = "https://openrouter.ai/api/v1/embeddings"


class EmbeddingResource(ConfigurableResource):
    """Turns text into fixed-length float vectors."""

    async def embed(self, text: str) -> list[float]:
        vectors = await self.embed_batch([text])
        return vectors[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        raise NotImplementedError


class MockEmbeddingResource(EmbeddingResource):
    """Mock embedding resource that generates deterministic random vectors.

    The same input text always produces the same unit vector, so identical
    skills have cosine similarity 1.0 and unrelated skills land near 0.
    """

    model_version: str = Field(
        default="mock-embedding-v1",
        description="Version identifier for the mock embedding model",
    )
    dimensions: int = Field(
        default=256,
        description="Vector dimensions",
    )

    def _vector(self, text: str) -> list[float]:
        # Use text hash as seed for reproducible results
        text_hash = hashlib.sha256(text.encode()).hexdigest()
        rng = random.Random(int(text_hash[:8], 16))
        vector = [rng.gauss(0, 1) for _ in range(self.dimensions)]
        magnitude = sum(x * x for x in vector) ** 0.5
        return [x / magnitude for x in vector]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        return [self._vector(text) for text in texts]


class OpenRouterEmbeddingResource(EmbeddingResource):
    """Embeddings from OpenRouter with bounded concurrency and retries.

    Texts are sent in requests of ``request_batch_size``. At most
    ``batch_concurrency`` requests run at once; each is retried with
    exponential backoff before raising CollaboratorUnavailableError.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("OPENROUTER_API_KEY", ""),
        description="OpenRouter API key",
    )
    model: str = Field(
        default="openai/text-embedding-3-small",
        description="Embedding model to use",
    )
    base_url: str = Field(default=OPENROUTER_EMBEDDINGS_URL)
    request_batch_size: int = Field(default=64, description="Texts per API request")
    batch_concurrency: int = Field(default=4, description="Concurrent API requests")
    max_attempts: int = Field(default=3)
    retry_base_delay: float = Field(default=0.3, description="Seconds; doubles per attempt")
    timeout_seconds: float = Field(default=30.0)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds)

    async def _request(self, client: httpx.AsyncClient, texts: list[str]) -> list[list[float]]:
        response = await client.post(
            self.base_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={"model": self.model, "input": texts},
        )
        response.raise_for_status()
        data: dict[str, Any] = response.json()
        items = sorted(data["data"], key=lambda item: item.get("index", 0))
        return [item["embedding"] for item in items]

    async def _request_with_retry(
        self, client: httpx.AsyncClient, texts: list[str]
    ) -> list[list[float]]:
        logger = get_dagster_logger()
        last_error: Exception | None = None
        for attempt in range(self.max_attempts):
            started = time.monotonic()
            try:
                vectors = await self._request(client, texts)
            except (httpx.HTTPError, KeyError, ValueError) as exc:
                last_error = exc
                logger.warning(
                    f"Embedding request failed (attempt {attempt + 1}/{self.max_attempts}): {exc}"
                )
                if attempt + 1 < self.max_attempts:
                    await asyncio.sleep(self.retry_base_delay * 2**attempt)
                continue
            logger.debug(
                f"Embedded {len(texts)} texts with {self.model} "
                f"in {time.monotonic() - started:.2f}s"
            )
            return vectors
        raise CollaboratorUnavailableError("embeddings", str(last_error))

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        size = max(1, self.request_batch_size)
        batches = [texts[i : i + size] for i in range(0, len(texts), size)]
        semaphore = asyncio.Semaphore(max(1, self.batch_concurrency))

        async with self._client() as client:

            async def run(batch: list[str]) -> list[list[float]]:
                async with semaphore:
                    return await self._request_with_retry(client, batch)

            results = await asyncio.gather(*(run(batch) for batch in batches))

        return [vector for batch_vectors in results for vector in batch_vectors]
