"""Dagster definitions for the matching engine.

This module is the entry point for Dagster. It wires together:
- The batch matching job
- Resources (record store, embeddings, skill-match cache)
- Resource selection per environment (development, production)
"""

import os

from dagster import Definitions, EnvVar
from dotenv import load_dotenv

from match_engine.jobs import batch_matching_job
from match_engine.resources import (
    InMemoryCacheResource,
    MockEmbeddingResource,
    OpenRouterEmbeddingResource,
    PostgresCacheResource,
    SqlRecordStoreResource,
)

# Load environment variables from .env file (must be before resource initialization)
load_dotenv()


def get_environment() -> str:
    """Get current environment from env var."""
    return os.getenv("ENVIRONMENT", "development")


# Development resources: deterministic embeddings, process-local cache
dev_resources = {
    "record_store": SqlRecordStoreResource(),
    "embeddings": MockEmbeddingResource(),
    "cache": InMemoryCacheResource(),
}

# Production resources: OpenRouter embeddings, cache table in the shared database
prod_resources = {
    "record_store": SqlRecordStoreResource(),
    "embeddings": OpenRouterEmbeddingResource(
        api_key=EnvVar("OPENROUTER_API_KEY"),
        model=os.getenv("EMBEDDING_MODEL", "openai/text-embedding-3-small"),
    ),
    "cache": PostgresCacheResource(),
}


def get_resources():
    """Get resources based on current environment."""
    if get_environment() in ("production", "staging"):
        return prod_resources
    return dev_resources


all_jobs = [batch_matching_job]

defs = Definitions(
    resources=get_resources(),
    jobs=all_jobs,
)


def main():
    """Entry point for CLI usage."""
    print("Match engine Dagster project loaded successfully!")
    print(f"Environment: {get_environment()}")
    print(f"Jobs: {len(all_jobs)}")
    print("\nAvailable jobs:")
    for job in all_jobs:
        print(f"  - {job.name}")
    print("\nRun 'dagster dev -m match_engine.definitions' to start the development server.")


if __name__ == "__main__":
    main()
