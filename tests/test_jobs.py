"""Tests for the batch_matching Dagster job and the definitions module."""

from match_engine.jobs import BatchMatchConfig, batch_matching_job
from match_engine.matching.types import MatchWeights
from match_engine.resources import (
    InMemoryCacheResource,
    MockEmbeddingResource,
    SqlRecordStoreResource,
)


def seed(store: SqlRecordStoreResource) -> None:
    store.add_candidate(id="c1", skills=["Python", "SQL"], remote_work=True, years_experience=5)
    store.add_candidate(id="c2", skills=["Cooking"], location_city="Lisbon")
    store.add_job(id="j1", required_skills=["Python"], min_experience=3, max_experience=8)


class TestBatchMatchingJob:
    """Tests for batch_matching_job."""

    def test_job_returns_ranked_report(self, sqlite_url):
        """The op runs the engine against the configured resources."""
        store = SqlRecordStoreResource(database_url=sqlite_url)
        seed(store)

        result = batch_matching_job.execute_in_process(
            run_config={
                "ops": {
                    "run_batch_match": {
                        "config": {
                            "candidate_ids": ["c1", "c2", "ghost"],
                            "job_ids": ["j1"],
                            "min_score": 0.3,
                        }
                    }
                }
            },
            resources={
                "record_store": store,
                "embeddings": MockEmbeddingResource(),
                "cache": InMemoryCacheResource(),
            },
        )

        assert result.success
        report = result.output_for_node("run_batch_match")
        assert report["processed"] == 3
        assert [m["candidateId"] for m in report["matches"]] == ["c1"]
        assert report["failures"][0]["candidateId"] == "ghost"
        assert report["failures"][0]["kind"] == "not_found"


class TestBatchMatchConfig:
    """Tests for BatchMatchConfig.weights."""

    def test_unset_weights_keep_defaults(self):
        """Only the overridden weights change."""
        config = BatchMatchConfig(candidate_ids=["c1"], job_ids=["j1"], salary_weight=0.0)

        assert config.weights(MatchWeights()) == MatchWeights(
            skills=0.5, location=0.2, experience=0.2, salary=0.0
        )


class TestDefinitions:
    """Tests for the Dagster definitions entry point."""

    def test_resource_selection(self, monkeypatch):
        """Production and staging use the OpenRouter and Postgres resources."""
        from match_engine.definitions import get_resources

        monkeypatch.setenv("ENVIRONMENT", "production")
        prod = get_resources()
        monkeypatch.setenv("ENVIRONMENT", "development")
        dev = get_resources()

        assert type(prod["embeddings"]).__name__ == "OpenRouterEmbeddingResource"
        assert type(prod["cache"]).__name__ == "PostgresCacheResource"
        assert isinstance(dev["embeddings"], MockEmbeddingResource)
        assert set(dev) == {"record_store", "embeddings", "cache"}
