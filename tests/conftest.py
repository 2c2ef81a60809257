"""Shared fixtures: fake embeddings and a SQLite database."""

import pytest

from match_engine.db import create_tables
from tests.fakes import KeyedEmbeddingResource


@pytest.fixture
def embeddings():
    return KeyedEmbeddingResource()


@pytest.fixture
def sqlite_url(tmp_path):
    """URL of a fresh SQLite database with all tables created."""
    url = f"sqlite:///{tmp_path / 'match_engine.db'}"
    create_tables(url)
    return url
