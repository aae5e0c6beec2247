"""
Shared fixtures for all tests.

Sets a test MONGODB_URI before any application import (the Flask app
refuses to start without one) and provides repository fixtures so no
test ever opens a real MongoDB connection.
"""

import os

import pytest
from unittest.mock import MagicMock, patch

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/job_tracker_test")

from src.common.repositories import WriteResult, reset_repository  # noqa: E402
from fixtures.memory_repository import InMemoryJobRepository  # noqa: E402
from fixtures.sample_jobs import sample_documents  # noqa: E402


@pytest.fixture(autouse=True)
def reset_repository_singleton():
    """Each test starts without a cached repository or connection."""
    reset_repository()
    yield
    reset_repository()


@pytest.fixture
def memory_repo():
    """In-memory repository seeded with the sample documents."""
    return InMemoryJobRepository(sample_documents())


@pytest.fixture
def empty_repo():
    return InMemoryJobRepository()


@pytest.fixture
def app():
    """Flask app with test configuration."""
    from frontend.app import app
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app, memory_repo):
    """Test client whose routes use the seeded in-memory repository."""
    with patch("frontend.app._get_repo", return_value=memory_repo):
        with app.test_client() as client:
            yield client


@pytest.fixture
def mock_repo(app):
    """
    Test client backed by a MagicMock repository.

    Yields (client, mock_repo) for tests that need to force store failures
    or inspect the exact repository calls.
    """
    with patch("frontend.app._get_repo") as mock_get_repo:
        repo = MagicMock()
        repo.find_one.return_value = None
        repo.find.return_value = []
        repo.update_one.return_value = WriteResult(matched_count=1, modified_count=1)
        repo.delete_one.return_value = WriteResult(matched_count=1, modified_count=1)
        repo.insert_one.return_value = WriteResult(matched_count=0, modified_count=0, inserted_id="test_id")
        repo.ping.return_value = True
        mock_get_repo.return_value = repo

        with app.test_client() as client:
            yield client, repo
