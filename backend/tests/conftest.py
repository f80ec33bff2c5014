"""
Shared fixtures.

The application reads its settings at import time, so the test database and
storage directory are pointed at a temporary directory before anything from
``jobtracker`` is imported.
"""

import os
import tempfile
import uuid

_TEST_DIR = tempfile.mkdtemp(prefix="jobtracker-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DIR}/test.db"
os.environ["STORAGE_DIR"] = os.path.join(_TEST_DIR, "storage")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from jobtracker.services.sources import CanonicalJob, JobSource  # noqa: E402


@pytest.fixture
def make_job():
    """Factory for canonical jobs with sensible defaults."""

    def _make(
        title: str = "Virtual Assistant",
        company: str = "Acme",
        url: str = "https://example.test/job",
        source: JobSource = JobSource.REMOTIVE,
        description: str = "Visa sponsorship available",
        tags=None,
        posted_at=datetime(2025, 9, 1, tzinfo=timezone.utc),
    ) -> CanonicalJob:
        return CanonicalJob(
            title=title,
            company=company,
            url=url,
            source=source,
            description=description,
            tags=list(tags or []),
            posted_at=posted_at,
        )

    return _make


@pytest.fixture
def client():
    """Test client with the application lifespan (tables, storage dir) running."""
    from jobtracker.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def credentials():
    return {"email": f"user-{uuid.uuid4().hex[:12]}@example.com", "password": "s3cret-pass"}


@pytest.fixture
def signed_in_client(client, credentials):
    """Client holding a session cookie for a freshly created account."""
    response = client.post("/api/auth/sign-up", json=credentials)
    assert response.status_code == 201
    response = client.post("/api/auth/sign-in", json=credentials)
    assert response.status_code == 200
    return client
