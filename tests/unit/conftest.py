from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from jobquest.api.main import create_app
from jobquest.config import Settings
from jobquest.core.store import JobStore


@pytest.fixture()
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path}/jobs.db"


@pytest.fixture()
def store(database_url) -> JobStore:
    s = JobStore(database_url)
    s.connect()
    return s


@pytest.fixture()
def api(database_url):
    app = create_app(Settings(DATABASE_URL=database_url))
    with TestClient(app) as client:
        yield client
