from __future__ import annotations

import importlib.util
import json
from typing import Dict, Optional

from dotenv import load_dotenv

from jobquest.config import Settings, get_settings, repo_root
from jobquest.core.store import JobStore, StoreError
from jobquest.dashboard.client import ApiError, JobsApiClient


def _check_module(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


def run_ops_check(settings: Optional[Settings] = None, client: Optional[JobsApiClient] = None) -> Dict[str, object]:
    """
    Description: Local readiness report for the store, the API and installed modules.
    Input: Settings + optional API client (defaults built from the same settings)
    Output: JSON-serializable report
    """
    settings = settings or get_settings()
    checks: Dict[str, object] = {
        "database_url": settings.DATABASE_URL,
        "api_url": settings.api_url,
    }

    try:
        store = JobStore(settings.DATABASE_URL)
        store.connect()
        checks["store"] = {"ok": True, "jobs": store.count_jobs()}
    except StoreError as e:
        checks["store"] = {"ok": False, "error": str(e)}

    client = client or JobsApiClient(settings.api_url)
    try:
        checks["api"] = {"ok": True, **client.health()}
    except ApiError as e:
        checks["api"] = {"ok": False, "error": str(e)}

    checks["python_modules"] = {
        name: _check_module(name)
        for name in ["fastapi", "uvicorn", "streamlit", "requests", "pydantic_settings"]
    }
    return checks


if __name__ == "__main__":
    load_dotenv(repo_root() / ".env")
    get_settings.cache_clear()
    print(json.dumps(run_ops_check(), indent=2))
