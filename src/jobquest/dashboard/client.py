from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from jobquest.config import get_settings


class ApiError(RuntimeError):
    """Raised for transport failures and non-2xx API responses."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _safe_json(resp: Any) -> Any:
    try:
        return resp.json()
    except Exception:
        return {"_raw": resp.text[:2500], "_status_code": resp.status_code}


class JobsApiClient:
    """
    Description: Thin HTTP client for the JobQuest API.
    Input: base URL (defaults to Settings.api_url) + optional requests-like session
    Output: decoded JSON payloads; ApiError on any failure
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Any = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.session = session if session is not None else requests.Session()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"{method} {path} failed: {e}") from e

        payload = _safe_json(resp)
        if resp.status_code >= 400:
            detail = payload.get("error") if isinstance(payload, dict) else None
            raise ApiError(detail or f"{method} {path} returned {resp.status_code}", resp.status_code)
        return payload

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")

    def list_jobs(self) -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/jobs")
        if not isinstance(data, list):
            raise ApiError("GET /api/jobs returned a non-list payload")
        return data

    def create_job(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        body = {k: v for k, v in draft.items() if v not in (None, "")}
        return self._request("POST", "/api/jobs", json=body)

    def delete_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/jobs/{quote(str(job_id), safe='')}")
