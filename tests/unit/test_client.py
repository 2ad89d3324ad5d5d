import pytest
import requests

from jobquest.dashboard.client import ApiError, JobsApiClient


class _FakeResponse:
    def __init__(self, status_code: int, payload=None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _FakeSession:
    def __init__(self, response=None, exc=None) -> None:
        self.response = response
        self.exc = exc
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


def test_client_builds_urls_from_base_and_passes_timeout() -> None:
    session = _FakeSession(_FakeResponse(200, []))
    client = JobsApiClient("http://127.0.0.1:5000/", timeout=3, session=session)
    assert client.list_jobs() == []
    method, url, kwargs = session.calls[0]
    assert (method, url, kwargs["timeout"]) == ("GET", "http://127.0.0.1:5000/api/jobs", 3)


def test_client_defaults_to_shared_settings_url(monkeypatch) -> None:
    from jobquest.config import get_settings

    monkeypatch.setenv("API_URL", "http://localhost:7777")
    get_settings.cache_clear()
    try:
        client = JobsApiClient(session=_FakeSession())
        assert client.base_url == "http://localhost:7777"
    finally:
        get_settings.cache_clear()


def test_create_drops_empty_optional_fields() -> None:
    session = _FakeSession(_FakeResponse(201, {"id": "1"}))
    client = JobsApiClient("http://api", session=session)
    client.create_job({"company": "Google", "role": "SDE", "location": "", "status": "Applied"})
    assert session.calls[0][2]["json"] == {"company": "Google", "role": "SDE", "status": "Applied"}


def test_delete_quotes_the_id() -> None:
    session = _FakeSession(_FakeResponse(200, {"message": "Deleted"}))
    JobsApiClient("http://api", session=session).delete_job("a/b")
    assert session.calls[0][:2] == ("DELETE", "http://api/api/jobs/a%2Fb")


def test_http_errors_carry_server_message() -> None:
    session = _FakeSession(_FakeResponse(400, {"error": "Company and Role are required"}))
    with pytest.raises(ApiError) as ei:
        JobsApiClient("http://api", session=session).create_job({"company": "x"})
    assert str(ei.value) == "Company and Role are required"
    assert ei.value.status_code == 400


def test_non_json_error_body_still_raises() -> None:
    session = _FakeSession(_FakeResponse(502, None, text="Bad Gateway"))
    with pytest.raises(ApiError) as ei:
        JobsApiClient("http://api", session=session).list_jobs()
    assert ei.value.status_code == 502


def test_transport_errors_become_api_errors() -> None:
    session = _FakeSession(exc=requests.ConnectionError("refused"))
    with pytest.raises(ApiError):
        JobsApiClient("http://api", session=session).list_jobs()
