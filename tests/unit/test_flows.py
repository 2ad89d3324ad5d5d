from fastapi.testclient import TestClient

from jobquest.dashboard.client import ApiError, JobsApiClient
from jobquest.dashboard.flows import (
    CREATE_FAILED_MSG,
    DELETE_FAILED_MSG,
    LOAD_FAILED_MSG,
    REQUIRED_FIELDS_MSG,
    DashboardController,
    FlowStatus,
)


class _FakeClient:
    base_url = "http://fake"

    def __init__(self, jobs=None) -> None:
        self.jobs = list(jobs or [])
        self.fail = set()
        self.calls = []

    def list_jobs(self):
        self.calls.append("list")
        if "list" in self.fail:
            raise ApiError("down")
        return [dict(j) for j in self.jobs]

    def create_job(self, draft):
        self.calls.append("create")
        if "create" in self.fail:
            raise ApiError("down")
        job = {"id": str(len(self.jobs) + 1), "status": "Applied", **draft}
        self.jobs.insert(0, job)
        return job

    def delete_job(self, job_id):
        self.calls.append("delete")
        if "delete" in self.fail:
            raise ApiError("down")
        self.jobs = [j for j in self.jobs if j["id"] != job_id]
        return {"message": "Deleted"}


def test_load_replaces_cached_list() -> None:
    client = _FakeClient([{"id": "1", "status": "Applied"}])
    ctrl = DashboardController(client=client)
    ctrl.jobs = [{"id": "stale", "status": "Offer"}]
    result = ctrl.load()
    assert result.status is FlowStatus.SUCCESS
    assert [j["id"] for j in ctrl.jobs] == ["1"]
    assert ctrl.error == ""


def test_load_failure_keeps_previous_list_and_sets_banner() -> None:
    client = _FakeClient([{"id": "1", "status": "Applied"}])
    ctrl = DashboardController(client=client)
    ctrl.load()
    client.fail.add("list")

    result = ctrl.load()
    assert result.status is FlowStatus.FAILURE
    assert ctrl.error == LOAD_FAILED_MSG
    assert [j["id"] for j in ctrl.jobs] == ["1"]
    assert not ctrl.loading


def test_submit_guard_rejects_before_any_network_call() -> None:
    client = _FakeClient()
    ctrl = DashboardController(client=client)
    ctrl.draft.update({"company": "Google", "role": "  "})
    result = ctrl.submit()
    assert result.status is FlowStatus.FAILURE
    assert ctrl.error == REQUIRED_FIELDS_MSG
    assert client.calls == []
    assert ctrl.draft["company"] == "Google"


def test_submit_success_refreshes_and_clears_draft() -> None:
    client = _FakeClient()
    ctrl = DashboardController(client=client)
    ctrl.draft.update({"company": "Google", "role": "SDE Intern"})
    result = ctrl.submit()
    assert result.status is FlowStatus.SUCCESS
    assert client.calls == ["create", "list"]
    assert [j["company"] for j in ctrl.jobs] == ["Google"]
    assert ctrl.draft == {"company": "", "role": "", "location": "", "status": "Applied"}


def test_submit_failure_keeps_draft() -> None:
    client = _FakeClient()
    client.fail.add("create")
    ctrl = DashboardController(client=client)
    ctrl.draft.update({"company": "Google", "role": "SDE Intern", "location": "Remote"})
    result = ctrl.submit()
    assert result.status is FlowStatus.FAILURE
    assert ctrl.error == CREATE_FAILED_MSG
    assert ctrl.draft["location"] == "Remote"
    assert client.calls == ["create"]


def test_delete_requires_confirmation() -> None:
    client = _FakeClient([{"id": "1", "status": "Applied"}])
    ctrl = DashboardController(client=client)
    ctrl.load()
    result = ctrl.delete("1", confirmed=False)
    assert result.status is FlowStatus.IDLE
    assert client.calls == ["list"]
    assert len(ctrl.jobs) == 1


def test_delete_success_and_failure() -> None:
    client = _FakeClient([{"id": "1", "status": "Applied"}, {"id": "2", "status": "Offer"}])
    ctrl = DashboardController(client=client)
    ctrl.load()

    assert ctrl.delete("1", confirmed=True).status is FlowStatus.SUCCESS
    assert [j["id"] for j in ctrl.jobs] == ["2"]

    client.fail.add("delete")
    assert ctrl.delete("2", confirmed=True).status is FlowStatus.FAILURE
    assert ctrl.error == DELETE_FAILED_MSG
    assert [j["id"] for j in ctrl.jobs] == ["2"]


def test_aggregates_follow_the_current_list() -> None:
    client = _FakeClient([{"id": "1", "status": "Offer", "createdAt": "2025-11-01T00:00:00+00:00"}])
    ctrl = DashboardController(client=client)
    ctrl.load()
    assert ctrl.status_counts()["Offer"] == 1
    assert ctrl.monthly_counts() == [{"month": "11/25", "count": 1}]

    client.jobs = []
    ctrl.load()
    assert ctrl.status_counts()["Offer"] == 0
    assert ctrl.monthly_counts() == []


def test_end_to_end_scenario_against_the_api(api: TestClient) -> None:
    ctrl = DashboardController(client=JobsApiClient("http://testserver", session=api))
    ctrl.load()
    assert ctrl.jobs == []

    ctrl.draft.update({"company": "Google", "role": "SDE Intern"})
    assert ctrl.submit().status is FlowStatus.SUCCESS
    assert len(ctrl.jobs) == 1
    google = ctrl.jobs[0]
    assert google["status"] == "Applied"

    ctrl.draft.update({"company": "Meta", "role": "PM", "status": "Offer"})
    assert ctrl.submit().status is FlowStatus.SUCCESS
    assert ctrl.status_counts() == {"Applied": 1, "Interview": 0, "Offer": 1, "Rejected": 0}
    assert [j["company"] for j in ctrl.jobs] == ["Meta", "Google"]

    assert ctrl.delete(google["id"], confirmed=True).status is FlowStatus.SUCCESS
    assert [j["company"] for j in ctrl.jobs] == ["Meta"]

    ctrl.filter_status = "Offer"
    assert [j["company"] for j in ctrl.visible_jobs()] == ["Meta"]
    ctrl.filter_status = "Rejected"
    assert ctrl.visible_jobs() == []
    ctrl.filter_status = "All"
    assert len(ctrl.visible_jobs()) == 1
