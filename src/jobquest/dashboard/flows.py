from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from jobquest.core.models import DEFAULT_STATUS
from jobquest.dashboard.aggregation import (
    ALL_STATUSES,
    filter_by_status,
    monthly_counts,
    status_chart_data,
    status_counts,
)
from jobquest.dashboard.client import ApiError, JobsApiClient

log = logging.getLogger(__name__)

LOAD_FAILED_MSG = "Failed to load jobs from server"
CREATE_FAILED_MSG = "Failed to add job"
DELETE_FAILED_MSG = "Failed to delete job"
REQUIRED_FIELDS_MSG = "Please fill at least Company and Role"


class FlowStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class FlowResult:
    """Outcome of the last run of one async flow (load, create or delete)."""

    status: FlowStatus = FlowStatus.IDLE
    message: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self.status is FlowStatus.PENDING


def empty_draft() -> Dict[str, str]:
    return {"company": "", "role": "", "location": "", "status": DEFAULT_STATUS}


@dataclass
class DashboardController:
    """
    Description: Explicit local state of the dashboard plus its three flows.
    Input: JobsApiClient
    Output: cached job list, form draft, filter selection, banner message
    """

    client: JobsApiClient
    jobs: List[Dict[str, Any]] = field(default_factory=list)
    draft: Dict[str, str] = field(default_factory=empty_draft)
    filter_status: str = ALL_STATUSES
    error: str = ""
    load_result: FlowResult = field(default_factory=FlowResult)
    create_result: FlowResult = field(default_factory=FlowResult)
    delete_result: FlowResult = field(default_factory=FlowResult)

    # ----------------------------
    # Flows
    # ----------------------------
    def load(self) -> FlowResult:
        """Fetch the full list and replace the cached copy."""
        self.load_result = FlowResult(FlowStatus.PENDING)
        self.error = ""
        try:
            jobs = self.client.list_jobs()
        except ApiError as e:
            log.error("Loading jobs failed: %s", e)
            self.error = LOAD_FAILED_MSG
            self.load_result = FlowResult(FlowStatus.FAILURE, LOAD_FAILED_MSG)
            return self.load_result
        self.jobs = list(jobs)
        self.load_result = FlowResult(FlowStatus.SUCCESS)
        return self.load_result

    def submit(self) -> FlowResult:
        """Create a job from the draft, then refresh the list and reset the draft."""
        company = (self.draft.get("company") or "").strip()
        role = (self.draft.get("role") or "").strip()
        if not company or not role:
            self.error = REQUIRED_FIELDS_MSG
            self.create_result = FlowResult(FlowStatus.FAILURE, REQUIRED_FIELDS_MSG)
            return self.create_result

        self.create_result = FlowResult(FlowStatus.PENDING)
        self.error = ""
        try:
            self.client.create_job(dict(self.draft))
        except ApiError as e:
            log.error("Creating job failed: %s", e)
            self.error = CREATE_FAILED_MSG
            self.create_result = FlowResult(FlowStatus.FAILURE, CREATE_FAILED_MSG)
            return self.create_result

        self.load()
        self.draft = empty_draft()
        self.create_result = FlowResult(FlowStatus.SUCCESS)
        return self.create_result

    def delete(self, job_id: str, *, confirmed: bool) -> FlowResult:
        """Delete one job; nothing happens unless the user confirmed."""
        if not confirmed:
            return self.delete_result

        self.delete_result = FlowResult(FlowStatus.PENDING)
        self.error = ""
        try:
            self.client.delete_job(job_id)
        except ApiError as e:
            log.error("Deleting job %s failed: %s", job_id, e)
            self.error = DELETE_FAILED_MSG
            self.delete_result = FlowResult(FlowStatus.FAILURE, DELETE_FAILED_MSG)
            return self.delete_result

        self.load()
        self.delete_result = FlowResult(FlowStatus.SUCCESS)
        return self.delete_result

    # ----------------------------
    # Derived views (recomputed on every call)
    # ----------------------------
    @property
    def loading(self) -> bool:
        return self.load_result.in_flight

    def status_counts(self) -> Dict[str, int]:
        return status_counts(self.jobs)

    def status_chart_data(self) -> List[Dict[str, Any]]:
        return status_chart_data(self.jobs)

    def monthly_counts(self) -> List[Dict[str, Any]]:
        return monthly_counts(self.jobs)

    def visible_jobs(self) -> List[Dict[str, Any]]:
        return filter_by_status(self.jobs, self.filter_status)
