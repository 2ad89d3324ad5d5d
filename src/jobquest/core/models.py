from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


JobStatus = Literal["Applied", "Interview", "Offer", "Rejected"]

STATUSES: Tuple[str, ...] = ("Applied", "Interview", "Offer", "Rejected")
DEFAULT_STATUS: JobStatus = "Applied"


def utc_now_iso() -> str:
    """Return current UTC timestamp in ISO format (always with microseconds)."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


class JobCreate(BaseModel):
    """Description: Validated input for a new job application.
    Input: company/role (non-empty), optional location/status
    Output: payload accepted by JobStore.create_job
    """

    model_config = ConfigDict(extra="forbid")

    company: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    location: Optional[str] = None
    status: JobStatus = DEFAULT_STATUS


class JobApplication(BaseModel):
    """Description: A persisted job application record.
    Input: store row
    Output: API payload (camelCase createdAt on the wire)
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    company: str
    role: str
    location: Optional[str] = None
    status: JobStatus = DEFAULT_STATUS
    created_at: str = Field(alias="createdAt")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
