from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class JobCreateRequest(BaseModel):
    """
    Description: Request body for POST /api/jobs.
    Input: company + role (required by the route), optional location/status
    Output: raw fields; the route decides what is valid
    """
    model_config = ConfigDict(extra="ignore")

    company: Optional[str] = None
    role: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None


class MessageResponse(BaseModel):
    """Confirmation payload, e.g. for DELETE /api/jobs/{id}."""
    message: str


class ErrorResponse(BaseModel):
    """Error payload shared by every failing route."""
    error: str


class HealthResponse(BaseModel):
    status: str
    jobs: int
