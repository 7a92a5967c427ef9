"""API-facing Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BrowserCallResponse(BaseModel):
    message: str = "created participant and setup session"
    token: str = Field(description="Join token for the browser media client.")


class PSTNCallResponse(BaseModel):
    status: str = "ringing"


class EndCallResponse(BaseModel):
    status: str = "hungup"


class HealthResponse(BaseModel):
    status: str = "ok"
    session_active: bool
    pending_bridges: int
