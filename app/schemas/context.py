"""
Gating context schemas.

The :class:`Context` describes the situation around a protocol request:
how close the next event is, how the last test went, how much the user
slept.  Only the Context Gate reads it.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.labels import Grade
from app.schemas.state_vector import StateVector


class RecentTestResult(BaseModel):
    """Most recent cognitive test outcome."""

    grade: Grade
    type: str
    timestamp: datetime.datetime


class Context(BaseModel):
    """Temporal and safety context for protocol gating."""

    time_until_event: Optional[float] = Field(None, ge=0.0, description="Minutes until the next event")
    recent_test_result: Optional[RecentTestResult] = None
    sleep_hours: Optional[float] = Field(None, ge=0.0, le=24.0)
    fatigue_level: Optional[float] = Field(None, ge=0.0, le=10.0, description="Accepted, not used by any rule")


class ProtocolRequest(BaseModel):
    """Request body for the protocol gating endpoint."""

    state: StateVector = Field(default_factory=StateVector)
    context: Context = Field(default_factory=Context)
    as_of: Optional[datetime.datetime] = Field(None, description="Reference time (defaults to now)")


class ProtocolResponse(BaseModel):
    """Protocols the user may be offered right now."""

    available: list[str]
    triggered_rules: list[str] = Field(..., description="Names of the gating rules that fired")
