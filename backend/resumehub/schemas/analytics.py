"""Analytics schemas."""

from typing import Any

from pydantic import BaseModel, Field


class AnalyticsEventCreate(BaseModel):
    event_type: str = Field(min_length=1, max_length=100)
    data: dict[str, Any] = {}


class AnalyticsAck(BaseModel):
    logged: bool
