"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    rows: int
    valid_rows: int
    dropped_rows: int
    age_groups: int
    source: Optional[str] = None
    error: Optional[str] = None


class AgeGroupCount(BaseModel):
    name: str
    count: int


class AgeGroupSpending(BaseModel):
    name: str
    avg_spending: float


class SpendingShare(BaseModel):
    name: str
    value: float


class ProfileResponse(BaseModel):
    top_transport: str
    top_transport_count: int
    top_activity: str
    top_activity_count: int
    top_place: str
    top_place_count: int
    avg_spending: float
    spending_distribution: dict[str, float]
