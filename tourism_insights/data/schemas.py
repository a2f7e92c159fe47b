"""
Result schemas for the survey aggregation pipeline.

Every structure here is frozen: a load builds a fresh set and the previous
one is discarded as a whole.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from tourism_insights.config import (
    TRANSPORT_LABELS, ACTIVITY_LABELS, PLACE_LABELS, SPENDING_CATEGORIES, NOT_APPLICABLE,
)


class CategoryKind(str, Enum):
    TRANSPORT = "transport"
    ACTIVITY = "activity"
    PLACE = "place"
    SPENDING = "spending"


# Kinds whose labels are substring-matched against feature columns
PRESENCE_KINDS = (CategoryKind.TRANSPORT, CategoryKind.ACTIVITY, CategoryKind.PLACE)


@dataclass(frozen=True)
class CategoryConfig:
    """Static label lists per category kind."""
    transport: tuple[str, ...] = tuple(TRANSPORT_LABELS)
    activity: tuple[str, ...] = tuple(ACTIVITY_LABELS)
    place: tuple[str, ...] = tuple(PLACE_LABELS)
    spending: tuple[str, ...] = tuple(SPENDING_CATEGORIES)

    def labels(self, kind: CategoryKind) -> tuple[str, ...]:
        return getattr(self, CategoryKind(kind).value)


DEFAULT_CATEGORY_CONFIG = CategoryConfig()


@dataclass(frozen=True)
class SchemaIndex:
    """Label → matching column names, per presence kind, for one dataset schema."""
    columns: dict[CategoryKind, dict[str, tuple[str, ...]]]

    def for_kind(self, kind: CategoryKind) -> dict[str, tuple[str, ...]]:
        return self.columns.get(CategoryKind(kind), {})


@dataclass(frozen=True)
class CohortStats:
    """Full-precision statistics for one age cohort."""
    cohort: str
    count: int
    mean_spending: Optional[float]       # None when no valid spending values
    spending_means: dict[str, float]     # 0.0 when a sub-category has no values
    presence: dict[CategoryKind, dict[str, int]] = field(default_factory=dict)

    @property
    def has_spending(self) -> bool:
        return self.mean_spending is not None

    def counts(self, kind: CategoryKind) -> dict[str, int]:
        return self.presence.get(CategoryKind(kind), {})


@dataclass(frozen=True)
class Profile:
    """Most common transport / activity / place of a cohort plus its spending mix."""
    cohort: str
    top_transport: str = NOT_APPLICABLE
    top_transport_count: int = 0
    top_activity: str = NOT_APPLICABLE
    top_activity_count: int = 0
    top_place: str = NOT_APPLICABLE
    top_place_count: int = 0
    mean_spending: Optional[float] = None
    spending_distribution: dict[str, float] = field(default_factory=dict)
