"""
pipeline.py
------------
Wires the survey stages together:
    1. normalize_records   →  drops rows without a numeric age, tags cohorts
    2. aggregate_cohorts   →  per-cohort counts, means and presence tallies
    3. summarize_profiles  →  top transport / activity / place per cohort
    4. assemble            →  flat tables for charts, the API and Excel

The whole dataset goes through in one call; nothing is kept between runs.

Usage:
    from tourism_insights.pipeline import run_pipeline

    analysis = run_pipeline(records)
    analysis.age_groups
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from tourism_insights.analytics import assemble
from tourism_insights.analytics.cohorts import aggregate_cohorts
from tourism_insights.analytics.presence import build_schema_index
from tourism_insights.analytics.profiles import summarize_profiles
from tourism_insights.config import AGE_COLUMN, SPENDING_COLUMN
from tourism_insights.data.normalize import normalize_records, to_frame
from tourism_insights.data.schemas import (
    CategoryConfig, CategoryKind, CohortStats, Profile, SchemaIndex, DEFAULT_CATEGORY_CONFIG,
)


ALL_GROUPS = "all"


@dataclass(frozen=True)
class SurveyAnalysis:
    """Everything one pipeline run produces."""
    stats: dict[str, CohortStats]
    profiles: dict[str, Profile]
    schema: SchemaIndex
    age_groups: list[dict] = field(default_factory=list)
    spending: list[dict] = field(default_factory=list)
    transport: list[dict] = field(default_factory=list)
    activities: list[dict] = field(default_factory=list)
    places: list[dict] = field(default_factory=list)
    raw_rows: int = 0
    valid_rows: int = 0

    @property
    def dropped_rows(self) -> int:
        return self.raw_rows - self.valid_rows

    @property
    def cohorts(self) -> list[str]:
        return list(self.stats.keys())

    def table(self, kind: CategoryKind) -> list[dict]:
        kind = CategoryKind(kind)
        if kind == CategoryKind.TRANSPORT:
            return self.transport
        if kind == CategoryKind.ACTIVITY:
            return self.activities
        if kind == CategoryKind.PLACE:
            return self.places
        raise ValueError(f"No presence table for {kind.value}")

    def filter_by_cohort(self, kind: CategoryKind, cohort: Optional[str] = None) -> list[dict]:
        """Presence table restricted to one age group ("all"/None = everything)."""
        rows = self.table(kind)
        if cohort is None or cohort == ALL_GROUPS:
            return list(rows)
        return [r for r in rows if r["age_group"] == cohort]

    def profile_records(self) -> dict[str, dict]:
        return assemble.profile_records(self.profiles)

    def spending_distribution(self, cohort: str) -> list[dict]:
        return assemble.spending_distribution(self.profiles.get(cohort))

    def to_dict(self) -> dict:
        return {
            "rows": self.raw_rows,
            "valid_rows": self.valid_rows,
            "dropped_rows": self.dropped_rows,
            "age_groups": self.age_groups,
            "spending": self.spending,
            "transport": self.transport,
            "activities": self.activities,
            "places": self.places,
            "profiles": self.profile_records(),
            "spending_distribution": {c: self.spending_distribution(c) for c in self.cohorts},
        }


def run_pipeline(
    raw: pd.DataFrame | Iterable[Mapping[str, Any]],
    config: CategoryConfig = DEFAULT_CATEGORY_CONFIG,
    age_column: str = AGE_COLUMN,
    spending_column: str = SPENDING_COLUMN,
) -> SurveyAnalysis:
    """Run every stage over a fully materialised dataset."""
    df = to_frame(raw)
    schema = build_schema_index(df.columns, config)

    normalized = normalize_records(df, age_column=age_column)
    stats = aggregate_cohorts(normalized, schema, config.spending, spending_column)
    profiles = summarize_profiles(stats, config)

    return SurveyAnalysis(
        stats=stats,
        profiles=profiles,
        schema=schema,
        age_groups=assemble.age_group_counts(stats),
        spending=assemble.spending_by_age(stats),
        transport=assemble.transport_by_age(stats),
        activities=assemble.activities_by_age(stats),
        places=assemble.places_by_age(stats),
        raw_rows=len(df),
        valid_rows=len(normalized),
    )
