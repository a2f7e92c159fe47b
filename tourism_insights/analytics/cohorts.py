"""
Cohort aggregation — counts, mean spending and category presence per age group.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from tourism_insights.config import COHORTS, COHORT_COLUMN, SPENDING_COLUMN
from tourism_insights.analytics.common import valid_mean
from tourism_insights.analytics.presence import kind_presence
from tourism_insights.data.schemas import CohortStats, SchemaIndex, PRESENCE_KINDS


def _spending_mean(df: pd.DataFrame, column: str) -> float | None:
    """Mean over non-zero numeric amounts; a 0 answer means nothing was spent."""
    if column not in df.columns:
        return None
    return valid_mean(df[column], skip_zero=True)


def cohort_stats(
    cohort: str,
    members: pd.DataFrame,
    schema: SchemaIndex,
    spending_fields: Sequence[str],
    spending_column: str = SPENDING_COLUMN,
) -> CohortStats:
    """Statistics for one cohort's member rows. Values are kept at full precision."""
    spending_means = {}
    for field in spending_fields:
        mean = _spending_mean(members, field)
        spending_means[field] = mean if mean is not None else 0.0

    return CohortStats(
        cohort=cohort,
        count=len(members),
        mean_spending=_spending_mean(members, spending_column),
        spending_means=spending_means,
        presence={kind: kind_presence(members, schema, kind) for kind in PRESENCE_KINDS},
    )


def aggregate_cohorts(
    normalized: pd.DataFrame,
    schema: SchemaIndex,
    spending_fields: Sequence[str],
    spending_column: str = SPENDING_COLUMN,
) -> dict[str, CohortStats]:
    """Group normalized rows by cohort and compute each cohort's statistics.

    Cohorts without members are absent from the result. Keys follow COHORTS order.
    """
    if normalized.empty:
        return {}

    groups = dict(tuple(normalized.groupby(COHORT_COLUMN, sort=False)))
    result: dict[str, CohortStats] = {}
    for cohort in COHORTS:
        members = groups.get(cohort)
        if members is None or members.empty:
            continue
        result[cohort] = cohort_stats(cohort, members, schema, spending_fields, spending_column)
    return result
