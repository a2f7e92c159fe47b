"""
Cohort profiles — the most common transport, activity and place per age group.

This is what the dashboard calls its "decision tree": a max-frequency pick
over the fixed label lists, not a trained classifier.
"""
from __future__ import annotations

from typing import Mapping, Sequence

from tourism_insights.config import NOT_APPLICABLE
from tourism_insights.data.schemas import CategoryConfig, CategoryKind, CohortStats, Profile


def top_label(counts: Mapping[str, int], labels: Sequence[str]) -> tuple[str, int]:
    """Label with the highest count; ties go to the earlier label in `labels`.

    Returns (NOT_APPLICABLE, 0) when there are no labels or every count is zero.
    """
    best_label, best_count = NOT_APPLICABLE, 0
    for label in labels:
        count = counts.get(label, 0)
        if count > best_count:
            best_label, best_count = label, count
    return best_label, best_count


def summarize_profile(stats: CohortStats, config: CategoryConfig) -> Profile:
    transport, transport_count = top_label(stats.counts(CategoryKind.TRANSPORT), config.transport)
    activity, activity_count = top_label(stats.counts(CategoryKind.ACTIVITY), config.activity)
    place, place_count = top_label(stats.counts(CategoryKind.PLACE), config.place)

    return Profile(
        cohort=stats.cohort,
        top_transport=transport,
        top_transport_count=transport_count,
        top_activity=activity,
        top_activity_count=activity_count,
        top_place=place,
        top_place_count=place_count,
        mean_spending=stats.mean_spending,
        spending_distribution={
            label: stats.spending_means.get(label, 0.0) for label in config.spending
        },
    )


def summarize_profiles(
    stats_by_cohort: Mapping[str, CohortStats],
    config: CategoryConfig,
) -> dict[str, Profile]:
    return {cohort: summarize_profile(stats, config) for cohort, stats in stats_by_cohort.items()}
