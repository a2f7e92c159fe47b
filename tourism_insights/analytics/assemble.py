"""
Output assembly — flat, ordered record lists for charts, the API and Excel.

Means are rounded to 2 decimals here and nowhere earlier.
"""
from __future__ import annotations

from typing import Mapping

from tourism_insights.analytics.common import round2
from tourism_insights.data.schemas import CategoryKind, CohortStats, Profile


# Transport keeps zero-count rows so a cohort with no transport answers still shows up
DROP_ZERO_ROWS = {
    CategoryKind.TRANSPORT: False,
    CategoryKind.ACTIVITY: True,
    CategoryKind.PLACE: True,
}


def age_group_counts(stats: Mapping[str, CohortStats]) -> list[dict]:
    return [{"name": cohort, "count": s.count} for cohort, s in stats.items()]


def spending_by_age(stats: Mapping[str, CohortStats]) -> list[dict]:
    return [{"name": cohort, "avg_spending": round2(s.mean_spending)} for cohort, s in stats.items()]


def presence_table(
    stats: Mapping[str, CohortStats],
    kind: CategoryKind,
    drop_zero: bool | None = None,
) -> list[dict]:
    """One {age_group, <kind>, count} row per cohort and label."""
    kind = CategoryKind(kind)
    if drop_zero is None:
        drop_zero = DROP_ZERO_ROWS[kind]

    rows = []
    for cohort, s in stats.items():
        for label, count in s.counts(kind).items():
            if drop_zero and count <= 0:
                continue
            rows.append({"age_group": cohort, kind.value: label, "count": count})
    return rows


def transport_by_age(stats: Mapping[str, CohortStats]) -> list[dict]:
    return presence_table(stats, CategoryKind.TRANSPORT)


def activities_by_age(stats: Mapping[str, CohortStats]) -> list[dict]:
    return presence_table(stats, CategoryKind.ACTIVITY)


def places_by_age(stats: Mapping[str, CohortStats]) -> list[dict]:
    return presence_table(stats, CategoryKind.PLACE)


def profile_record(profile: Profile) -> dict:
    return {
        "top_transport": profile.top_transport,
        "top_transport_count": profile.top_transport_count,
        "top_activity": profile.top_activity,
        "top_activity_count": profile.top_activity_count,
        "top_place": profile.top_place,
        "top_place_count": profile.top_place_count,
        "avg_spending": round2(profile.mean_spending),
        "spending_distribution": {
            label: round2(value) for label, value in profile.spending_distribution.items()
        },
    }


def profile_records(profiles: Mapping[str, Profile]) -> dict[str, dict]:
    return {cohort: profile_record(p) for cohort, p in profiles.items()}


def spending_distribution(profile: Profile | None) -> list[dict]:
    """Positive-only (name, value) pairs for share charts.

    Values are raw means; turning them into percentages is left to the display.
    """
    if profile is None:
        return []
    return [
        {"name": label, "value": round2(value)}
        for label, value in profile.spending_distribution.items()
        if value > 0
    ]
