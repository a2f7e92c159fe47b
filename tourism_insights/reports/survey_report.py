"""
Survey Report — age-group summary, preferences and cohort profiles as JSON or Excel.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from tourism_insights.config import REPORT_TITLE, CURRENCY
from tourism_insights.data.store import SurveyStore
from tourism_insights.analytics.common import pct_of_total, round2, sanitize_for_json
from tourism_insights.data.schemas import Profile
from tourism_insights.excel.writer import ExcelWriter


AGE_GROUP_COLS = [
    ("name", "text", "Age Group"),
    ("count", "number", "Visitors"),
    ("avg_spending", "currency", f"Avg Spending ({CURRENCY})"),
]

PROFILE_COLS = [
    ("age_group", "text", "Age Group"),
    ("top_transport", "text", "Main Transport"),
    ("top_transport_count", "number", "Count"),
    ("top_activity", "text", "Main Activity"),
    ("top_activity_count", "number", "Count"),
    ("top_place", "text", "Main Place"),
    ("top_place_count", "number", "Count"),
    ("avg_spending", "currency", f"Avg Spending ({CURRENCY})"),
]

SHARE_COLS = [
    ("name", "text", "Spending Category"),
    ("value", "currency", f"Avg Spend ({CURRENCY})"),
    ("share", "percent", "Share"),
]


def _presence_cols(key: str, label: str) -> list[tuple[str, str, str]]:
    return [
        ("age_group", "text", "Age Group"),
        (key, "text", label),
        ("count", "number", "Visitors"),
    ]


def _with_shares(profile: Profile) -> list[dict]:
    """Each positive spending mean as a percentage of the cohort's positive total.

    Shares come from the unrounded means; only the displayed values are rounded.
    """
    positive = {k: v for k, v in profile.spending_distribution.items() if v > 0}
    total = sum(positive.values())
    return [
        {"name": label, "value": round2(value), "share": round(pct_of_total(value, total), 1)}
        for label, value in positive.items()
    ]


def generate_json(store: SurveyStore) -> dict:
    state = store.state
    analysis = state.analysis
    if analysis is None:
        return {"error": state.error or "No survey data loaded"}

    spending = {r["name"]: r["avg_spending"] for r in analysis.spending}
    summary_rows = [
        {**r, "avg_spending": spending.get(r["name"], 0.0)} for r in analysis.age_groups
    ]
    profiles = [
        {"age_group": cohort, **record}
        for cohort, record in analysis.profile_records().items()
    ]
    shares = {c: _with_shares(p) for c, p in analysis.profiles.items()}

    return sanitize_for_json({
        "source": state.source,
        "summary": {
            "rows": analysis.raw_rows,
            "valid_rows": analysis.valid_rows,
            "dropped_rows": analysis.dropped_rows,
        },
        "age_groups": summary_rows,
        "transport": analysis.transport,
        "activities": analysis.activities,
        "places": analysis.places,
        "profiles": profiles,
        "spending_shares": shares,
    })


def generate_excel(store: SurveyStore, output_path: str | Path) -> Path:
    data = generate_json(store)
    if "error" in data:
        raise ValueError(data["error"])

    ew = ExcelWriter()
    s = data["summary"]

    # Summary
    ws = ew.add_sheet("Summary")
    ew.write_title(ws, REPORT_TITLE,
                   f"{data['source'] or 'Survey'}  |  Generated {pd.Timestamp.now():%B %d, %Y}")
    row = ew.write_kpi_row(ws, 4, [
        (s["rows"], "Survey Rows", "number"),
        (s["valid_rows"], "Rows With Valid Age", "number"),
        (s["dropped_rows"], "Rows Dropped", "number"),
    ])
    row = ew.write_section(ws, row, "Visitors and Spending by Age Group")
    largest = max((r["count"] for r in data["age_groups"]), default=0)
    ew.write_table(ws, row, AGE_GROUP_COLS, data["age_groups"],
                   highlight_fn=lambda _, r: "gold" if largest and r["count"] == largest else None)

    # Preferences
    for title, key, col_key, label in [
        ("Transport", "transport", "transport", "Transport"),
        ("Activities", "activities", "activity", "Activity"),
        ("Places", "places", "place", "Place"),
    ]:
        ws = ew.add_sheet(title)
        row = ew.write_section(ws, 1, f"{title} by Age Group")
        ew.write_table(ws, row, _presence_cols(col_key, label), data[key], freeze=True)

    # Profiles
    ws = ew.add_sheet("Profiles")
    row = ew.write_section(ws, 1, "Most Common Choices by Age Group")
    row = ew.write_table(ws, row, PROFILE_COLS, data["profiles"]) + 2
    for cohort, entries in data["spending_shares"].items():
        row = ew.write_section(ws, row, f"Spending Mix: {cohort}")
        if not entries:
            ws.cell(row=row, column=1).value = "No spending data"
            row += 2
            continue
        row = ew.write_table(ws, row, SHARE_COLS, entries, show_total=True) + 2

    return ew.save(output_path)
