"""
Record normalizer: cohort boundaries, dropped rows, truthiness, numeric coercion.
"""
import math

import numpy as np
import pandas as pd
import pytest

from tourism_insights.config import COHORTS
from tourism_insights.data.normalize import (
    assign_cohort, coerce_numeric, is_truthy, normalize_records, to_number,
)


# =============================================================================
# COHORT ASSIGNMENT
# =============================================================================

@pytest.mark.parametrize("age, cohort", [
    (0, "<18"),
    (17, "<18"),
    (17.5, "<18"),
    (18, "18-30"),
    (30, "18-30"),
    (30.5, "31-45"),
    (31, "31-45"),
    (45, "31-45"),
    (46, "46-60"),
    (60, "46-60"),
    (61, "60+"),
    (99, "60+"),
    ("25", "18-30"),
])
def test_assign_cohort_boundaries(age, cohort):
    assert assign_cohort(age) == cohort


@pytest.mark.parametrize("age", [None, "abc", "", float("nan"), True, float("inf")])
def test_assign_cohort_rejects_non_numeric(age):
    assert assign_cohort(age) is None


def test_vectorised_cohorts_match_scalar_rule():
    ages = [17, 18, 30, 31, 45, 46, 60, 61, 17.9, 30.1, 45.5, 60.01]
    df = normalize_records([{"Edad": a} for a in ages])
    assert df["cohort"].tolist() == [assign_cohort(a) for a in ages]


def test_every_valid_age_gets_exactly_one_cohort():
    df = normalize_records([{"Edad": a} for a in range(0, 101)])
    assert len(df) == 101
    assert set(df["cohort"]) <= set(COHORTS)


# =============================================================================
# RECORD NORMALIZER
# =============================================================================

def test_drops_rows_without_numeric_age(survey_rows):
    df = normalize_records(survey_rows)
    assert len(df) == len(survey_rows) - 2
    assert "abc" not in df["Edad"].tolist()


def test_preserves_row_order(survey_rows):
    df = normalize_records(survey_rows)
    assert df["Edad"].tolist() == [17, 25, 28, 70, 45]
    assert df["cohort"].tolist() == ["<18", "18-30", "18-30", "60+", "31-45"]


def test_does_not_mutate_input():
    raw = pd.DataFrame({"Edad": [20, "x"], "Taxi": [True, False]})
    before = raw.copy()
    normalize_records(raw)
    pd.testing.assert_frame_equal(raw, before)


def test_boolean_age_is_not_a_number():
    df = normalize_records([{"Edad": True}, {"Edad": 40}])
    assert df["cohort"].tolist() == ["31-45"]


def test_missing_age_column_yields_empty_frame():
    df = normalize_records([{"Valor COP": 10}])
    assert df.empty
    assert "cohort" in df.columns


def test_empty_input():
    df = normalize_records([])
    assert df.empty
    assert "cohort" in df.columns


# =============================================================================
# VALUE HELPERS
# =============================================================================

@pytest.mark.parametrize("value, expected", [
    (None, False),
    (float("nan"), False),
    (pd.NA, False),
    (False, False),
    (np.bool_(False), False),
    (0, False),
    (0.0, False),
    ("", False),
    ("   ", False),
    (True, True),
    (1, True),
    (np.int64(2), True),
    (-1.5, True),
    ("x", True),
    ("Taxi", True),
])
def test_is_truthy(value, expected):
    assert is_truthy(value) is expected


def test_coerce_numeric_ignores_bools_and_junk():
    series = pd.Series([100, "200", "n/a", None, True, float("inf")], dtype=object)
    values = coerce_numeric(series)
    assert values.iloc[0] == 100
    assert values.iloc[1] == 200
    assert values.iloc[2:].isna().all()


def test_coerce_numeric_bool_column():
    assert coerce_numeric(pd.Series([True, False])).isna().all()


def test_to_number():
    assert to_number("12.5") == 12.5
    assert to_number(False) is None
    assert to_number(math.nan) is None
