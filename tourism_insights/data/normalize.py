"""
Record normalisation: numeric coercion, truthiness, age-cohort assignment.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

from tourism_insights.config import (
    AGE_COLUMN, COHORT_COLUMN, COHORTS, COHORT_UPPER_BOUNDS, MIN_ADULT_AGE, OPEN_COHORT,
)


# ---------------------------------------------------------------------------
# Raw input → DataFrame
# ---------------------------------------------------------------------------

def to_frame(raw: pd.DataFrame | Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Accept either a DataFrame or a sequence of row mappings."""
    if isinstance(raw, pd.DataFrame):
        return raw
    return pd.DataFrame.from_records(list(raw))


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------

def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def coerce_numeric(series: pd.Series) -> pd.Series:
    """Float series where anything that is not a finite number becomes NaN.

    Booleans are presence flags, not numbers, so they never count as valid.
    """
    if pd.api.types.is_bool_dtype(series):
        return pd.Series(np.nan, index=series.index, dtype="float64")
    is_bool = series.map(_is_bool).astype(bool)
    values = pd.to_numeric(series.where(~is_bool), errors="coerce").astype("float64")
    return values.where(np.isfinite(values))


def to_number(value: Any) -> float | None:
    """Scalar counterpart of coerce_numeric()."""
    if value is None or _is_bool(value):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def is_truthy(value: Any) -> bool:
    """Presence flag evaluation: null, NaN, False, 0 and blank strings are falsy."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if _is_bool(value):
        return bool(value)
    try:
        if pd.isna(value):
            return False
    except (TypeError, ValueError):
        pass
    if isinstance(value, (int, float, np.number)):
        return bool(value != 0)
    return bool(value)


# ---------------------------------------------------------------------------
# Cohort assignment
# ---------------------------------------------------------------------------

def assign_cohort(age: Any) -> str | None:
    """Map an age to its cohort label. Returns None for missing/non-numeric ages."""
    number = to_number(age)
    if number is None:
        return None
    if number < MIN_ADULT_AGE:
        return COHORTS[0]
    for upper, cohort in COHORT_UPPER_BOUNDS:
        if number <= upper:
            return cohort
    return OPEN_COHORT


def _cohort_series(ages: pd.Series) -> pd.Series:
    """Vectorised assign_cohort() over an already-coerced age series."""
    bins = [-np.inf, MIN_ADULT_AGE] + [upper for upper, _ in COHORT_UPPER_BOUNDS] + [np.inf]
    # pd.cut gives (a, b] intervals; exactly 18 belongs to "18-30", not "<18"
    cohorts = pd.cut(ages, bins=bins, labels=COHORTS, right=True).astype(object)
    return cohorts.where(ages != MIN_ADULT_AGE, COHORTS[1])


# ---------------------------------------------------------------------------
# Record normaliser
# ---------------------------------------------------------------------------

def normalize_records(
    raw: pd.DataFrame | Iterable[Mapping[str, Any]],
    age_column: str = AGE_COLUMN,
) -> pd.DataFrame:
    """Drop rows without a numeric age and tag the rest with their cohort.

    Row order is preserved. The input frame is not modified.
    """
    df = to_frame(raw)
    ages = coerce_numeric(df[age_column]) if age_column in df.columns else None
    if ages is None or not ages.notna().any():
        out = df.iloc[0:0].copy()
        out[COHORT_COLUMN] = pd.Series(dtype=object)
        return out

    valid = ages.notna()
    out = df.loc[valid].copy()
    out[COHORT_COLUMN] = _cohort_series(ages[valid])
    return out
