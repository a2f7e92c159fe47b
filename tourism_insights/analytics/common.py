"""
Safe math helpers used across all analytics modules.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd

from tourism_insights.data.normalize import coerce_numeric


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def pct_of_total(part: float, total: float) -> float:
    """Percentage of total."""
    return safe_divide(part, total) * 100


def valid_mean(series: pd.Series, skip_zero: bool = False) -> float | None:
    """Mean over the finite numeric values only. None when there are none.

    skip_zero drops 0 answers, which in spending columns mean "nothing spent here".
    """
    values = coerce_numeric(series).dropna()
    if skip_zero:
        values = values[values != 0]
    if values.empty:
        return None
    mean = math.fsum(values) / len(values)
    # Float error must not push the mean outside the observed range
    return float(min(max(mean, values.min()), values.max()))


def round2(value: float | None, default: float = 0.0) -> float:
    """Round for exposure; a missing mean is shown as the default."""
    if value is None or pd.isna(value):
        return default
    return round(float(value), 2)


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        clean = {}
        for k, v in obj.items():
            if k is None:
                continue
            if isinstance(k, float) and (math.isnan(k) or math.isinf(k)):
                continue
            clean[str(k) if not isinstance(k, str) else k] = sanitize_for_json(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
