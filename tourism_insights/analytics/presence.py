"""
Categorical presence — which respondents selected a transport / activity / place.

One logical category can be stored under several headers (variant or
localized question columns). Any of them holding a truthy value counts.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from tourism_insights.data.normalize import is_truthy
from tourism_insights.data.schemas import CategoryConfig, CategoryKind, SchemaIndex, PRESENCE_KINDS


# ---------------------------------------------------------------------------
# Schema index (built once per dataset, never per row)
# ---------------------------------------------------------------------------

def build_column_index(columns: Iterable[str], labels: Sequence[str]) -> dict[str, tuple[str, ...]]:
    """Map each label to the headers that contain it (case-sensitive substring)."""
    headers = [str(c) for c in columns]
    return {label: tuple(h for h in headers if label in h) for label in labels}


def build_schema_index(columns: Iterable[str], config: CategoryConfig) -> SchemaIndex:
    headers = list(columns)
    return SchemaIndex({
        kind: build_column_index(headers, config.labels(kind))
        for kind in PRESENCE_KINDS
    })


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------

def has_category(record: Mapping[str, Any], columns: Sequence[str]) -> bool:
    """True if any of the label's columns is truthy for this record."""
    return any(is_truthy(record.get(col)) for col in columns)


def presence_mask(df: pd.DataFrame, columns: Sequence[str]) -> pd.Series:
    """Row-wise has_category() for a whole frame."""
    cols = [c for c in columns if c in df.columns]
    if not cols:
        return pd.Series(False, index=df.index, dtype=bool)
    return df[cols].map(is_truthy).any(axis=1).astype(bool)


def presence_counts(df: pd.DataFrame, column_index: Mapping[str, Sequence[str]]) -> dict[str, int]:
    """Number of rows selecting each label, in label order."""
    return {label: int(presence_mask(df, cols).sum()) for label, cols in column_index.items()}


def kind_presence(df: pd.DataFrame, schema: SchemaIndex, kind: CategoryKind) -> dict[str, int]:
    return presence_counts(df, schema.for_kind(kind))
