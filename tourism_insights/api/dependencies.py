"""
FastAPI dependencies — SurveyStore singleton, age-group parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Query

from tourism_insights.config import COHORTS
from tourism_insights.data.store import SurveyStore
from tourism_insights.pipeline import ALL_GROUPS, SurveyAnalysis

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: SurveyStore | None = None


def set_store(store: SurveyStore) -> None:
    global _store
    _store = store


def get_store() -> SurveyStore:
    if _store is None:
        raise HTTPException(503, "Data not loaded yet")
    state = _store.state
    if state.error:
        raise HTTPException(503, f"Dataset failed to load: {state.error}")
    if not state.is_loaded:
        raise HTTPException(503, "Data not loaded yet")
    return _store


def get_store_or_empty() -> SurveyStore:
    """Return the store even if it has no data (for health/upload/reload endpoints)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


def get_analysis(store: SurveyStore = Depends(get_store)) -> SurveyAnalysis:
    """Snapshot of the current analysis; stays consistent for the whole request."""
    analysis = store.analysis
    if analysis is None:
        raise HTTPException(503, "Data not loaded yet")
    return analysis


# ---------------------------------------------------------------------------
# Age-group parsing
# ---------------------------------------------------------------------------

def validate_age_group(age_group: str) -> str:
    if age_group not in COHORTS:
        raise HTTPException(404, f"Unknown age group: {age_group}. Valid: {COHORTS}")
    return age_group


def parse_age_group(
    age_group: Optional[str] = Query(None, description="<18|18-30|31-45|46-60|60+|all"),
) -> str | None:
    """Optional age-group filter from query params."""
    if age_group is None or age_group == ALL_GROUPS:
        return None
    if age_group not in COHORTS:
        raise HTTPException(400, f"Invalid age_group: {age_group}")
    return age_group
