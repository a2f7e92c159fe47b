"""
Meta endpoints: health, age groups list, reload.
"""
from __future__ import annotations

import threading

from fastapi import APIRouter, Depends

from tourism_insights.data.store import SurveyStore
from tourism_insights.api.dependencies import get_store_or_empty
from tourism_insights.api.response_models import HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: SurveyStore = Depends(get_store_or_empty)):
    state = store.state
    analysis = state.analysis
    return HealthResponse(
        status=state.status,
        rows=analysis.raw_rows if analysis else 0,
        valid_rows=analysis.valid_rows if analysis else 0,
        dropped_rows=analysis.dropped_rows if analysis else 0,
        age_groups=len(analysis.cohorts) if analysis else 0,
        source=state.source,
        error=state.error,
    )


@router.post("/reload")
def reload_data(store: SurveyStore = Depends(get_store_or_empty)):
    """Re-scan inbox and reload the newest survey.

    Returns immediately, reload happens in background.
    """
    def _do_reload():
        store.load()
        print(f"  Reload complete — status {store.status}, {store.row_count():,} rows")

    threading.Thread(target=_do_reload, daemon=True).start()
    return {
        "status": "reloading",
        "message": "Data reload started in background. Check /api/health for the new status.",
    }
