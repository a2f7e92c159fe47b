"""
Tourism Insights — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tourism_insights.data.store import SurveyStore
from tourism_insights.api.dependencies import set_store
from tourism_insights.api.router_meta import router as meta_router
from tourism_insights.api.router_dashboard import router as dashboard_router
from tourism_insights.api.router_reports import router as reports_router
from tourism_insights.api.router_upload import router as upload_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the survey at startup."""
    from tourism_insights.config import INBOX_FOLDER, REPORTS_FOLDER, UPLOADS_FOLDER
    for d in [INBOX_FOLDER, REPORTS_FOLDER, UPLOADS_FOLDER]:
        d.mkdir(parents=True, exist_ok=True)

    print(f"  TOURISM_DATA_DIR = {os.environ.get('TOURISM_DATA_DIR', '(not set)')}")
    print(f"  INBOX_FOLDER = {INBOX_FOLDER}")

    store = SurveyStore()
    store.load()
    set_store(store)

    if store.is_loaded:
        print(f"\nTourism Insights ready — {store.row_count():,} rows, "
              f"{len(store.cohorts())} age groups\n")
    else:
        print(f"\nTourism Insights started without data ({store.error}). Upload a survey CSV.\n")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Tourism Insights API",
        description="Tourist behaviour survey — age-group statistics and profiles",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(dashboard_router)
    app.include_router(reports_router)
    app.include_router(upload_router)

    return app


app = create_app()
