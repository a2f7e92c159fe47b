"""
Report endpoints — full survey report as JSON or Excel download.
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import FileResponse, JSONResponse

from tourism_insights.config import REPORTS_FOLDER
from tourism_insights.data.store import SurveyStore
from tourism_insights.api.dependencies import get_store
from tourism_insights.reports import survey_report

router = APIRouter(prefix="/api/report", tags=["reports"])

DOWNLOAD_NAME = "Survey_Report.xlsx"


@router.get("")
def report_json(store: SurveyStore = Depends(get_store)):
    return JSONResponse(content=survey_report.generate_json(store))


@router.get("/excel")
def report_excel(background: BackgroundTasks, store: SurveyStore = Depends(get_store)):
    """Build the workbook in its own file; it is deleted once the response is sent."""
    REPORTS_FOLDER.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix="Survey_Report_", suffix=".xlsx", dir=REPORTS_FOLDER)
    os.close(fd)
    path = Path(name)
    try:
        survey_report.generate_excel(store, path)
    except Exception:
        path.unlink(missing_ok=True)
        raise
    background.add_task(path.unlink, missing_ok=True)
    return FileResponse(
        path=str(path),
        filename=DOWNLOAD_NAME,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        background=background,
    )
