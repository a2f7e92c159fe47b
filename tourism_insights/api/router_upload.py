"""
Upload endpoints: replace the survey CSV, list inbox files.
"""
from __future__ import annotations

import gzip
import os
import re
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from fastapi.concurrency import run_in_threadpool

from tourism_insights.config import INBOX_FOLDER, UPLOADS_FOLDER, DEFAULT_DATASET_NAME
from tourism_insights.data.loader import DatasetLoadError, load_dataset
from tourism_insights.data.store import SurveyStore
from tourism_insights.api.dependencies import get_store_or_empty

router = APIRouter(prefix="/api", tags=["upload"])


def _safe_filename(filename: str) -> str:
    name = re.sub(r"[^\w\-. ()]", "_", filename).strip()
    return name or DEFAULT_DATASET_NAME


def _ingest(content: bytes, filename: str, store: SurveyStore) -> dict:
    """Parse the upload from a staging file; only a readable survey reaches the inbox."""
    UPLOADS_FOLDER.mkdir(parents=True, exist_ok=True)
    fd, staged_name = tempfile.mkstemp(prefix="upload_", suffix=".csv", dir=UPLOADS_FOLDER)
    staged = Path(staged_name)
    with os.fdopen(fd, "wb") as f:
        f.write(content)

    try:
        df = load_dataset(staged)
    except DatasetLoadError as exc:
        staged.unlink(missing_ok=True)
        print(f"  Rejected upload '{filename}': {exc}")
        raise HTTPException(400, f"Uploaded file '{filename}' could not be loaded: {exc}")

    INBOX_FOLDER.mkdir(parents=True, exist_ok=True)
    dest = INBOX_FOLDER / _safe_filename(filename)
    shutil.move(str(staged), str(dest))
    store.load_frame(df, source=dest.name)

    return {
        "status": "loaded",
        "name": dest.name,
        "size": len(content),
        "rows": store.row_count(),
        "valid_rows": store.valid_count(),
    }


@router.post("/upload")
async def upload_csv(
    file: UploadFile = File(...),
    store: SurveyStore = Depends(get_store_or_empty),
):
    """Save an uploaded survey CSV to the inbox and rebuild every table from it.

    A file that cannot be parsed is rejected and the current analysis stays in place.
    """
    if not file.filename:
        raise HTTPException(400, "Missing filename")

    # Strip .gz suffix if present (browser gzip-compressed upload)
    filename = file.filename
    is_gzipped = filename.lower().endswith(".csv.gz")
    if is_gzipped:
        filename = filename[:-3]

    if not filename.lower().endswith(".csv"):
        raise HTTPException(400, f"Only .csv files are accepted (got '{file.filename}')")

    content = await file.read()
    if is_gzipped:
        try:
            content = gzip.decompress(content)
        except OSError:
            raise HTTPException(400, f"Corrupt gzip upload: '{file.filename}'")

    return await run_in_threadpool(_ingest, content, filename, store)


@router.get("/upload/files")
def list_files():
    """List all CSV files in the inbox with sizes."""
    files = []
    if INBOX_FOLDER.exists():
        for csv_file in sorted(INBOX_FOLDER.rglob("*.csv")):
            stat = csv_file.stat()
            files.append({
                "name": csv_file.name,
                "path": str(csv_file.relative_to(INBOX_FOLDER)),
                "size": stat.st_size,
                "modified": datetime.fromtimestamp(stat.st_mtime).isoformat(),
            })
    return {"files": files, "count": len(files), "inbox_path": str(INBOX_FOLDER)}
