"""
HTTP surface: health, dashboard tables, filters, upload and report download.

The app is built without entering its lifespan so each test installs its own store.
"""
import gzip

import pytest
from fastapi.testclient import TestClient

from tourism_insights.api import router_reports, router_upload
from tourism_insights.api.dependencies import set_store
from tourism_insights.data.store import SurveyStore
from tourism_insights.main import create_app

from conftest import SMALL_CONFIG, SURVEY_ROWS, make_row


@pytest.fixture
def client():
    return TestClient(create_app())


@pytest.fixture
def loaded(survey_rows):
    store = SurveyStore(SMALL_CONFIG).load_frame(survey_rows, source="fixture.csv")
    set_store(store)
    yield store
    set_store(None)


@pytest.fixture
def inbox(tmp_path, monkeypatch):
    folder = tmp_path / "inbox"
    monkeypatch.setattr(router_upload, "INBOX_FOLDER", folder)
    monkeypatch.setattr(router_upload, "UPLOADS_FOLDER", tmp_path / "uploads")
    return folder


# =============================================================================
# META
# =============================================================================

def test_health_ready(client, loaded):
    body = client.get("/api/health").json()
    assert body["status"] == "ready"
    assert body["rows"] == 7
    assert body["valid_rows"] == 5
    assert body["dropped_rows"] == 2
    assert body["age_groups"] == 4
    assert body["source"] == "fixture.csv"
    assert body["error"] is None


def test_health_before_startup(client):
    set_store(None)
    assert client.get("/api/health").status_code == 503


def test_failed_load_reports_error(client, tmp_path):
    store = SurveyStore(SMALL_CONFIG).load(tmp_path / "missing.csv")
    set_store(store)
    try:
        health = client.get("/api/health").json()
        assert health["status"] == "error"
        assert "not found" in health["error"]

        resp = client.get("/api/age-groups")
        assert resp.status_code == 503
        assert "failed to load" in resp.json()["detail"]
    finally:
        set_store(None)


def test_empty_store_is_unavailable(client):
    set_store(SurveyStore(SMALL_CONFIG))
    try:
        assert client.get("/api/dashboard").status_code == 503
        assert client.get("/api/health").json()["status"] == "empty"
    finally:
        set_store(None)


# =============================================================================
# DASHBOARD TABLES
# =============================================================================

def test_age_groups(client, loaded):
    assert client.get("/api/age-groups").json() == [
        {"name": "<18", "count": 1},
        {"name": "18-30", "count": 2},
        {"name": "31-45", "count": 1},
        {"name": "60+", "count": 1},
    ]


def test_spending(client, loaded):
    body = client.get("/api/spending").json()
    assert body[1] == {"name": "18-30", "avg_spending": 150.0}
    assert body[2] == {"name": "31-45", "avg_spending": 0.0}


def test_transport_filtered_by_age_group(client, loaded):
    body = client.get("/api/transport", params={"age_group": "18-30"}).json()
    assert body == [
        {"age_group": "18-30", "transport": "Taxi", "count": 1},
        {"age_group": "18-30", "transport": "Bicicleta", "count": 1},
        {"age_group": "18-30", "transport": "Transporte público", "count": 0},
    ]


def test_all_age_groups_is_unfiltered(client, loaded):
    everything = client.get("/api/activities").json()
    assert client.get("/api/activities", params={"age_group": "all"}).json() == everything
    assert len(everything) == 3


def test_invalid_age_group_filter(client, loaded):
    assert client.get("/api/places", params={"age_group": "teens"}).status_code == 400


def test_profiles(client, loaded):
    body = client.get("/api/profiles").json()
    assert list(body) == ["<18", "18-30", "31-45", "60+"]
    assert body["18-30"]["top_transport"] == "Taxi"
    assert body["60+"]["top_place"] == "N/A"


def test_single_profile(client, loaded):
    body = client.get("/api/profiles/18-30").json()
    assert body["top_activity"] == "Urbano"
    assert body["top_activity_count"] == 2
    assert body["avg_spending"] == 150.0
    assert body["spending_distribution"] == {"Alojamiento": 50.0, "Compras": 0.0}


def test_profile_unknown_or_empty_group(client, loaded):
    assert client.get("/api/profiles/teens").status_code == 404
    assert client.get("/api/profiles/46-60").status_code == 404


def test_spending_distribution(client, loaded):
    assert client.get("/api/spending-distribution/18-30").json() == [
        {"name": "Alojamiento", "value": 50.0},
    ]
    assert client.get("/api/spending-distribution/46-60").json() == []
    assert client.get("/api/spending-distribution/kids").status_code == 404


def test_dashboard_payload(client, loaded):
    body = client.get("/api/dashboard").json()
    assert set(body) >= {"age_groups", "spending", "transport", "activities", "places", "profiles"}
    assert body["valid_rows"] == 5


# =============================================================================
# UPLOAD
# =============================================================================

def _csv_bytes(rows) -> bytes:
    import pandas as pd
    return pd.DataFrame(rows).to_csv(index=False).encode("utf-8")


def test_upload_replaces_dataset(client, loaded, inbox):
    content = _csv_bytes([make_row(50, 80), make_row(52, 120)])
    resp = client.post("/api/upload", files={"file": ("nueva_encuesta.csv", content, "text/csv")})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "loaded"
    assert body["rows"] == 2
    assert (inbox / "nueva_encuesta.csv").exists()
    assert client.get("/api/age-groups").json() == [{"name": "46-60", "count": 2}]


def test_upload_gzip(client, loaded, inbox):
    content = gzip.compress(_csv_bytes(SURVEY_ROWS))
    resp = client.post("/api/upload", files={"file": ("datos.csv.gz", content, "application/gzip")})
    assert resp.status_code == 200
    assert resp.json()["name"] == "datos.csv"
    assert resp.json()["valid_rows"] == 5


def test_upload_rejects_non_csv(client, loaded, inbox):
    resp = client.post("/api/upload", files={"file": ("notes.txt", b"hola", "text/plain")})
    assert resp.status_code == 400


def test_upload_unreadable_csv_keeps_current_data(client, loaded, inbox, tmp_path):
    resp = client.post("/api/upload", files={"file": ("vacio.csv", b"", "text/csv")})
    assert resp.status_code == 400
    assert "vacio.csv" in resp.json()["detail"]

    health = client.get("/api/health").json()
    assert health["status"] == "ready"
    assert health["source"] == "fixture.csv"
    assert not (inbox / "vacio.csv").exists()
    assert list((tmp_path / "uploads").iterdir()) == []


def test_rejected_upload_does_not_poison_reload(client, loaded, inbox):
    good = client.post("/api/upload", files={"file": ("encuesta.csv", _csv_bytes(SURVEY_ROWS), "text/csv")})
    assert good.status_code == 200
    bad = client.post("/api/upload", files={"file": ("encuesta_nueva.csv", b"", "text/csv")})
    assert bad.status_code == 400

    loaded.load(inbox=inbox)
    assert loaded.is_loaded
    assert loaded.source == "encuesta.csv"


def test_list_files(client, loaded, inbox):
    client.post("/api/upload", files={"file": ("encuesta.csv", _csv_bytes(SURVEY_ROWS), "text/csv")})
    body = client.get("/api/upload/files").json()
    assert body["count"] == 1
    assert body["files"][0]["name"] == "encuesta.csv"


# =============================================================================
# REPORTS
# =============================================================================

def test_report_json(client, loaded):
    body = client.get("/api/report").json()
    assert body["summary"] == {"rows": 7, "valid_rows": 5, "dropped_rows": 2}
    assert body["profiles"][0]["age_group"] == "<18"


def test_report_excel_download(client, loaded, tmp_path, monkeypatch):
    reports = tmp_path / "reports"
    monkeypatch.setattr(router_reports, "REPORTS_FOLDER", reports)
    resp = client.get("/api/report/excel")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "Survey_Report.xlsx" in resp.headers["content-disposition"]
    assert resp.content[:2] == b"PK"
    # Each download builds its own workbook and removes it afterwards
    assert list(reports.iterdir()) == []


def test_concurrent_excel_downloads_use_separate_files(client, loaded, tmp_path, monkeypatch):
    monkeypatch.setattr(router_reports, "REPORTS_FOLDER", tmp_path / "reports")
    paths = []
    real_generate = router_reports.survey_report.generate_excel

    def recording_generate(store, path):
        paths.append(path)
        return real_generate(store, path)

    monkeypatch.setattr(router_reports.survey_report, "generate_excel", recording_generate)
    for _ in range(2):
        assert client.get("/api/report/excel").status_code == 200
    assert len(set(paths)) == 2


def test_upload_parses_off_the_event_loop(client, loaded, inbox, monkeypatch):
    offloaded = []
    real = router_upload.run_in_threadpool

    async def recording(func, *args, **kwargs):
        offloaded.append(func.__name__)
        return await real(func, *args, **kwargs)

    monkeypatch.setattr(router_upload, "run_in_threadpool", recording)
    resp = client.post("/api/upload", files={"file": ("encuesta.csv", _csv_bytes(SURVEY_ROWS), "text/csv")})
    assert resp.status_code == 200
    assert offloaded == ["_ingest"]
