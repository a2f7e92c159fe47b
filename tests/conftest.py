"""
Shared fixtures: a small survey with every edge case the pipeline cares about.

Cohorts in SURVEY_ROWS:
    <18    → 1 row  (age 17)
    18-30  → 2 rows (ages 25, 28; spending 100 and 200)
    31-45  → 1 row  (age 45; spending not numeric)
    60+    → 1 row  (age 70; no spending, no answers)
    dropped → ages "abc" and None
"""
from pathlib import Path

import pandas as pd
import pytest

from tourism_insights.data.schemas import CategoryConfig


SMALL_CONFIG = CategoryConfig(
    transport=("Taxi", "Bicicleta", "Transporte público"),
    activity=("Ecoturismo", "Urbano"),
    place=("Museoa", "Parques"),
    spending=("Alojamiento", "Compras"),
)


def make_row(age, spending=None, answers: dict | None = None) -> dict:
    """Helper: one survey row with every presence column unanswered."""
    row = {
        "Edad": age,
        "Valor COP": spending,
        "Alojamiento": None,
        "Compras": None,
        "Taxi_a": False,
        "Taxi_b": False,
        "Bicicleta": False,
        "Transporte público": False,
        "Ecoturismo": 0,
        "Urbano": 0,
        "Museoa": "",
        "Parques": "",
        "Parques de aventuras": "",
    }
    row.update(answers or {})
    return row


SURVEY_ROWS = [
    make_row(17, 50, {"Taxi_a": True, "Ecoturismo": 1, "Museoa": "x"}),
    make_row(25, 100, {"Taxi_b": True, "Urbano": 1, "Parques": "si", "Alojamiento": 40, "Compras": 0}),
    make_row(28, 200, {"Bicicleta": True, "Urbano": 1, "Alojamiento": 60}),
    make_row("abc", 999, {"Taxi_a": True}),
    make_row(70),
    make_row(None, 10),
    make_row(45, "n/a", {"Transporte público": True, "Ecoturismo": 1}),
]


def write_survey_csv(path: Path, rows: list[dict]) -> Path:
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


@pytest.fixture
def survey_rows() -> list[dict]:
    return [dict(r) for r in SURVEY_ROWS]


@pytest.fixture
def small_config() -> CategoryConfig:
    return SMALL_CONFIG


@pytest.fixture
def survey_csv(tmp_path) -> Path:
    return write_survey_csv(tmp_path / "datos_encuesta.csv", SURVEY_ROWS)
