"""
Tourism Insights — Configuration: paths, survey columns, category lists.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with TOURISM_DATA_DIR env var for cloud deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("TOURISM_DATA_DIR", str(Path.home() / "Desktop" / "Tourism Insights")))
BASE_FOLDER = _data_dir
INBOX_FOLDER = _data_dir / "inbox"
REPORTS_FOLDER = _data_dir / "reports"
UPLOADS_FOLDER = _data_dir / "uploads"

# ---------------------------------------------------------------------------
# Dataset discovery (keywords matched case-insensitively in filename)
# ---------------------------------------------------------------------------
DEFAULT_DATASET_NAME = "datosEntrenamientoClaude.csv"
DATASET_KEYWORDS = ["datos", "encuesta", "survey", "turismo", "tourism"]

# ---------------------------------------------------------------------------
# Survey columns (header names are matched verbatim)
# ---------------------------------------------------------------------------
AGE_COLUMN = "Edad"
SPENDING_COLUMN = "Valor COP"
COHORT_COLUMN = "cohort"

# ---------------------------------------------------------------------------
# Age cohorts, in the display order of every output table
# ---------------------------------------------------------------------------
COHORTS = ["<18", "18-30", "31-45", "46-60", "60+"]

# (upper bound inclusive, cohort); ages above the last bound are "60+"
COHORT_UPPER_BOUNDS = [
    (30, "18-30"),
    (45, "31-45"),
    (60, "46-60"),
]
MIN_ADULT_AGE = 18
OPEN_COHORT = "60+"

# Reported in place of a top label when every count is zero
NOT_APPLICABLE = "N/A"

# ---------------------------------------------------------------------------
# Category labels (substring-matched against the survey headers)
# On equal counts the earlier label wins.
# ---------------------------------------------------------------------------
TRANSPORT_LABELS = [
    "Vehiculo propio",
    "Vehiculo Plataforma Digital",
    "Alquiler de vehiculo",
    "Vehiculo de familia/amigo",
    "Transporte público",
    "Taxi",
    "Bicicleta",
]

ACTIVITY_LABELS = [
    "Cultural, arte, historico, etc",
    "Ecoturismo",
    "Aviturismo",
    "Agroturismo",
    "Montabike y aventura",
    "Bienestar",
    "Medico",
    "Negocios",
    "Gastronomíco",
    "Urbano",
    "Educativo",
    "Deportivo",
]

PLACE_LABELS = [
    "Iglesias", "Museoa", "Biblitecas", "Zonas de la ciudad", "Parques",
    "Parques de aventuras", "Quebradas / humedales / senderos", "Centros comerciales",
    "Restaurantes", "Plazas de mercado", "Bares / discotecas", "Spa / termales",
    "Centros medicos", "Estadio", "Planetario", "Jardin Botanico",
    "Movistar Arena", "Fincas Agroturisticas", "Universidades", "Teatros",
    "Corferias", "Alrededor de Bogota", "Monserrate",
]

# Spending sub-categories are exact column names, not substrings
SPENDING_CATEGORIES = [
    "Alojamiento",
    "Alimentación",
    "Transporte Interno",
    "Bienes de uso personal",
    "Servicio cultural y recreacional",
    "Compras",
]

# ---------------------------------------------------------------------------
# Report defaults
# ---------------------------------------------------------------------------
CURRENCY = "COP"
REPORT_TITLE = "Tourist Behaviour by Age Group"
