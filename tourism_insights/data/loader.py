"""
Survey CSV discovery and loading.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from tourism_insights.config import INBOX_FOLDER, DATASET_KEYWORDS, DEFAULT_DATASET_NAME


# Presence flags exported as text are read as booleans
TRUE_VALUES = ["true", "True", "TRUE"]
FALSE_VALUES = ["false", "False", "FALSE"]


class DatasetLoadError(Exception):
    """The survey file could not be found, read or parsed."""


# ---------------------------------------------------------------------------
# CSV discovery
# ---------------------------------------------------------------------------

def discover_datasets(
    inbox: Path = INBOX_FOLDER,
    keywords: list[str] | None = None,
) -> list[Path]:
    """Recursively find survey CSVs in inbox, most recently modified first.

    The default dataset name always qualifies regardless of keywords.
    """
    if keywords is None:
        keywords = DATASET_KEYWORDS

    matches: list[Path] = []
    if not inbox.exists():
        return matches

    for csv_file in inbox.rglob("*.csv"):
        filename_lower = csv_file.name.lower()
        if csv_file.name == DEFAULT_DATASET_NAME or any(kw in filename_lower for kw in keywords):
            matches.append(csv_file)

    matches.sort(key=lambda p: (p.stat().st_mtime, p.name), reverse=True)
    return matches


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_dataset(filepath: Path) -> pd.DataFrame:
    """Read one survey CSV with headers kept verbatim and numeric fields typed.

    Raises DatasetLoadError for a missing, unreadable, unparseable or empty file.
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise DatasetLoadError(f"Dataset not found: {filepath}")

    try:
        df = pd.read_csv(
            filepath,
            skip_blank_lines=True,
            true_values=TRUE_VALUES,
            false_values=FALSE_VALUES,
        )
    except pd.errors.EmptyDataError as exc:
        raise DatasetLoadError(f"Dataset is empty: {filepath.name}") from exc
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise DatasetLoadError(f"Error parsing {filepath.name}: {exc}") from exc

    if df.columns.empty:
        raise DatasetLoadError(f"Dataset has no header row: {filepath.name}")

    # Rows where every field is blank carry no answers
    df = df.dropna(how="all").reset_index(drop=True)
    return df


def load_latest(inbox: Path = INBOX_FOLDER) -> tuple[pd.DataFrame, Path]:
    """Load the most recent survey CSV in the inbox."""
    files = discover_datasets(inbox)
    if not files:
        raise DatasetLoadError(f"No survey CSV found in {inbox}")
    path = files[0]
    df = load_dataset(path)
    print(f"  Loaded {path.name}: {len(df):,} rows, {len(df.columns):,} columns")
    return df, path
