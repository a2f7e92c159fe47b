"""Survey loading, normalization and result schemas."""
from .loader import discover_datasets, load_dataset, load_latest, DatasetLoadError
from .schemas import CategoryKind, CategoryConfig, CohortStats, Profile, SchemaIndex
from .normalize import normalize_records, assign_cohort, is_truthy, coerce_numeric
