"""
SurveyStore — holds the analysis of the current survey dataset.

Loaded at startup and on every reload, queried on every request.
Each load builds a new SurveyAnalysis and swaps in a new StoreState with a
single assignment, so readers see either the old state or the new one.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from tourism_insights.config import INBOX_FOLDER
from tourism_insights.data.loader import DatasetLoadError, load_dataset, load_latest
from tourism_insights.data.schemas import CategoryConfig, DEFAULT_CATEGORY_CONFIG
from tourism_insights.pipeline import SurveyAnalysis, run_pipeline


STATUS_EMPTY = "empty"
STATUS_READY = "ready"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class StoreState:
    """One published load result. Read it once per request for a consistent view."""
    status: str = STATUS_EMPTY
    analysis: Optional[SurveyAnalysis] = None
    source: Optional[str] = None
    error: Optional[str] = None
    generation: int = 0

    @property
    def is_loaded(self) -> bool:
        return self.status == STATUS_READY and self.analysis is not None


class SurveyStore:
    """In-memory survey analysis with atomic replacement on reload."""

    def __init__(self, config: CategoryConfig = DEFAULT_CATEGORY_CONFIG) -> None:
        self.config = config
        self._state = StoreState()
        self._lock = threading.Lock()
        self._generation = 0

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _publish(
        self,
        generation: int,
        analysis: Optional[SurveyAnalysis],
        source: Optional[str],
        error: Optional[str] = None,
    ) -> bool:
        """Swap in a finished run unless a newer load has started since."""
        with self._lock:
            if generation != self._generation:
                print(f"  Discarding superseded load #{generation} (latest is #{self._generation})")
                return False
            self._state = StoreState(
                status=STATUS_ERROR if error else STATUS_READY,
                analysis=analysis,
                source=source,
                error=error,
                generation=generation,
            )
            return True

    def load(self, path: Path | None = None, inbox: Path = INBOX_FOLDER) -> "SurveyStore":
        """Load a survey CSV (or the newest one in inbox) and rebuild every table.

        A load failure clears the previous analysis and records the error.
        """
        generation = self._begin()
        print("Loading survey data...")
        try:
            if path is not None:
                df = load_dataset(path)
                source = Path(path)
            else:
                df, source = load_latest(inbox)
        except DatasetLoadError as exc:
            print(f"  Load failed: {exc}")
            self._publish(generation, None, None, error=str(exc))
            return self

        analysis = run_pipeline(df, self.config)
        if self._publish(generation, analysis, source.name):
            self._report(analysis)
        return self

    def load_frame(
        self,
        raw: pd.DataFrame | Iterable[Mapping[str, Any]],
        source: str = "<memory>",
    ) -> "SurveyStore":
        """Rebuild from records that are already in memory."""
        generation = self._begin()
        analysis = run_pipeline(raw, self.config)
        if self._publish(generation, analysis, source):
            self._report(analysis)
        return self

    @staticmethod
    def _report(analysis: SurveyAnalysis) -> None:
        print(f"  {analysis.valid_rows:,} of {analysis.raw_rows:,} rows have a valid age "
              f"({analysis.dropped_rows:,} dropped) across {len(analysis.cohorts)} age groups")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def analysis(self) -> Optional[SurveyAnalysis]:
        return self._state.analysis

    @property
    def status(self) -> str:
        return self._state.status

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def source(self) -> Optional[str]:
        return self._state.source

    @property
    def is_loaded(self) -> bool:
        return self._state.is_loaded

    def row_count(self) -> int:
        analysis = self._state.analysis
        return analysis.raw_rows if analysis else 0

    def valid_count(self) -> int:
        analysis = self._state.analysis
        return analysis.valid_rows if analysis else 0

    def cohorts(self) -> list[str]:
        analysis = self._state.analysis
        return analysis.cohorts if analysis else []
